"""Vocabulary-overlap scoring of a player description against a caption."""

from dataclasses import dataclass

from .text import SCORE_MIN_LENGTH, normalize


@dataclass(frozen=True)
class ScoreResult:
    score: int
    matched_words: tuple[str, ...]  # unique, in first-occurrence order
    total_user_words: int  # qualifying user tokens, duplicates included

    def preview(self, limit: int = 20) -> tuple[tuple[str, ...], int]:
        """Return the first *limit* matched words and how many were cut off."""
        shown = self.matched_words[:limit]
        return shown, len(self.matched_words) - len(shown)


def score(user_text: str, reference_text: str) -> ScoreResult:
    user_words = normalize(user_text, SCORE_MIN_LENGTH)
    reference_words = set(normalize(reference_text, SCORE_MIN_LENGTH))

    # dict.fromkeys keeps the first occurrence of each match
    unique_matches = tuple(
        dict.fromkeys(w for w in user_words if w in reference_words)
    )
    return ScoreResult(
        score=len(unique_matches),
        matched_words=unique_matches,
        total_user_words=len(user_words),
    )
