"""Tests for vocabulary-overlap scoring."""

from cosmic_caption.scoring import ScoreResult, score

COMET_CAPTION = "A bright comet streaks across the night sky near Jupiter."


class TestScore:
    def test_comet_scenario(self):
        result = score("I saw a bright comet near Jupiter last night.", COMET_CAPTION)
        assert result.score == 5
        assert result.matched_words == ("bright", "comet", "near", "jupiter", "night")
        assert result.total_user_words == 7

    def test_empty_submission(self):
        assert score("", COMET_CAPTION) == ScoreResult(
            score=0, matched_words=(), total_user_words=0
        )

    def test_only_stopwords(self):
        result = score("the and of", COMET_CAPTION)
        assert result.total_user_words == 0
        assert result.score == 0

    def test_duplicates_count_towards_total_only(self):
        result = score("comet comet comet", COMET_CAPTION)
        assert result.score == 1
        assert result.matched_words == ("comet",)
        assert result.total_user_words == 3

    def test_first_occurrence_order(self):
        result = score("jupiter comet jupiter bright", COMET_CAPTION)
        assert result.matched_words == ("jupiter", "comet", "bright")

    def test_no_overlap(self):
        result = score("galaxy spiral arms", COMET_CAPTION)
        assert result.score == 0
        assert result.total_user_words == 3

    def test_punctuation_does_not_block_match(self):
        assert score("Comet!", COMET_CAPTION).matched_words == ("comet",)

    def test_idempotent(self):
        text = "a comet near the bright sky"
        assert score(text, COMET_CAPTION) == score(text, COMET_CAPTION)

    def test_adding_words_never_lowers_score(self):
        base = "comet"
        before = score(base, COMET_CAPTION).score
        for extra in ("night", "galaxy", "streaks across", "nebula sky"):
            base = f"{base} {extra}"
            after = score(base, COMET_CAPTION).score
            assert after >= before
            before = after

    def test_invariants(self):
        result = score("bright bright comet dust", COMET_CAPTION)
        assert result.score == len(result.matched_words) <= result.total_user_words


class TestPreview:
    def test_caps_and_reports_overflow(self):
        words = tuple(f"word{i}" for i in range(25))
        result = ScoreResult(score=25, matched_words=words, total_user_words=25)
        shown, extra = result.preview()
        assert shown == words[:20]
        assert extra == 5

    def test_short_list_is_whole(self):
        result = score("comet night", COMET_CAPTION)
        assert result.preview() == (("comet", "night"), 0)
