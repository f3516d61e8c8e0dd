"""Game session state machine: idle → playing → submitted → idle.

Every state is an immutable value. The transition functions return a new
state, or the state they were given when the action does not apply to it.
``GameController`` owns the single current state and the network fetch that
starts a round.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, replace
from typing import Awaitable, Callable, Union

from .apod import FetchError, ReferenceRecord
from .scoring import ScoreResult, score
from .text import HINT_MIN_LENGTH, normalize

logger = logging.getLogger(__name__)

MAX_HINTS = 3

FETCH_ERROR_MESSAGE = "Failed to load image. Please try again."


@dataclass(frozen=True)
class Idle:
    error: str | None = None


@dataclass(frozen=True)
class Playing:
    record: ReferenceRecord
    hint_candidates: tuple[str, ...]
    hints_used: int = 0
    revealed_hints: tuple[str, ...] = ()


@dataclass(frozen=True)
class Submitted:
    record: ReferenceRecord
    result: ScoreResult
    hints_used: int
    revealed_hints: tuple[str, ...]
    description: str


SessionState = Union[Idle, Playing, Submitted]


def hint_candidates(explanation: str, rng: random.Random) -> tuple[str, ...]:
    """Unique caption words of 4+ characters, shuffled once."""
    words = [
        w for w in dict.fromkeys(normalize(explanation, HINT_MIN_LENGTH)) if len(w) >= 4
    ]
    rng.shuffle(words)
    return tuple(words)


# ---------------------------------------------------------------------------
# Transitions
# ---------------------------------------------------------------------------


def begin(record: ReferenceRecord, rng: random.Random) -> Playing:
    return Playing(record=record, hint_candidates=hint_candidates(record.explanation, rng))


def can_request_hint(state: SessionState) -> bool:
    return (
        isinstance(state, Playing)
        and state.hints_used < MAX_HINTS
        and state.hints_used < len(state.hint_candidates)
    )


def hints_remaining(state: SessionState) -> int:
    if isinstance(state, (Playing, Submitted)):
        return MAX_HINTS - state.hints_used
    return MAX_HINTS


def request_hint(state: SessionState) -> SessionState:
    if not can_request_hint(state):
        return state
    next_hint = state.hint_candidates[state.hints_used]
    return replace(
        state,
        hints_used=state.hints_used + 1,
        revealed_hints=state.revealed_hints + (next_hint,),
    )


def submit(state: SessionState, description: str) -> SessionState:
    if not isinstance(state, Playing) or not description.strip():
        return state
    return Submitted(
        record=state.record,
        result=score(description, state.record.explanation),
        hints_used=state.hints_used,
        revealed_hints=state.revealed_hints,
        description=description,
    )


def play_again(state: SessionState) -> SessionState:
    if not isinstance(state, Submitted):
        return state
    return Idle()


# ---------------------------------------------------------------------------
# Controller
# ---------------------------------------------------------------------------


class GameController:
    """Holds the one active game and serialises round starts.

    *fetch* is awaited to obtain the next image record; it should raise
    FetchError on failure.
    """

    def __init__(
        self,
        fetch: Callable[[], Awaitable[ReferenceRecord]],
        rng: random.Random | None = None,
    ) -> None:
        self._fetch = fetch
        self._rng = rng or random.Random()
        self.state: SessionState = Idle()
        self.loading = False

    async def start(self) -> SessionState:
        """Fetch a record and enter Playing. Also serves as retry after an error.

        While a fetch is in flight further calls return the current state
        untouched, so only one fetch outcome is ever applied.
        """
        if self.loading or not isinstance(self.state, Idle):
            return self.state

        self.loading = True
        self.state = Idle()
        try:
            record = await self._fetch()
        except FetchError as exc:
            logger.warning("[game] Fetch failed (%s).", exc)
            self.state = Idle(error=FETCH_ERROR_MESSAGE)
            return self.state
        finally:
            self.loading = False

        self.state = begin(record, self._rng)
        logger.info(
            "[game] Round started: %s (%d hint candidates).",
            record.date,
            len(self.state.hint_candidates),
        )
        return self.state

    def hint(self) -> SessionState:
        self.state = request_hint(self.state)
        return self.state

    def submit(self, description: str) -> SessionState:
        self.state = submit(self.state, description)
        if isinstance(self.state, Submitted):
            logger.info(
                "[game] Submitted: %d/%d words matched.",
                self.state.result.score,
                self.state.result.total_user_words,
            )
        return self.state

    def play_again(self) -> SessionState:
        self.state = play_again(self.state)
        return self.state
