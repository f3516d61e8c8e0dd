from typing import Literal

from pydantic import BaseModel, Field, field_validator


class DescriptionRequest(BaseModel):
    description: str = Field(min_length=1)

    @field_validator("description")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("description must not be blank")
        return value


class DraftRequest(BaseModel):
    description: str = ""


class WordCountResponse(BaseModel):
    words: int


class ImageView(BaseModel):
    date: str
    url: str
    hd_url: str | None = None


class RevealView(BaseModel):
    title: str
    explanation: str
    description: str  # what the player wrote


class ResultView(BaseModel):
    score: int
    matched_words: list[str]     # capped preview, first-occurrence order
    extra_matches: int           # matches beyond the preview
    total_user_words: int


class StateResponse(BaseModel):
    phase: Literal["idle", "playing", "submitted"]
    loading: bool = False
    error: str | None = None
    max_hints: int
    hints_used: int = 0
    hints_remaining: int
    can_hint: bool = False
    revealed_hints: list[str] = []
    image: ImageView | None = None        # hidden while idle
    reveal: RevealView | None = None      # only once submitted
    result: ResultView | None = None      # only once submitted


class ApodEntry(BaseModel):
    """Raw APOD JSON object. Only media_type is guaranteed for every entry."""

    media_type: str
    date: str | None = None
    title: str | None = None
    explanation: str | None = None
    url: str | None = None               # absent on some "other" entries
    hdurl: str | None = None
