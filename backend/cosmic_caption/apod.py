"""Astronomy Picture of the Day API fetch for random past entries."""

import logging
import random
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo

import httpx
from pydantic import ValidationError

from . import config
from .models import ApodEntry

logger = logging.getLogger(__name__)

_HEADERS = {
    "User-Agent": "CosmicCaption/1.0 (https://github.com/local/cosmic-caption; educational)"
}


class FetchError(Exception):
    """The APOD service could not deliver a usable entry."""


class NoImageError(FetchError):
    """Every sampled date within the attempt budget was a non-image entry."""


@dataclass(frozen=True)
class ReferenceRecord:
    title: str
    explanation: str  # the caption players are scored against
    image_url: str
    date: str
    media_type: str
    hd_url: str | None = None

    @property
    def is_image(self) -> bool:
        return self.media_type == "image"

    @classmethod
    def from_entry(cls, entry: ApodEntry) -> "ReferenceRecord":
        """Build a record from a parsed entry.

        Raises FetchError when title, explanation, url or date is missing.
        """
        missing = [
            name
            for name in ("title", "explanation", "url", "date")
            if getattr(entry, name) is None
        ]
        if missing:
            raise FetchError(f"Malformed APOD payload: missing {', '.join(missing)}")
        return cls(
            title=entry.title,
            explanation=entry.explanation,
            image_url=entry.url,
            date=entry.date,
            media_type=entry.media_type,
            hd_url=entry.hdurl,
        )

    @classmethod
    def from_api(cls, payload: dict) -> "ReferenceRecord":
        """Build a record from an APOD JSON object."""
        return cls.from_entry(parse_entry(payload))


def parse_entry(payload: object) -> ApodEntry:
    """Validate a decoded APOD response. Raises FetchError on bad shapes or types."""
    try:
        return ApodEntry.model_validate(payload)
    except ValidationError as exc:
        raise FetchError(f"Malformed APOD payload: {exc.error_count()} invalid field(s)") from exc


def apod_today() -> date:
    """Latest date APOD can have published, in the service's own timezone."""
    return datetime.now(ZoneInfo(config.APOD_TIMEZONE)).date()


def random_date(
    rng: random.Random, start: date | None = None, today: date | None = None
) -> date:
    """Pick a calendar day uniformly from [start, today], both inclusive."""
    start = start or config.APOD_START_DATE
    today = today or apod_today()
    span = (today - start).days
    if span < 0:
        raise ValueError(f"Start date {start} is after {today}")
    return start + timedelta(days=rng.randint(0, span))


async def fetch_entry(client: httpx.AsyncClient, day: date) -> ApodEntry:
    """Fetch the APOD entry published on *day*.

    Raises FetchError on transport errors, non-2xx statuses and malformed
    payloads.
    """
    params = {"api_key": config.APOD_API_KEY, "date": day.isoformat()}
    try:
        resp = await client.get(config.APOD_API_URL, params=params)
        resp.raise_for_status()
        data = resp.json()
    except httpx.HTTPError as exc:
        raise FetchError(f"APOD request for {day} failed: {exc}") from exc
    except ValueError as exc:
        raise FetchError(f"APOD response for {day} is not JSON") from exc

    return parse_entry(data)


async def fetch_image_record(
    client: httpx.AsyncClient,
    rng: random.Random,
    max_attempts: int | None = None,
    today: date | None = None,
) -> ReferenceRecord:
    """Fetch random entries until one is an image.

    Each attempt samples a fresh date. Non-image entries are skipped before
    their other fields are checked. Gives up with NoImageError after
    *max_attempts* non-image entries; any FetchError ends the loop at once.
    """
    if max_attempts is None:
        max_attempts = config.MAX_FETCH_ATTEMPTS
    for attempt in range(1, max_attempts + 1):
        day = random_date(rng, today=today)
        entry = await fetch_entry(client, day)
        if entry.media_type == "image":
            record = ReferenceRecord.from_entry(entry)
            logger.info("[apod] Fetched %s: %s", record.date, record.title)
            return record
        logger.info(
            "[apod] %s is a %s, not an image (attempt %d/%d). Retrying.",
            day,
            entry.media_type,
            attempt,
            max_attempts,
        )
    raise NoImageError(f"No image entry found after {max_attempts} attempts")


def make_client() -> httpx.AsyncClient:
    return httpx.AsyncClient(timeout=config.FETCH_TIMEOUT, headers=_HEADERS)
