"""Centralised runtime configuration loaded from environment variables."""

import os
from datetime import date

APOD_API_KEY: str = os.getenv("APOD_API_KEY", "DEMO_KEY")
APOD_API_URL: str = os.getenv("APOD_API_URL", "https://api.nasa.gov/planetary/apod")
APOD_START_DATE: date = date.fromisoformat(os.getenv("APOD_START_DATE", "2018-01-01"))
# APOD publishes on US Eastern time; later dates do not exist yet
APOD_TIMEZONE: str = os.getenv("APOD_TIMEZONE", "America/New_York")

FETCH_TIMEOUT: float = float(os.getenv("FETCH_TIMEOUT", "15"))
MAX_FETCH_ATTEMPTS: int = int(os.getenv("MAX_FETCH_ATTEMPTS", "5"))

# Unset → fresh entropy on every process start
_seed = os.getenv("RANDOM_SEED")
RANDOM_SEED: int | None = int(_seed) if _seed else None
