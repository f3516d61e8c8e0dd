import functools
import logging
import random
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.staticfiles import StaticFiles

from . import apod, config
from .models import (
    DescriptionRequest,
    DraftRequest,
    ImageView,
    ResultView,
    RevealView,
    StateResponse,
    WordCountResponse,
)
from .session import (
    MAX_HINTS,
    GameController,
    Idle,
    Playing,
    SessionState,
    Submitted,
    can_request_hint,
    hints_remaining,
)
from .text import count_words

logger = logging.getLogger(__name__)

# Matched words shown before collapsing into "+N more"
_MATCH_PREVIEW = 20


@asynccontextmanager
async def lifespan(app: FastAPI):
    rng = random.Random(config.RANDOM_SEED)
    async with apod.make_client() as client:
        app.state.game = GameController(
            fetch=functools.partial(apod.fetch_image_record, client, rng),
            rng=rng,
        )
        logger.info("[game] Ready (APOD entries since %s).", config.APOD_START_DATE)
        yield


app = FastAPI(lifespan=lifespan)

_STATIC_DIR = Path(__file__).parent.parent / "static"


def _game(request: Request) -> GameController:
    return request.app.state.game


def _view(game: GameController) -> StateResponse:
    """Serialise the current state. The caption stays hidden until submission."""
    state: SessionState = game.state
    common = {
        "loading": game.loading,
        "max_hints": MAX_HINTS,
        "hints_remaining": hints_remaining(state),
        "can_hint": can_request_hint(state),
    }

    if isinstance(state, Idle):
        return StateResponse(phase="idle", error=state.error, **common)

    image = ImageView(
        date=state.record.date, url=state.record.image_url, hd_url=state.record.hd_url
    )
    if isinstance(state, Playing):
        return StateResponse(
            phase="playing",
            hints_used=state.hints_used,
            revealed_hints=list(state.revealed_hints),
            image=image,
            **common,
        )

    shown, extra = state.result.preview(_MATCH_PREVIEW)
    return StateResponse(
        phase="submitted",
        hints_used=state.hints_used,
        revealed_hints=list(state.revealed_hints),
        image=image,
        reveal=RevealView(
            title=state.record.title,
            explanation=state.record.explanation,
            description=state.description,
        ),
        result=ResultView(
            score=state.result.score,
            matched_words=list(shown),
            extra_matches=extra,
            total_user_words=state.result.total_user_words,
        ),
        **common,
    )


# ---------------------------------------------------------------------------
# API routes
# ---------------------------------------------------------------------------
# Routes touching the game are async: transitions must run on the event loop,
# never in the threadpool, so they cannot interleave.


@app.get("/api/state", response_model=StateResponse)
async def get_state(request: Request):
    return _view(_game(request))


@app.post("/api/start", response_model=StateResponse)
async def post_start(request: Request):
    """Start a round, or retry after a failed fetch."""
    game = _game(request)
    await game.start()
    return _view(game)


@app.post("/api/hint", response_model=StateResponse)
async def post_hint(request: Request):
    game = _game(request)
    game.hint()
    return _view(game)


@app.post("/api/submit", response_model=StateResponse)
async def post_submit(body: DescriptionRequest, request: Request):
    game = _game(request)
    game.submit(body.description)
    return _view(game)


@app.post("/api/play-again", response_model=StateResponse)
async def post_play_again(request: Request):
    game = _game(request)
    game.play_again()
    return _view(game)


@app.post("/api/word-count", response_model=WordCountResponse)
def post_word_count(body: DraftRequest):
    return WordCountResponse(words=count_words(body.description))


# Mount static files last so API routes take priority
if _STATIC_DIR.is_dir():
    app.mount("/", StaticFiles(directory=str(_STATIC_DIR), html=True), name="static")
