"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from random import Random
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from pathlib import Path

from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded

from api.routes import game, settings
from config import AppConfig, config
from core.game import GameState
from core.session import SessionStore
from core.storage import create_store
from logging_utils import setup_logging

logger = logging.getLogger(__name__)

# Initialize rate limiter
limiter = Limiter(
    key_func=get_remote_address,
    enabled=config.rate_limit.enabled,
    default_limits=[f"{config.rate_limit.requests_per_minute}/minute"],
)


def _rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Handle rate limit exceeded errors."""
    return JSONResponse(
        status_code=429,
        content={"detail": f"Rate limit exceeded: {exc.detail}"},
    )


def build_game(app_config: AppConfig = config, rng: Random | None = None) -> GameState:
    """Build and initialize the single game served by this process."""
    store = create_store(
        app_config.storage.backend,
        path=app_config.storage.path,
        redis_url=app_config.redis.url,
    )
    session_store = SessionStore(
        store,
        settings_key=f"{app_config.storage.prefix}{app_config.game.settings_key}",
        state_key=f"{app_config.storage.prefix}{app_config.game.state_key}",
    )
    game_state = GameState(session_store, rng=rng)
    game_state.init()
    return game_state


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Build the game on startup unless one was injected."""
    if getattr(app.state, "game", None) is None:
        setup_logging(config.log_level)
        app.state.game = build_game()
        logger.info("Serving %s-backed card counter", config.storage.backend)
    yield


def create_app(game_state: GameState | None = None) -> FastAPI:
    """
    Create the API application.

    Args:
        game_state: An initialized game to serve; built from config on
            startup when omitted
    """
    app = FastAPI(
        title="Card Counting Trainer",
        description="Shoe and running count practice API",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.game = game_state

    # Add rate limiter to app state and exception handler
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    # CORS middleware with configurable origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors.allowed_origins,
        allow_credentials=config.cors.allow_credentials,
        allow_methods=config.cors.allow_methods,
        allow_headers=config.cors.allow_headers,
    )

    @app.get("/api/health")
    @limiter.limit(f"{config.rate_limit.requests_per_minute}/minute")
    async def health_check(request: Request) -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy"}

    # Include routers
    app.include_router(game.router, prefix="/api/game", tags=["game"])
    app.include_router(settings.router, prefix="/api/settings", tags=["settings"])

    # Mount static files (must be last since it's a catch-all)
    frontend_path = Path(__file__).parent.parent / "frontend"
    if frontend_path.exists():
        app.mount("/", StaticFiles(directory=str(frontend_path), html=True), name="static")

    return app


app = create_app()
