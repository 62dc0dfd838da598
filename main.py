"""Main entry point for the Soul Bridge terminal FastAPI application.

This module creates the FastAPI app that serves the game to a presentation
front end (terminal view plus file-tree sidebar).

To run the development server:
    uvicorn main:app --reload

To run in production:
    uvicorn main:app --host 0.0.0.0 --port 8000

Settings are read from SOUL_BRIDGE_* environment variables (see game.config).
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from pydantic import ValidationError

from api.dependencies import initialize_game_session, shutdown_game_session
from api.exceptions import (
    game_state_error_handler,
    generic_exception_handler,
    runtime_error_handler,
    validation_exception_handler,
    value_error_handler,
)
from api.routes import game as game_routes
from api.routes import terminal as terminal_routes
from game.config import GameSettings
from game.exceptions import GameStateError

logger = logging.getLogger(__name__)

VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the game session at startup and stop it at shutdown.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control back to FastAPI to handle requests.
    """
    settings = GameSettings.from_env()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    logger.info("Starting Soul Bridge terminal")
    session = initialize_game_session(settings)
    logger.info(f"Session {session.session_id} ready in {session.phase.value}")

    yield

    logger.info("Shutting down Soul Bridge terminal")
    shutdown_game_session()


app = FastAPI(
    title="Soul Bridge Terminal",
    description="Narrative puzzle played through a simulated shell",
    version=VERSION,
    lifespan=lifespan,
)

# Specific exceptions before general ones
app.add_exception_handler(GameStateError, game_state_error_handler)
app.add_exception_handler(ValidationError, validation_exception_handler)
app.add_exception_handler(ValueError, value_error_handler)
app.add_exception_handler(RuntimeError, runtime_error_handler)
app.add_exception_handler(Exception, generic_exception_handler)

app.include_router(terminal_routes.router)
app.include_router(game_routes.router)


@app.get("/")
async def root():
    """Root endpoint - returns a welcome message."""
    return {
        "message": "Welcome to the Soul Bridge terminal API",
        "version": VERSION,
        "docs_url": "/docs",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring."""
    return {"status": "healthy"}
