"""Dependency injection providers for the FastAPI application.

This module holds the process-wide GameSession and exposes it to route
handlers through FastAPI's dependency system.
"""

import logging
from typing import Annotated, Optional

from fastapi import Depends

from game.config import GameSettings
from game.session import GameSession

logger = logging.getLogger(__name__)


# One game per server process, created when the app starts.
_game_session: GameSession | None = None


def get_game_session() -> GameSession:
    """Get the shared GameSession instance.

    Returns:
        The shared GameSession.

    Raises:
        RuntimeError: If the session hasn't been initialized yet.

    Example:
        @router.get("/some-endpoint")
        async def my_handler(session: GameSessionDep):
            return session.status()
    """
    if _game_session is None:
        raise RuntimeError(
            "GameSession not initialized. Call initialize_game_session() first."
        )

    return _game_session


def initialize_game_session(settings: Optional[GameSettings] = None) -> GameSession:
    """Create and start the shared GameSession.

    Called once when the FastAPI app starts. Any save stored for the
    configured session id is loaded; otherwise the game boots fresh.

    Args:
        settings: Settings to use (read from the environment if omitted).

    Returns:
        The newly started GameSession.
    """
    global _game_session

    settings = settings or GameSettings.from_env()
    _game_session = GameSession.from_settings(settings)
    _game_session.start(
        auto_advance=settings.auto_advance,
        time_scale=settings.time_scale,
    )
    return _game_session


def shutdown_game_session() -> None:
    """Stop the shared GameSession's loop and drop it."""
    global _game_session

    if _game_session is not None and _game_session.is_started:
        _game_session.stop()

    _game_session = None


GameSessionDep = Annotated[GameSession, Depends(get_game_session)]
