"""Game lifecycle sub-client (/game/*).

This is an internal module. Import from `client` instead.
"""

from typing import Any, Optional

from pydantic import BaseModel

from client._base import AsyncBaseClient, BaseClient
from client.models import ClockResponse, GameStatusResponse


class RestoreResult(BaseModel):
    """Result of restoring the checkpoint.

    Attributes:
        restored: False when no checkpoint existed (nothing changed).
        game_state: Phase after the call.
        current_path: Prompt path after the call.
    """

    restored: bool
    game_state: str
    current_path: str


class FiredContinuation(BaseModel):
    """A delayed event that fired during an advance."""

    continuation_id: str
    kind: str
    status: str
    error: Optional[str] = None


class AdvanceResult(BaseModel):
    """Result of advancing game time.

    Attributes:
        previous_time: Game time before (ISO 8601).
        current_time: Game time after (ISO 8601).
        fired: Continuations that fired, in order.
        game_state: Phase after the advance.
    """

    previous_time: str
    current_time: str
    fired: list[FiredContinuation]
    game_state: str


class GameClient(BaseClient):
    """Game state, snapshot, restore, restart and time control.

    Example:
        client.game.advance(seconds=5)
        if client.game.state().game_state == "WIN":
            ...
    """

    _BASE_PATH = "/game"

    def state(self) -> GameStatusResponse:
        return self._get("/state", GameStatusResponse)

    def snapshot(self) -> dict[str, Any]:
        """Full save snapshot (camelCase keys, left as a plain dict)."""
        return self._http.get(f"{self._BASE_PATH}/snapshot")

    def restore(self) -> RestoreResult:
        """Restore the pre-ending checkpoint.

        Raises:
            ConflictError: If the game is not on an ending (WIN/LOSE).
        """
        return self._post("/restore", RestoreResult)

    def restart(self) -> GameStatusResponse:
        """Erase saves and boot again with default content."""
        return self._post("/restart", GameStatusResponse)

    def advance(self, seconds: float) -> AdvanceResult:
        """Advance game time by ``seconds``, firing whatever falls due.

        Raises:
            BadRequestError: If the clock is paused.
        """
        return self._post("/time/advance", AdvanceResult, json={"seconds": seconds})

    def pause(self) -> ClockResponse:
        """Freeze game time; pending delays wait until resume()."""
        return self._post("/time/pause", ClockResponse)

    def resume(self) -> ClockResponse:
        return self._post("/time/resume", ClockResponse)


class AsyncGameClient(AsyncBaseClient):
    """Async version of GameClient."""

    _BASE_PATH = "/game"

    async def state(self) -> GameStatusResponse:
        return await self._get("/state", GameStatusResponse)

    async def snapshot(self) -> dict[str, Any]:
        return await self._http.get(f"{self._BASE_PATH}/snapshot")

    async def restore(self) -> RestoreResult:
        """Restore the pre-ending checkpoint.

        Raises:
            ConflictError: If the game is not on an ending (WIN/LOSE).
        """
        return await self._post("/restore", RestoreResult)

    async def restart(self) -> GameStatusResponse:
        return await self._post("/restart", GameStatusResponse)

    async def advance(self, seconds: float) -> AdvanceResult:
        return await self._post("/time/advance", AdvanceResult, json={"seconds": seconds})

    async def pause(self) -> ClockResponse:
        return await self._post("/time/pause", ClockResponse)

    async def resume(self) -> ClockResponse:
        return await self._post("/time/resume", ClockResponse)
