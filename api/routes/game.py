"""Game lifecycle endpoints: state, snapshot, restore, restart and time."""

from typing import Any, Optional

from fastapi import APIRouter
from pydantic import BaseModel, Field

from api.dependencies import GameSessionDep
from api.models import ClockResponse, GameStatusResponse

router = APIRouter(
    prefix="/game",
    tags=["game"],
)


# Request/Response Models


class RestoreResponse(BaseModel):
    """Response model for restore.

    Attributes:
        restored: False when there was no checkpoint (nothing changed).
        game_state: Phase after the call.
        current_path: Prompt path after the call.
    """

    restored: bool
    game_state: str
    current_path: str


class AdvanceTimeRequest(BaseModel):
    """Request model for advancing game time.

    Attributes:
        seconds: Number of game seconds to advance.
    """

    seconds: float = Field(
        ...,
        ge=0,
        description="Number of seconds to advance (0 fires only what is already due)",
    )


class ContinuationDetail(BaseModel):
    """A delayed event that fired during an advance.

    Attributes:
        continuation_id: Unique identifier.
        kind: What the continuation did.
        status: executed or failed.
        error: Error message if it failed.
    """

    continuation_id: str
    kind: str
    status: str
    error: Optional[str] = None


class AdvanceTimeResponse(BaseModel):
    """Response model for advancing time.

    Attributes:
        previous_time: Game time before the advance.
        current_time: Game time after the advance.
        fired: Continuations that fired, in order.
        game_state: Phase after the advance.
    """

    previous_time: str
    current_time: str
    fired: list[ContinuationDetail]
    game_state: str


# Route Handlers


@router.get("/state", response_model=GameStatusResponse)
async def get_state(session: GameSessionDep):
    """Get phase, boot log, prompt path, evidence, clock and pending work."""
    return session.status()


@router.get("/snapshot")
async def get_snapshot(session: GameSessionDep) -> dict[str, Any]:
    """Get the full save snapshot with camelCase keys."""
    return session.snapshot().model_dump(mode="json", by_alias=True, exclude_none=True)


@router.post("/restore", response_model=RestoreResponse)
async def restore(session: GameSessionDep):
    """Return to the checkpoint taken before the ending.

    Only allowed from WIN or LOSE (409 otherwise).
    """
    restored = session.restore()
    status = session.status()
    return RestoreResponse(
        restored=restored,
        game_state=status["game_state"],
        current_path=status["current_path"],
    )


@router.post("/restart", response_model=GameStatusResponse)
async def restart(session: GameSessionDep):
    """Erase the save and checkpoint and boot again with default content."""
    return session.clear_and_restart()


@router.post("/time/advance", response_model=AdvanceTimeResponse)
async def advance_time(request: AdvanceTimeRequest, session: GameSessionDep):
    """Advance game time, firing boot lines and script resolutions that fall due."""
    previous_time = session.scheduler.now
    fired = session.advance(request.seconds)
    return AdvanceTimeResponse(
        previous_time=previous_time.isoformat(),
        current_time=session.scheduler.now.isoformat(),
        fired=[
            ContinuationDetail(
                continuation_id=c.continuation_id,
                kind=c.kind.value,
                status=c.status.value,
                error=c.error_message,
            )
            for c in fired
        ],
        game_state=session.phase.value,
    )


@router.post("/time/pause", response_model=ClockResponse)
async def pause_time(session: GameSessionDep):
    """Freeze game time.

    Pending boot lines and script resolutions wait, the auto-advance loop
    stops moving the clock, and /time/advance is rejected until resume.
    Pausing an already paused clock changes nothing.
    """
    return session.pause()


@router.post("/time/resume", response_model=ClockResponse)
async def resume_time(session: GameSessionDep):
    """Unfreeze game time from where it stopped."""
    return session.resume()
