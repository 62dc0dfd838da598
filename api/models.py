"""Shared response models for API endpoints."""

from typing import Any, Optional

from pydantic import BaseModel


class ClockResponse(BaseModel):
    """Game clock state.

    Attributes:
        current_time: Current game time (ISO 8601).
        time_scale: Game seconds per wall second in auto-advance mode.
        is_paused: Whether time is paused.
        auto_advance: Whether a background loop drives time.
        mode: paused, manual, real_time, fast_forward or slow_motion.
    """

    current_time: str
    time_scale: float
    is_paused: bool
    auto_advance: bool
    mode: str


class GameStatusResponse(BaseModel):
    """Summary of the session, mirroring GameSession.status().

    Attributes:
        session_id: Identifier the storage keys are derived from.
        game_state: BOOT, PLAYING, WIN or LOSE.
        current_path: Prompt path in display form.
        boot_sequence: Boot lines shown so far.
        evidence_collected: Collected evidence names, in order.
        transcript_length: Number of transcript entries.
        pending_continuations: Delayed events not yet fired.
        next_fire_time: When the next one fires (ISO 8601), if any.
        clock: Clock state.
        is_running: Whether the auto-advance loop is running.
    """

    session_id: str
    game_state: str
    current_path: str
    boot_sequence: list[str]
    evidence_collected: list[str]
    transcript_length: int
    pending_continuations: int
    next_fire_time: Optional[str] = None
    clock: ClockResponse
    is_running: bool


class TreeNodeView(BaseModel):
    """A node in the discovered-only tree view."""

    name: str
    type: str
    path: str
    isLocked: bool
    discovered: Optional[bool] = None
    children: Optional[list["TreeNodeView"]] = None

    @classmethod
    def from_view(cls, view: dict[str, Any]) -> "TreeNodeView":
        return cls.model_validate(view)
