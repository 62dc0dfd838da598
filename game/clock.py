"""Virtual game clock."""

from datetime import datetime, timedelta, timezone
from enum import Enum

from pydantic import BaseModel, Field, field_validator


class TimeMode(str, Enum):
    """Time control mode for the game clock."""

    PAUSED = "paused"
    MANUAL = "manual"
    REAL_TIME = "real_time"
    FAST_FORWARD = "fast_forward"
    SLOW_MOTION = "slow_motion"


class GameClock(BaseModel):
    """Virtual time used for boot and script delays.

    Game time is decoupled from wall-clock time. Tests and the HTTP API
    advance it explicitly; in auto-advance mode the GameLoop converts elapsed
    wall time into game time using ``time_scale``. The clock never advances
    itself and never fires continuations; that is the Scheduler's job.

    Args:
        current_time: The current game timestamp (timezone-aware).
        time_scale: Multiplier applied to wall time in auto-advance mode.
        is_paused: Whether advancement is frozen.
        last_wall_time_update: Wall-clock time of the last update.
        auto_advance: Whether wall time drives the clock.
    """

    current_time: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="The current game timestamp (timezone-aware)",
    )
    time_scale: float = Field(
        default=1.0,
        description="Multiplier for time advancement (1.0 = real-time)",
        gt=0.0,
    )
    is_paused: bool = Field(
        default=False, description="Whether time advancement is currently frozen"
    )
    last_wall_time_update: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Wall-clock time when current_time was last updated",
    )
    auto_advance: bool = Field(
        default=False,
        description="Whether time automatically advances based on wall time",
    )

    @field_validator("current_time", "last_wall_time_update")
    @classmethod
    def validate_timezone_aware(cls, v: datetime) -> datetime:
        """Ensure datetime is timezone-aware."""
        if v.tzinfo is None:
            raise ValueError("Datetime must be timezone-aware (recommend UTC)")
        return v

    @property
    def mode(self) -> TimeMode:
        """Current TimeMode derived from is_paused, auto_advance and time_scale."""
        if self.is_paused:
            return TimeMode.PAUSED
        if not self.auto_advance:
            return TimeMode.MANUAL
        if self.time_scale == 1.0:
            return TimeMode.REAL_TIME
        if self.time_scale > 1.0:
            return TimeMode.FAST_FORWARD
        return TimeMode.SLOW_MOTION

    def calculate_advancement(self, wall_time_elapsed: timedelta) -> timedelta:
        """Game time that corresponds to ``wall_time_elapsed``.

        Examples:
            - time_scale=1.0, wall_elapsed=2s -> 2s
            - time_scale=10.0, wall_elapsed=1s -> 10s
            - is_paused=True -> 0s (always)
        """
        if self.is_paused:
            return timedelta(0)

        total_seconds = wall_time_elapsed.total_seconds() * self.time_scale
        return timedelta(seconds=total_seconds)

    def set_time(self, new_time: datetime) -> None:
        """Jump to ``new_time``.

        Raises:
            ValueError: If new_time is naive or before current_time.
        """
        if new_time.tzinfo is None:
            raise ValueError("new_time must be timezone-aware")

        if new_time < self.current_time:
            raise ValueError(
                f"Cannot set time backwards: {new_time} < {self.current_time}"
            )

        self.current_time = new_time
        self.last_wall_time_update = datetime.now(timezone.utc)

    def pause(self) -> None:
        self.is_paused = True

    def resume(self) -> None:
        """Resume and re-anchor wall time so no jump happens."""
        self.is_paused = False
        self.last_wall_time_update = datetime.now(timezone.utc)

    def set_scale(self, scale: float) -> None:
        """Set the auto-advance multiplier.

        Raises:
            ValueError: If scale <= 0.0.
        """
        if scale <= 0.0:
            raise ValueError(f"Time scale must be positive, got {scale}")

        self.time_scale = scale
        self.last_wall_time_update = datetime.now(timezone.utc)

    def to_dict(self) -> dict:
        """Export clock state for API responses."""
        return {
            "current_time": self.current_time.isoformat(),
            "time_scale": self.time_scale,
            "is_paused": self.is_paused,
            "auto_advance": self.auto_advance,
            "mode": self.mode.value,
        }
