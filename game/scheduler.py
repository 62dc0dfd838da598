"""Cooperative timer queue for delayed narrative continuations.

Boot lines and script resolutions are not real concurrency: they are
continuations scheduled at a virtual time and fired, in order, when the
GameClock passes that time. Each continuation is a handle that can be
cancelled while still pending.
"""

import bisect
import logging
from datetime import datetime, timedelta
from enum import Enum
from typing import Any, Callable, Optional
from uuid import uuid4

from pydantic import BaseModel, Field

from game.clock import GameClock

logger = logging.getLogger(__name__)


class ContinuationKind(str, Enum):
    """What a continuation does when it fires."""

    BOOT_STEP = "boot_step"
    BOOT_COMPLETE = "boot_complete"
    ALARM_RESOLVE = "alarm_resolve"
    CRACK_RESOLVE = "crack_resolve"
    DISGUISE_RESOLVE = "disguise_resolve"


class ContinuationStatus(str, Enum):
    """Lifecycle status of a scheduled continuation."""

    PENDING = "pending"
    EXECUTING = "executing"
    EXECUTED = "executed"
    FAILED = "failed"
    CANCELLED = "cancelled"


class ScheduledContinuation(BaseModel):
    """A deferred piece of work in virtual time.

    The continuation carries only data (a kind and a payload). The session
    that owns the scheduler decides what each kind does, so continuations
    stay serializable and testable.

    Args:
        continuation_id: Unique identifier, used as the cancel handle.
        kind: What to do when fired.
        scheduled_time: When to fire (game time).
        created_at: When it was scheduled (game time).
        sequence: Tie-breaker so equal times fire in scheduling order.
        payload: Kind-specific data.
        status: Current lifecycle status.
        executed_at: When it fired (game time).
        error_message: Error details if status is FAILED.
        metadata: Extra data such as a cancel reason.
    """

    continuation_id: str = Field(
        default_factory=lambda: str(uuid4()),
        description="Unique identifier for this continuation",
    )
    kind: ContinuationKind = Field(description="What to do when fired")
    scheduled_time: datetime = Field(description="When to fire (game time)")
    created_at: datetime = Field(description="When it was scheduled (game time)")
    sequence: int = Field(default=0, description="Scheduling order tie-breaker")
    payload: dict[str, Any] = Field(
        default_factory=dict, description="Kind-specific data"
    )
    status: ContinuationStatus = Field(
        default=ContinuationStatus.PENDING, description="Current lifecycle status"
    )
    executed_at: Optional[datetime] = Field(
        default=None, description="When it actually fired"
    )
    error_message: Optional[str] = Field(
        default=None, description="Error details if status is FAILED"
    )
    metadata: dict[str, Any] = Field(
        default_factory=dict, description="Flexible additional data"
    )

    def execute(
        self,
        dispatch: Callable[["ScheduledContinuation"], None],
        now: datetime,
    ) -> None:
        """Run this continuation through ``dispatch``.

        Failures are recorded on the continuation rather than raised, so one
        broken continuation never stops the rest of the queue.

        Raises:
            RuntimeError: If the continuation is not pending.
        """
        if self.status != ContinuationStatus.PENDING:
            raise RuntimeError(
                f"Cannot execute continuation {self.continuation_id} with status {self.status}"
            )

        self.status = ContinuationStatus.EXECUTING

        try:
            dispatch(self)
            self.status = ContinuationStatus.EXECUTED
        except Exception as e:
            self.status = ContinuationStatus.FAILED
            self.error_message = f"{type(e).__name__}: {str(e)}"
            logger.error(
                f"Continuation {self.continuation_id} ({self.kind.value}) failed: {e}",
                exc_info=True,
            )
        finally:
            self.executed_at = now

    def cancel(self, reason: str) -> None:
        """Cancel before firing.

        Raises:
            RuntimeError: If the continuation already fired or is firing.
        """
        if self.status != ContinuationStatus.PENDING:
            raise RuntimeError(
                f"Cannot cancel continuation {self.continuation_id} with status {self.status}"
            )

        self.status = ContinuationStatus.CANCELLED
        self.metadata["cancel_reason"] = reason

    def get_summary(self) -> str:
        """One-line description, e.g. ``[12:00:01.500] crack_resolve``."""
        time_str = self.scheduled_time.strftime("%H:%M:%S.%f")[:-3]
        return f"[{time_str}] {self.kind.value}"


class ContinuationQueue(BaseModel):
    """Continuations sorted by (scheduled_time, sequence).

    Fired and cancelled continuations stay in the queue as history until
    clear_finished() is called.

    Args:
        continuations: All continuations, in firing order.
    """

    continuations: list[ScheduledContinuation] = Field(
        default_factory=list,
        description="All continuations, sorted by scheduled_time then sequence",
    )

    @property
    def pending_count(self) -> int:
        return sum(
            1 for c in self.continuations if c.status == ContinuationStatus.PENDING
        )

    def add(self, continuation: ScheduledContinuation) -> None:
        """Insert keeping firing order.

        Raises:
            ValueError: If the id already exists.
        """
        if any(c.continuation_id == continuation.continuation_id for c in self.continuations):
            raise ValueError(
                f"Continuation {continuation.continuation_id} already exists in queue"
            )

        keys = [(c.scheduled_time, c.sequence) for c in self.continuations]
        index = bisect.bisect_right(keys, (continuation.scheduled_time, continuation.sequence))
        self.continuations.insert(index, continuation)

    def get(self, continuation_id: str) -> Optional[ScheduledContinuation]:
        for continuation in self.continuations:
            if continuation.continuation_id == continuation_id:
                return continuation
        return None

    def peek_next(self) -> Optional[ScheduledContinuation]:
        """Next pending continuation, or None."""
        for continuation in self.continuations:
            if continuation.status == ContinuationStatus.PENDING:
                return continuation
        return None

    def get_by_status(self, status: ContinuationStatus) -> list[ScheduledContinuation]:
        return [c for c in self.continuations if c.status == status]

    def clear_finished(self) -> int:
        """Drop every continuation that is no longer pending.

        Returns:
            Number of continuations removed.
        """
        initial_count = len(self.continuations)
        self.continuations = [
            c for c in self.continuations if c.status == ContinuationStatus.PENDING
        ]
        return initial_count - len(self.continuations)


Dispatch = Callable[[ScheduledContinuation], None]


class Scheduler(BaseModel):
    """Clock plus queue: schedule, cancel and fire continuations.

    ``advance()`` walks time forward one due continuation at a time, so a
    continuation scheduled by another continuation inside the same window
    still fires within that window, at its own time.

    Args:
        clock: The virtual clock.
        queue: The continuation queue.
        next_sequence: Counter used to order continuations scheduled at the same time.
    """

    clock: GameClock = Field(default_factory=GameClock)
    queue: ContinuationQueue = Field(default_factory=ContinuationQueue)
    next_sequence: int = Field(default=0)

    @property
    def now(self) -> datetime:
        return self.clock.current_time

    @property
    def pending_count(self) -> int:
        return self.queue.pending_count

    @property
    def next_fire_time(self) -> Optional[datetime]:
        upcoming = self.queue.peek_next()
        return upcoming.scheduled_time if upcoming else None

    def schedule(
        self,
        delay: timedelta | float,
        kind: ContinuationKind,
        payload: Optional[dict[str, Any]] = None,
    ) -> ScheduledContinuation:
        """Schedule ``kind`` to fire ``delay`` after the current game time.

        Args:
            delay: timedelta, or seconds as a float. Must not be negative.
            kind: What to do when fired.
            payload: Kind-specific data.

        Returns:
            The continuation, which doubles as its cancel handle.
        """
        if not isinstance(delay, timedelta):
            delay = timedelta(seconds=delay)
        if delay < timedelta(0):
            raise ValueError(f"Delay must not be negative, got {delay}")

        continuation = ScheduledContinuation(
            kind=kind,
            scheduled_time=self.now + delay,
            created_at=self.now,
            sequence=self.next_sequence,
            payload=payload or {},
        )
        self.next_sequence += 1
        self.queue.add(continuation)

        logger.debug(f"Scheduled {continuation.get_summary()}")
        return continuation

    def cancel(self, continuation_id: str, reason: str = "cancelled") -> bool:
        """Cancel a pending continuation by id.

        Returns:
            True if it was pending and is now cancelled.
        """
        continuation = self.queue.get(continuation_id)
        if continuation is None or continuation.status != ContinuationStatus.PENDING:
            return False
        continuation.cancel(reason)
        return True

    def cancel_all(self, reason: str) -> int:
        """Cancel every pending continuation.

        Returns:
            Number of continuations cancelled.
        """
        pending = self.queue.get_by_status(ContinuationStatus.PENDING)
        for continuation in pending:
            continuation.cancel(reason)
        if pending:
            logger.info(f"Cancelled {len(pending)} pending continuations: {reason}")
        return len(pending)

    def advance(self, delta: timedelta, dispatch: Dispatch) -> list[ScheduledContinuation]:
        """Move time forward by ``delta``, firing everything due on the way.

        Raises:
            ValueError: If delta is negative or the clock is paused.
        """
        if delta < timedelta(0):
            raise ValueError(f"Time delta must not be negative, got {delta}")
        if self.clock.is_paused:
            raise ValueError("Cannot advance time while paused")

        target = self.now + delta
        fired = []

        while True:
            upcoming = self.queue.peek_next()
            if upcoming is None or upcoming.scheduled_time > target:
                break
            if upcoming.scheduled_time > self.now:
                self.clock.set_time(upcoming.scheduled_time)
            upcoming.execute(dispatch, self.now)
            fired.append(upcoming)

        if target > self.now:
            self.clock.set_time(target)

        return fired

    def run_until_idle(self, dispatch: Dispatch, limit: int = 1000) -> list[ScheduledContinuation]:
        """Jump from continuation to continuation until nothing is pending.

        Args:
            dispatch: Handler for fired continuations.
            limit: Safety cap on the number of continuations fired.

        Returns:
            The continuations fired, in order.
        """
        fired = []
        while len(fired) < limit:
            upcoming = self.queue.peek_next()
            if upcoming is None:
                break
            delta = max(upcoming.scheduled_time - self.now, timedelta(0))
            fired.extend(self.advance(delta, dispatch))
        return fired
