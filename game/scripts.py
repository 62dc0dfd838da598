"""Story scripts: immediate reaction plus a delayed resolution.

Triggering a script emits its first line(s) right away and schedules a
continuation on the session's scheduler. The resolution runs when game time
reaches it and is ignored if the game has left PLAYING in the meantime.
"""

import logging
from typing import TYPE_CHECKING, Any, Callable

from game.content import (
    ALARM_DELAY,
    CRACK_DELAY,
    CRACK_SECRET,
    DISGUISE_DELAY,
    EVIDENCE_INTAKE_PATH,
    FORBIDDEN_EVIDENCE,
    MIN_EVIDENCE_FOR_DISGUISE,
    REQUIRED_EVIDENCE,
)
from game.nodes import ScriptAction
from game.scheduler import ContinuationKind, ScheduledContinuation
from game.state import GameState
from game.transcript import EntryKind, OutputLine

if TYPE_CHECKING:
    from game.session import GameSession

logger = logging.getLogger(__name__)

SCRIPT_CONTINUATIONS = frozenset(
    {
        ContinuationKind.ALARM_RESOLVE,
        ContinuationKind.CRACK_RESOLVE,
        ContinuationKind.DISGUISE_RESOLVE,
    }
)

ALARM_CALL = """Dialing 110...
Operator: "110, what is your emergency?"
You: "I need to report a crime. A research lab is running illegal human experiments..."
Operator: "Do you have any evidence?"
You: "I... not yet."
Operator: "Without evidence we cannot open a case. Please call back once you have it."
The line goes dead."""

ALARM_MONOLOGUE = (
    "(Without evidence nobody will believe me. "
    "I have to dig up proof from this system first.)"
)

INCOMPLETE_EVIDENCE_MESSAGE = (
    "Error: evidence collection incomplete. "
    "Check whether usable evidence fragments were deleted."
)
VERIFICATION_FAILED_MESSAGE = (
    "Error: file verification failed. Key evidence is missing or files are incomplete."
)


def inspect_intake(intake_names: set[str]) -> dict[str, bool]:
    """Check the intake directory contents against the fixed evidence sets.

    Returns:
        ``{"has_all_required": ..., "has_forbidden": ...}``
    """
    return {
        "has_all_required": all(name in intake_names for name in REQUIRED_EVIDENCE),
        "has_forbidden": any(name in intake_names for name in FORBIDDEN_EVIDENCE),
    }


class ScriptEngine:
    """Triggers story scripts and applies their delayed outcomes.

    Args:
        session: The session whose scheduler, files and phase the scripts use.
    """

    def __init__(self, session: "GameSession") -> None:
        self.session = session
        self._triggers: dict[ScriptAction, Callable[[], list[OutputLine]]] = {
            ScriptAction.ALARM: self._trigger_alarm,
            ScriptAction.CRACK: self._trigger_crack,
            ScriptAction.DISGUISE: self._trigger_disguise,
        }
        self._resolvers: dict[ContinuationKind, Callable[[dict[str, Any]], list[OutputLine]]] = {
            ContinuationKind.ALARM_RESOLVE: self._resolve_alarm,
            ContinuationKind.CRACK_RESOLVE: self._resolve_crack,
            ContinuationKind.DISGUISE_RESOLVE: self._resolve_disguise,
        }

    def trigger(self, action: ScriptAction) -> list[OutputLine]:
        """Start ``action``.

        Returns:
            Lines to show immediately.
        """
        logger.info(f"Script triggered: {action.value}")
        return self._triggers[action]()

    def resolve(self, continuation: ScheduledContinuation) -> list[OutputLine]:
        """Apply a fired script continuation.

        Returns:
            Lines to append to the transcript (empty when dropped).

        Raises:
            ValueError: If the continuation is not a script resolution.
        """
        resolver = self._resolvers.get(continuation.kind)
        if resolver is None:
            raise ValueError(f"Not a script continuation: {continuation.kind.value}")

        phase = self.session.phase
        if phase != GameState.PLAYING:
            logger.info(
                f"Dropping {continuation.kind.value}: game is in {phase.value}, not PLAYING"
            )
            return []

        return resolver(continuation.payload)

    # ===== Triggers =====

    def _trigger_alarm(self) -> list[OutputLine]:
        self.session.scheduler.schedule(ALARM_DELAY, ContinuationKind.ALARM_RESOLVE)
        return [(EntryKind.SYSTEM, "Attempting to establish an external connection...")]

    def _trigger_crack(self) -> list[OutputLine]:
        self.session.scheduler.schedule(CRACK_DELAY, ContinuationKind.CRACK_RESOLVE)
        return [(EntryKind.SYSTEM, "Cracking...")]

    def _trigger_disguise(self) -> list[OutputLine]:
        if self.session.evidence.count() < MIN_EVIDENCE_FOR_DISGUISE:
            return [(EntryKind.OUTPUT, INCOMPLETE_EVIDENCE_MESSAGE)]

        # The outcome is fixed now; later changes to the intake do not affect it.
        intake = self.session.fs.lookup(EVIDENCE_INTAKE_PATH)
        intake_names = {child.name for child in intake.children} if intake else set()
        findings = inspect_intake(intake_names)

        self.session.write_checkpoint()
        self.session.scheduler.schedule(
            DISGUISE_DELAY,
            ContinuationKind.DISGUISE_RESOLVE,
            findings,
        )
        logger.info(f"Disguise scheduled: {findings}")
        return [(EntryKind.SYSTEM, "Packing and disguising data...")]

    # ===== Resolutions =====

    def _resolve_alarm(self, payload: dict[str, Any]) -> list[OutputLine]:
        return [
            (EntryKind.OUTPUT, ALARM_CALL),
            (EntryKind.NARRATION, ALARM_MONOLOGUE),
        ]

    def _resolve_crack(self, payload: dict[str, Any]) -> list[OutputLine]:
        return [
            (EntryKind.OUTPUT, "Crack successful!"),
            (EntryKind.SYSTEM, f"Key: {CRACK_SECRET}"),
        ]

    def _resolve_disguise(self, payload: dict[str, Any]) -> list[OutputLine]:
        # Forbidden evidence loses even when every required file is present.
        if payload.get("has_forbidden"):
            self.session.machine.transition(GameState.LOSE)
            return []
        if payload.get("has_all_required"):
            self.session.machine.transition(GameState.WIN)
            return []
        return [(EntryKind.OUTPUT, VERIFICATION_FAILED_MESSAGE)]
