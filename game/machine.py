"""Game phase transitions and the boot sequence."""

import logging
import random
from typing import Optional

from game.content import BOOT_COMPLETE_DELAY, BOOT_STEP_DELAY_RANGE, BOOT_STEPS
from game.exceptions import GameStateError
from game.scheduler import ContinuationKind, Scheduler
from game.state import GameState

logger = logging.getLogger(__name__)

# Restart (-> BOOT) is allowed from every phase and handled by restart().
ALLOWED_TRANSITIONS: dict[GameState, frozenset[GameState]] = {
    GameState.BOOT: frozenset({GameState.PLAYING}),
    GameState.PLAYING: frozenset({GameState.WIN, GameState.LOSE}),
    GameState.WIN: frozenset({GameState.PLAYING}),
    GameState.LOSE: frozenset({GameState.PLAYING}),
}


class GameStateMachine:
    """Holds the game phase and the boot log.

    The boot sequence starts at most once per machine; restart() re-arms it.

    Args:
        phase: Starting phase (from a save, or BOOT).
        boot_log: Boot lines already shown.
        rng: Random source for boot step delays.
    """

    def __init__(
        self,
        phase: GameState = GameState.BOOT,
        boot_log: Optional[list[str]] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self._phase = phase
        self.boot_log: list[str] = list(boot_log or [])
        self.rng = rng or random.Random()
        self._boot_started = False

    @property
    def phase(self) -> GameState:
        return self._phase

    @property
    def boot_started(self) -> bool:
        return self._boot_started

    def can_transition(self, target: GameState) -> bool:
        return target in ALLOWED_TRANSITIONS[self._phase]

    def transition(self, target: GameState) -> None:
        """Move to ``target``.

        Raises:
            GameStateError: If the transition is not allowed.
        """
        if not self.can_transition(target):
            raise GameStateError(
                f"Cannot go from {self._phase.value} to {target.value}",
                phase=self._phase.value,
            )
        logger.info(f"Game state: {self._phase.value} -> {target.value}")
        self._phase = target

    def load(self, phase: GameState, boot_log: list[str]) -> None:
        """Adopt a saved phase and boot log without transition checks."""
        self._phase = phase
        self.boot_log = list(boot_log)

    def restart(self) -> None:
        """Return to BOOT with an empty boot log and re-arm the boot guard."""
        logger.info(f"Game state: {self._phase.value} -> BOOT (restart)")
        self._phase = GameState.BOOT
        self.boot_log = []
        self._boot_started = False

    def start_boot(self, scheduler: Scheduler) -> bool:
        """Schedule the boot lines with random cumulative delays.

        Each BOOT_STEP payload carries its line and whether it is the last.
        The session handles the last step by scheduling BOOT_COMPLETE.

        Returns:
            True if the sequence was scheduled; False if the phase is not BOOT
            or the sequence was already started.
        """
        if self._phase != GameState.BOOT or self._boot_started:
            return False

        self._boot_started = True
        self.boot_log = []

        low, high = BOOT_STEP_DELAY_RANGE
        delay = 0.0
        for index, line in enumerate(BOOT_STEPS):
            delay += self.rng.uniform(low, high)
            scheduler.schedule(
                delay,
                ContinuationKind.BOOT_STEP,
                {"index": index, "line": line, "last": index == len(BOOT_STEPS) - 1},
            )

        logger.info(f"Boot sequence scheduled ({len(BOOT_STEPS)} steps, {delay:.2f}s)")
        return True

    def record_boot_line(self, line: str) -> None:
        self.boot_log.append(line)

    def schedule_boot_complete(self, scheduler: Scheduler) -> None:
        scheduler.schedule(BOOT_COMPLETE_DELAY, ContinuationKind.BOOT_COMPLETE)

    def complete_boot(self) -> bool:
        """Switch BOOT -> PLAYING; False if the phase already moved on."""
        if self._phase != GameState.BOOT:
            logger.warning(f"Ignoring boot completion in {self._phase.value}")
            return False
        self.transition(GameState.PLAYING)
        return True
