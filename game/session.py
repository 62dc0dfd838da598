"""Session orchestrator: owns every component and commits every change.

GameSession is the only object outside the core that mutates game state.
Commands, time advancement, restore and restart all run under one lock and
end with a save, so durable storage always mirrors the last committed state.
"""

import logging
import random
import threading
import time
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Optional

from game.config import GameSettings
from game.content import BOOT_READY_MESSAGE, load_default_tree
from game.discovery import DiscoveryTracker
from game.evidence import EvidenceLedger
from game.exceptions import GameStateError
from game.filesystem import FileSystemModel
from game.interpreter import CommandInterpreter
from game.machine import GameStateMachine
from game.nodes import FileNode
from game.paths import ROOT, NodePath, to_display
from game.persistence import JsonFileStore, KeyValueStore, MemoryStore, PersistenceManager
from game.scheduler import ContinuationKind, ScheduledContinuation, Scheduler
from game.scripts import SCRIPT_CONTINUATIONS, ScriptEngine
from game.state import ENDINGS, GameState, SaveState
from game.transcript import EntryKind, Transcript, TranscriptEntry

logger = logging.getLogger(__name__)


class GameSession:
    """One player's game.

    Args:
        persistence: Save/checkpoint storage for this session.
        default_tree: Root of the starting filesystem (used on first start
            and on restart).
        scheduler: Continuation scheduler (a fresh one by default).
        rng: Random source for boot delays.
    """

    def __init__(
        self,
        persistence: PersistenceManager,
        default_tree: FileNode,
        scheduler: Optional[Scheduler] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.persistence = persistence
        self.default_tree = default_tree
        self.scheduler = scheduler or Scheduler()

        self.fs = FileSystemModel(default_tree)
        self.current_path: NodePath = ROOT
        self.transcript = Transcript()
        self.discovery = DiscoveryTracker()
        self.evidence = EvidenceLedger()
        self.machine = GameStateMachine(rng=rng)
        self.scripts = ScriptEngine(self)
        self.interpreter = CommandInterpreter(self)

        self.is_started = False
        self._loop: Optional[GameLoop] = None
        self._operation_lock = threading.RLock()
        self._continuation_handlers: dict[
            ContinuationKind, Callable[[ScheduledContinuation], None]
        ] = {
            ContinuationKind.BOOT_STEP: self._on_boot_step,
            ContinuationKind.BOOT_COMPLETE: self._on_boot_complete,
        }
        for kind in SCRIPT_CONTINUATIONS:
            self._continuation_handlers[kind] = self._on_script_resolution

    @classmethod
    def from_settings(cls, settings: GameSettings) -> "GameSession":
        """Build a session with the store, content and RNG the settings name."""
        store: KeyValueStore
        if settings.save_dir is not None:
            store = JsonFileStore(settings.save_dir)
        else:
            store = MemoryStore()

        scheduler = Scheduler()
        scheduler.clock.time_scale = settings.time_scale

        return cls(
            persistence=PersistenceManager(store, settings.session_id),
            default_tree=load_default_tree(settings.content_path),
            scheduler=scheduler,
            rng=random.Random(settings.seed),
        )

    @property
    def phase(self) -> GameState:
        return self.machine.phase

    @property
    def session_id(self) -> str:
        return self.persistence.session_id

    # ===== Lifecycle =====

    def start(self, auto_advance: bool = False, time_scale: Optional[float] = None) -> dict[str, Any]:
        """Load any saved game and begin.

        A saved phase is reopened as-is (a save in WIN/LOSE opens on the
        ending; a save in BOOT replays the boot sequence). Without a save the
        game boots with default content.

        Args:
            auto_advance: Whether to drive game time from the wall clock.
            time_scale: Game seconds per wall second in auto-advance mode.

        Returns:
            Status dict (see status()).

        Raises:
            RuntimeError: If the session is already started.
        """
        if self.is_started:
            raise RuntimeError("Session is already started")

        with self._operation_lock:
            saved = self.persistence.load()
            if saved is not None:
                self.apply_snapshot(saved)
                logger.info(
                    f"Session {self.session_id} resumed from save in {self.phase.value}"
                )
            else:
                logger.info(f"Session {self.session_id} starting fresh")

            if self.phase == GameState.BOOT:
                self.machine.start_boot(self.scheduler)

            self.is_started = True
            self._commit()

        if auto_advance:
            clock = self.scheduler.clock
            if time_scale is not None:
                clock.set_scale(time_scale)
            clock.auto_advance = True
            clock.last_wall_time_update = datetime.now(timezone.utc)
            self._loop = GameLoop(session=self)
            self._loop.start()

        return self.status()

    def stop(self) -> None:
        """Stop the auto-advance loop if one is running."""
        if self._loop and self._loop.is_running:
            self._loop.stop()
        self._loop = None
        self.scheduler.clock.auto_advance = False
        self.is_started = False
        logger.info(f"Session {self.session_id} stopped")

    # ===== Player operations =====

    def submit(self, line: str) -> list[TranscriptEntry]:
        """Execute one command line.

        Returns:
            Transcript entries the command added (empty for a blank line).

        Raises:
            GameStateError: If the game is not in PLAYING.
        """
        with self._operation_lock:
            if not line.strip():
                return []
            if self.phase != GameState.PLAYING:
                raise GameStateError(
                    f"Commands are only accepted while PLAYING (currently {self.phase.value})",
                    phase=self.phase.value,
                )

            entries = self.interpreter.execute(line)
            self._commit()
            return entries

    def restore(self) -> bool:
        """Reload the checkpoint from an ending screen.

        Returns:
            True if a checkpoint was restored; False if none exists (nothing
            changes).

        Raises:
            GameStateError: If the game is not in WIN or LOSE.
        """
        with self._operation_lock:
            if self.phase not in ENDINGS:
                raise GameStateError(
                    f"Restore is only available from an ending (currently {self.phase.value})",
                    phase=self.phase.value,
                )

            checkpoint = self.persistence.load_checkpoint()
            if checkpoint is None:
                logger.warning(f"No checkpoint to restore for {self.session_id}")
                return False

            self.machine.transition(GameState.PLAYING)
            self.apply_snapshot(checkpoint, phase=GameState.PLAYING)
            self._commit()
            logger.info(f"Session {self.session_id} restored from checkpoint")
            return True

    def clear_and_restart(self) -> dict[str, Any]:
        """Erase saves and start over from BOOT with default content.

        Returns:
            Status dict (see status()).
        """
        with self._operation_lock:
            self.scheduler.cancel_all("restart")
            self.scheduler.queue.clear_finished()
            self.persistence.clear()

            self.fs.replace_root(self.default_tree)
            self.current_path = ROOT
            self.transcript.reset([])
            self.discovery.reset([to_display(ROOT)])
            self.evidence.reset()
            self.machine.restart()
            self.machine.start_boot(self.scheduler)

            self._commit()
            logger.info(f"Session {self.session_id} cleared and restarted")
            return self.status()

    # ===== Time =====

    def advance(self, seconds: float) -> list[ScheduledContinuation]:
        """Advance game time, firing every continuation that falls due.

        Raises:
            ValueError: If seconds is negative or the clock is paused.
        """
        with self._operation_lock:
            fired = self.scheduler.advance(timedelta(seconds=seconds), self._dispatch)
            if fired:
                self._commit()
            return fired

    def run_until_idle(self) -> list[ScheduledContinuation]:
        """Fire every pending continuation, jumping time as needed."""
        with self._operation_lock:
            fired = self.scheduler.run_until_idle(self._dispatch)
            if fired:
                self._commit()
            return fired

    def pause(self) -> dict[str, Any]:
        """Freeze game time; pending continuations wait until resume().

        Returns:
            Clock state (see GameClock.to_dict()).
        """
        with self._operation_lock:
            clock = self.scheduler.clock
            if not clock.is_paused:
                clock.pause()
                logger.info(f"Session {self.session_id} paused at {clock.current_time}")
            return clock.to_dict()

    def resume(self) -> dict[str, Any]:
        """Unfreeze game time without jumping over the paused interval."""
        with self._operation_lock:
            clock = self.scheduler.clock
            if clock.is_paused:
                clock.resume()
                logger.info(f"Session {self.session_id} resumed at {clock.current_time}")
            return clock.to_dict()

    def tick(self) -> None:
        """Convert elapsed wall time into game time (called by GameLoop)."""
        with self._operation_lock:
            clock = self.scheduler.clock
            wall_elapsed = datetime.now(timezone.utc) - clock.last_wall_time_update
            delta = clock.calculate_advancement(wall_elapsed)

            if delta > timedelta(0):
                fired = self.scheduler.advance(delta, self._dispatch)
                if fired:
                    self._commit()
                    logger.debug(f"Tick: advanced {delta}, fired {len(fired)} continuations")

    # ===== State access =====

    def snapshot(self) -> SaveState:
        """Full state as a SaveState."""
        with self._operation_lock:
            return SaveState(
                file_system=self.fs.root,
                current_path=list(self.current_path),
                history=self.transcript.entries,
                discovered_paths=self.discovery.paths(),
                evidence_collected=self.evidence.names(),
                game_state=self.phase,
                boot_sequence=list(self.machine.boot_log),
            )

    def apply_snapshot(self, state: SaveState, phase: Optional[GameState] = None) -> None:
        """Replace all in-memory state with ``state``.

        Args:
            state: Snapshot to load.
            phase: Phase to adopt instead of the stored one.
        """
        with self._operation_lock:
            self.fs.replace_root(state.file_system)
            self.current_path = tuple(state.current_path)
            self.transcript.reset(state.history)
            self.discovery.reset(state.discovered_paths)
            self.evidence.reset(state.evidence_collected)
            self.machine.load(phase or state.game_state, state.boot_sequence)

    def write_checkpoint(self) -> bool:
        """Save the current state as the checkpoint, with phase PLAYING."""
        with self._operation_lock:
            checkpoint = self.snapshot().model_copy(update={"game_state": GameState.PLAYING})
            return self.persistence.save_checkpoint(checkpoint)

    def exposed_tree(self) -> dict[str, Any]:
        with self._operation_lock:
            return self.discovery.exposed_tree(self.fs.root)

    def history(self, since: int = 0) -> list[TranscriptEntry]:
        with self._operation_lock:
            return self.transcript.since(since)

    def status(self) -> dict[str, Any]:
        """Summary of the session for API responses."""
        with self._operation_lock:
            next_fire = self.scheduler.next_fire_time
            return {
                "session_id": self.session_id,
                "game_state": self.phase.value,
                "current_path": to_display(self.current_path),
                "boot_sequence": list(self.machine.boot_log),
                "evidence_collected": self.evidence.names(),
                "transcript_length": len(self.transcript),
                "pending_continuations": self.scheduler.pending_count,
                "next_fire_time": next_fire.isoformat() if next_fire else None,
                "clock": self.scheduler.clock.to_dict(),
                "is_running": self._loop is not None and self._loop.is_running,
            }

    # ===== Internals =====

    def _commit(self) -> None:
        self.persistence.save(self.snapshot())

    def _dispatch(self, continuation: ScheduledContinuation) -> None:
        handler = self._continuation_handlers[continuation.kind]
        handler(continuation)

    def _on_boot_step(self, continuation: ScheduledContinuation) -> None:
        if self.phase != GameState.BOOT:
            logger.warning(f"Ignoring boot step in {self.phase.value}")
            return

        self.machine.record_boot_line(continuation.payload["line"])
        if continuation.payload.get("last"):
            self.transcript.append(EntryKind.SYSTEM, BOOT_READY_MESSAGE)
            self.current_path = ROOT
            self.machine.schedule_boot_complete(self.scheduler)

    def _on_boot_complete(self, continuation: ScheduledContinuation) -> None:
        if self.machine.complete_boot():
            logger.info(f"Session {self.session_id} boot complete")

    def _on_script_resolution(self, continuation: ScheduledContinuation) -> None:
        self.transcript.extend(self.scripts.resolve(continuation))


class GameLoop:
    """Background thread that keeps game time moving in auto-advance mode.

    All game logic stays in GameSession.tick(); this class only owns the
    thread and its timing.

    Attributes:
        session: Session to tick.
        tick_interval: Seconds between ticks.
        is_running: Whether the loop thread is active.
    """

    def __init__(self, session: GameSession, tick_interval: float = 0.05) -> None:
        self.session = session
        self.tick_interval = tick_interval

        self._thread: Optional[threading.Thread] = None
        self._stop_event = threading.Event()
        self.is_running = False

    def start(self) -> None:
        """Start the loop thread.

        Raises:
            RuntimeError: If the loop is already running.
        """
        if self.is_running:
            raise RuntimeError("Game loop is already running")

        self.is_running = True
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run_loop, daemon=True)
        self._thread.start()

        logger.info("GameLoop started")

    def stop(self) -> None:
        """Stop the loop and wait for the current tick to finish."""
        if not self.is_running:
            return

        self._stop_event.set()
        if self._thread:
            self._thread.join(timeout=1.0)

        self.is_running = False
        self._thread = None

        logger.info("GameLoop stopped")

    def _run_loop(self) -> None:
        while not self._stop_event.is_set():
            if self.session.scheduler.clock.is_paused:
                time.sleep(self.tick_interval)
                continue

            try:
                self.session.tick()
            except Exception as e:
                logger.error(f"Error during game tick: {e}", exc_info=True)

            time.sleep(self.tick_interval)
