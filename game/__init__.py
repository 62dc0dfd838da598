"""Soul Bridge terminal game core.

This package contains the virtual filesystem, the command interpreter, the
story scripts, the cooperative scheduler that resolves delayed narrative
events, and the session that ties them together and persists them.
"""

from game.clock import GameClock, TimeMode
from game.config import GameSettings
from game.exceptions import (
    AccessDeniedError,
    CommandNotFoundError,
    GameStateError,
    InvalidArgumentError,
    PathNotFoundError,
    PersistenceError,
    ShellError,
)
from game.filesystem import FileSystemModel
from game.nodes import FileNode, NodeKind, ScriptAction
from game.persistence import JsonFileStore, MemoryStore, PersistenceManager
from game.scheduler import ContinuationKind, ScheduledContinuation, Scheduler
from game.session import GameLoop, GameSession
from game.state import GameState, SaveState
from game.transcript import EntryKind, TranscriptEntry

__all__ = [
    "GameClock",
    "TimeMode",
    "GameSettings",
    "ShellError",
    "PathNotFoundError",
    "AccessDeniedError",
    "InvalidArgumentError",
    "CommandNotFoundError",
    "PersistenceError",
    "GameStateError",
    "FileSystemModel",
    "FileNode",
    "NodeKind",
    "ScriptAction",
    "MemoryStore",
    "JsonFileStore",
    "PersistenceManager",
    "ContinuationKind",
    "ScheduledContinuation",
    "Scheduler",
    "GameSession",
    "GameLoop",
    "GameState",
    "SaveState",
    "EntryKind",
    "TranscriptEntry",
]
