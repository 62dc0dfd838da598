"""Terminal transcript entries."""

from enum import Enum
from typing import Optional
from uuid import uuid4

from pydantic import BaseModel, Field


class EntryKind(str, Enum):
    """Kind of a transcript line."""

    INPUT = "input"
    OUTPUT = "output"
    SYSTEM = "system"
    NARRATION = "narration"


class TranscriptEntry(BaseModel):
    """One line in the terminal transcript.

    Args:
        id: Unique identifier of the entry.
        kind: input, output, system or narration.
        text: The text, emitted verbatim (may contain story markup).
        path: Current directory when the command was typed (input only).
    """

    id: str = Field(
        default_factory=lambda: uuid4().hex[:12],
        description="Unique identifier of the entry",
    )
    kind: EntryKind = Field(description="Kind of line")
    text: str = Field(description="Line text")
    path: Optional[str] = Field(
        default=None, description="Directory at typing time (input entries only)"
    )


# A line produced by a handler before it becomes a TranscriptEntry.
OutputLine = tuple[EntryKind, str]


class Transcript:
    """Append-only list of transcript entries.

    Args:
        entries: Existing entries (e.g. from a save).
    """

    def __init__(self, entries: Optional[list[TranscriptEntry]] = None) -> None:
        self._entries: list[TranscriptEntry] = list(entries or [])

    def append(self, kind: EntryKind, text: str, path: Optional[str] = None) -> TranscriptEntry:
        """Add a line; ``path`` is only kept on input entries."""
        entry = TranscriptEntry(
            kind=kind,
            text=text,
            path=path if kind == EntryKind.INPUT else None,
        )
        self._entries.append(entry)
        return entry

    def extend(self, lines: list[OutputLine]) -> list[TranscriptEntry]:
        return [self.append(kind, text) for kind, text in lines]

    @property
    def entries(self) -> list[TranscriptEntry]:
        return list(self._entries)

    def since(self, index: int) -> list[TranscriptEntry]:
        """Entries from position ``index`` onward."""
        return self._entries[max(index, 0):]

    def reset(self, entries: list[TranscriptEntry]) -> None:
        self._entries = list(entries)

    def __len__(self) -> int:
        return len(self._entries)
