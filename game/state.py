"""Game phase and the persisted snapshot shape."""

from enum import Enum

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from game.nodes import FileNode
from game.transcript import TranscriptEntry


class GameState(str, Enum):
    """Phase of the game."""

    BOOT = "BOOT"
    PLAYING = "PLAYING"
    WIN = "WIN"
    LOSE = "LOSE"


ENDINGS = frozenset({GameState.WIN, GameState.LOSE})


class SaveState(BaseModel):
    """Full snapshot of a session, used for both saves and checkpoints.

    Serialized with camelCase keys::

        {fileSystem, currentPath, history, discoveredPaths,
         evidenceCollected, gameState, bootSequence}

    Args:
        file_system: Root of the filesystem tree.
        current_path: Current directory as a list of segments (root = []).
        history: Terminal transcript.
        discovered_paths: Display paths that have been listed.
        evidence_collected: Collected evidence names, in collection order.
        game_state: Phase at snapshot time.
        boot_sequence: Boot log lines shown so far.
    """

    file_system: FileNode = Field(description="Root of the filesystem tree")
    current_path: list[str] = Field(
        default_factory=list, description="Current directory segments"
    )
    history: list[TranscriptEntry] = Field(
        default_factory=list, description="Terminal transcript"
    )
    discovered_paths: list[str] = Field(
        default_factory=lambda: ["/"], description="Listed directory paths"
    )
    evidence_collected: list[str] = Field(
        default_factory=list, description="Collected evidence names"
    )
    game_state: GameState = Field(default=GameState.BOOT, description="Game phase")
    boot_sequence: list[str] = Field(
        default_factory=list, description="Boot log lines shown so far"
    )

    class Config:
        alias_generator = to_camel
        populate_by_name = True

    def to_json(self) -> str:
        """Serialize with camelCase keys."""
        return self.model_dump_json(by_alias=True, exclude_none=True)

    @classmethod
    def from_json(cls, data: str) -> "SaveState":
        """Parse a serialized snapshot.

        Raises:
            pydantic.ValidationError: If the data does not match the schema.
        """
        return cls.model_validate_json(data)
