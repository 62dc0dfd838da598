"""Terminal sub-client (/terminal/*).

This is an internal module. Import from `client` instead.
"""

from pydantic import BaseModel

from client._base import AsyncBaseClient, BaseClient
from client.models import TranscriptLine, TreeNodeView


class CommandResult(BaseModel):
    """Result of running one command.

    Attributes:
        entries: Transcript entries the command added (input echo first).
        game_state: Phase after the command.
        current_path: Prompt path after the command.
    """

    entries: list[TranscriptLine]
    game_state: str
    current_path: str

    @property
    def output(self) -> list[str]:
        """Text of every entry except the input echo."""
        return [entry.text for entry in self.entries if entry.kind != "input"]


class HistoryResponse(BaseModel):
    """Transcript entries from an index onward, plus the total count."""

    entries: list[TranscriptLine]
    total: int


class TerminalClient(BaseClient):
    """Run commands and read the terminal.

    Example:
        result = client.terminal.run("cd data")
        print(result.current_path)
    """

    _BASE_PATH = "/terminal"

    def run(self, line: str) -> CommandResult:
        """Run one command line.

        Raises:
            ConflictError: If the game is not in PLAYING.
        """
        return self._post("/command", CommandResult, json={"line": line})

    def history(self, since: int = 0) -> HistoryResponse:
        """Get transcript entries starting at index ``since``."""
        return self._get("/history", HistoryResponse, since=since)

    def tree(self) -> TreeNodeView:
        """Get the discovered-only file tree."""
        return self._get("/tree", TreeNodeView)


class AsyncTerminalClient(AsyncBaseClient):
    """Async version of TerminalClient."""

    _BASE_PATH = "/terminal"

    async def run(self, line: str) -> CommandResult:
        """Run one command line.

        Raises:
            ConflictError: If the game is not in PLAYING.
        """
        return await self._post("/command", CommandResult, json={"line": line})

    async def history(self, since: int = 0) -> HistoryResponse:
        return await self._get("/history", HistoryResponse, since=since)

    async def tree(self) -> TreeNodeView:
        return await self._get("/tree", TreeNodeView)
