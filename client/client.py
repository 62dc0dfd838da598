"""Main Soul Bridge client classes.

- SoulBridgeClient: synchronous client
- AsyncSoulBridgeClient: asynchronous client

Both expose the API through two sub-clients, ``terminal`` and ``game``.

Example:
    Synchronous usage::

        from client import SoulBridgeClient

        with SoulBridgeClient(base_url="http://localhost:8000") as client:
            client.game.advance(seconds=10)   # let the boot finish
            result = client.terminal.run("ls")
            print("\\n".join(result.output))

    Asynchronous usage::

        from client import AsyncSoulBridgeClient

        async with AsyncSoulBridgeClient() as client:
            await client.terminal.run("help")
"""

from typing import Any

from client._game import AsyncGameClient, GameClient
from client._http import AsyncHTTPClient, HTTPClient
from client._terminal import AsyncTerminalClient, TerminalClient
from client.models import HealthResponse


class SoulBridgeClient:
    """Synchronous client for the Soul Bridge API.

    Args:
        base_url: The base URL of the game server.
        timeout: Request timeout in seconds.
        retry_enabled: Retry connection errors, timeouts and HTTP 502/503/504
            with exponential backoff.
        max_retries: Maximum number of retry attempts.
        transport: Custom httpx transport (e.g. for testing).
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        timeout: float = 30.0,
        retry_enabled: bool = False,
        max_retries: int = 3,
        transport: Any = None,
    ) -> None:
        self._http = HTTPClient(
            base_url=base_url,
            timeout=timeout,
            retry_enabled=retry_enabled,
            max_retries=max_retries,
            transport=transport,
        )
        self._terminal: TerminalClient | None = None
        self._game: GameClient | None = None

    def __enter__(self) -> "SoulBridgeClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the client and release resources."""
        self._http.close()

    @property
    def base_url(self) -> str:
        return self._http.base_url

    @property
    def terminal(self) -> TerminalClient:
        """Run commands, read history and the discovered tree (/terminal/*)."""
        if self._terminal is None:
            self._terminal = TerminalClient(self._http)
        return self._terminal

    @property
    def game(self) -> GameClient:
        """State, snapshot, restore, restart and time control (/game/*)."""
        if self._game is None:
            self._game = GameClient(self._http)
        return self._game

    def health(self) -> HealthResponse:
        return HealthResponse(**self._http.get("/health"))


class AsyncSoulBridgeClient:
    """Asynchronous client for the Soul Bridge API.

    Takes the same arguments as SoulBridgeClient; ``transport`` must be an
    async transport.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        timeout: float = 30.0,
        retry_enabled: bool = False,
        max_retries: int = 3,
        transport: Any = None,
    ) -> None:
        self._http = AsyncHTTPClient(
            base_url=base_url,
            timeout=timeout,
            retry_enabled=retry_enabled,
            max_retries=max_retries,
            transport=transport,
        )
        self._terminal: AsyncTerminalClient | None = None
        self._game: AsyncGameClient | None = None

    async def __aenter__(self) -> "AsyncSoulBridgeClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def close(self) -> None:
        await self._http.close()

    @property
    def base_url(self) -> str:
        return self._http.base_url

    @property
    def terminal(self) -> AsyncTerminalClient:
        if self._terminal is None:
            self._terminal = AsyncTerminalClient(self._http)
        return self._terminal

    @property
    def game(self) -> AsyncGameClient:
        if self._game is None:
            self._game = AsyncGameClient(self._http)
        return self._game

    async def health(self) -> HealthResponse:
        return HealthResponse(**(await self._http.get("/health")))
