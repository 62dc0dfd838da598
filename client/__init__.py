"""Soul Bridge API client library.

Typed Python client for the Soul Bridge terminal REST API, in synchronous
and asynchronous flavours.

Example:
    Synchronous usage::

        from client import SoulBridgeClient

        with SoulBridgeClient(base_url="http://localhost:8000") as client:
            client.terminal.run("cd data")
            client.terminal.run("ls")
            tree = client.terminal.tree()

    Asynchronous usage::

        from client import AsyncSoulBridgeClient

        async with AsyncSoulBridgeClient() as client:
            state = await client.game.state()

Exports:
    SoulBridgeClient: Synchronous client.
    AsyncSoulBridgeClient: Asynchronous client.

    Exceptions:
        SoulBridgeClientError: Base exception for all client errors.
        ConnectionError: Failed to connect to the server.
        TimeoutError: Request timed out.
        APIError: Server returned an error response.
        BadRequestError: Value rejected by the game (HTTP 400).
        NotFoundError: Unknown endpoint (HTTP 404).
        ConflictError: Not allowed in the current game phase (HTTP 409).
        ValidationError: Request validation failed (HTTP 422).
        ServerError: Server-side error (HTTP 5xx).
"""

from client._game import (
    AdvanceResult,
    AsyncGameClient,
    FiredContinuation,
    GameClient,
    RestoreResult,
)
from client._terminal import (
    AsyncTerminalClient,
    CommandResult,
    HistoryResponse,
    TerminalClient,
)
from client.client import AsyncSoulBridgeClient, SoulBridgeClient
from client.exceptions import (
    APIError,
    BadRequestError,
    ConflictError,
    ConnectionError,
    NotFoundError,
    ServerError,
    SoulBridgeClientError,
    TimeoutError,
    ValidationError,
)
from client.models import (
    ClockResponse,
    GameStatusResponse,
    HealthResponse,
    TranscriptLine,
    TreeNodeView,
)

__all__ = [
    # Main clients
    "SoulBridgeClient",
    "AsyncSoulBridgeClient",
    # Sub-clients
    "TerminalClient",
    "AsyncTerminalClient",
    "GameClient",
    "AsyncGameClient",
    # Response models
    "CommandResult",
    "HistoryResponse",
    "RestoreResult",
    "AdvanceResult",
    "FiredContinuation",
    "ClockResponse",
    "GameStatusResponse",
    "HealthResponse",
    "TranscriptLine",
    "TreeNodeView",
    # Exceptions
    "SoulBridgeClientError",
    "ConnectionError",
    "TimeoutError",
    "APIError",
    "BadRequestError",
    "NotFoundError",
    "ConflictError",
    "ValidationError",
    "ServerError",
]
