"""Exception hierarchy for the Soul Bridge API client.

Exception Hierarchy:
    SoulBridgeClientError (base)
    ├── ConnectionError - Network/connection failures
    ├── TimeoutError - Request timeout
    └── APIError - Server returned an error response
        ├── BadRequestError (HTTP 400)
        ├── NotFoundError (HTTP 404)
        ├── ConflictError (HTTP 409)
        ├── ValidationError (HTTP 422)
        └── ServerError (HTTP 5xx)

Example:
    Commands are refused while the game is booting or on an ending screen::

        try:
            client.terminal.run("ls")
        except ConflictError as e:
            print(f"Not now, the game is in {e.game_state}")
"""

from typing import Any


class SoulBridgeClientError(Exception):
    """Base exception for all client errors.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


class ConnectionError(SoulBridgeClientError):
    """Failed to connect to the game server.

    Attributes:
        url: The URL that failed to connect.
        cause: The underlying httpx exception.
    """

    def __init__(
        self,
        message: str,
        url: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.url = url
        self.cause = cause
        super().__init__(message)

    def __str__(self) -> str:
        if self.url:
            return f"{self.message} (url: {self.url})"
        return self.message


class TimeoutError(SoulBridgeClientError):
    """Request took longer than the configured timeout.

    Attributes:
        timeout: The timeout value in seconds.
        url: The URL that timed out.
    """

    def __init__(
        self,
        message: str,
        timeout: float | None = None,
        url: str | None = None,
    ) -> None:
        self.timeout = timeout
        self.url = url
        super().__init__(message)

    def __str__(self) -> str:
        extras = []
        if self.timeout is not None:
            extras.append(f"timeout: {self.timeout}s")
        if self.url:
            extras.append(f"url: {self.url}")
        if not extras:
            return self.message
        return f"{self.message} ({', '.join(extras)})"


class APIError(SoulBridgeClientError):
    """Server returned an HTTP error status.

    Attributes:
        status_code: HTTP status code.
        error_type: The ``error`` field of the response body, if any.
        details: Structured details from the response body, if any.
        response_body: Raw response body for debugging.
    """

    def __init__(
        self,
        message: str,
        status_code: int,
        error_type: str | None = None,
        details: dict[str, Any] | None = None,
        response_body: Any = None,
    ) -> None:
        self.status_code = status_code
        self.error_type = error_type
        self.details = details
        self.response_body = response_body
        super().__init__(message)

    def __str__(self) -> str:
        if self.error_type:
            return f"[HTTP {self.status_code}] [{self.error_type}] {self.message}"
        return f"[HTTP {self.status_code}] {self.message}"


class BadRequestError(APIError):
    """The game rejected a value (HTTP 400), e.g. advancing a paused clock."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        response_body: Any = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=400,
            error_type="bad_request",
            details=details,
            response_body=response_body,
        )


class NotFoundError(APIError):
    """Unknown endpoint (HTTP 404)."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        response_body: Any = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=404,
            error_type="not_found",
            details=details,
            response_body=response_body,
        )


class ConflictError(APIError):
    """Operation not allowed in the current game phase (HTTP 409).

    Raised for commands outside PLAYING and for restore outside WIN/LOSE.

    Attributes:
        game_state: The phase reported by the server, if any.
    """

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        response_body: Any = None,
    ) -> None:
        self.game_state = (
            response_body.get("game_state") if isinstance(response_body, dict) else None
        )
        super().__init__(
            message=message,
            status_code=409,
            error_type="conflict",
            details=details,
            response_body=response_body,
        )


class ValidationError(APIError):
    """Request body or query failed validation (HTTP 422)."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        response_body: Any = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=422,
            error_type="validation_error",
            details=details,
            response_body=response_body,
        )


class ServerError(APIError):
    """Server-side failure (HTTP 5xx); retried when retry is enabled."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
        response_body: Any = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=status_code,
            error_type="server_error",
            details=details,
            response_body=response_body,
        )
