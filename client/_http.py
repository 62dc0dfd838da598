"""Internal HTTP layer for the Soul Bridge client.

Sync and async clients share the same response parsing, status mapping and
retry policy; only the transport calls and sleeps differ.

This is an internal module and should not be imported directly by users.
"""

import asyncio
import time
from typing import Any, Literal

import httpx

from client.exceptions import (
    APIError,
    BadRequestError,
    ConflictError,
    ConnectionError,
    NotFoundError,
    ServerError,
    TimeoutError,
    ValidationError,
)

HttpMethod = Literal["GET", "POST"]

# Status codes retried when retry is enabled
RETRYABLE_STATUS_CODES = {502, 503, 504}

DEFAULT_RETRY_BACKOFF_BASE = 0.5  # seconds
DEFAULT_RETRY_BACKOFF_MAX = 30.0  # seconds

_STATUS_ERRORS: dict[int, type[APIError]] = {
    400: BadRequestError,
    404: NotFoundError,
    409: ConflictError,
    422: ValidationError,
}


def _parse_error_response(response: httpx.Response) -> tuple[str, str | None, dict | None]:
    """Extract (message, error_type, details) from an error response.

    Understands the server's ``{"error", "detail", ...}`` bodies and
    FastAPI's list-of-errors validation bodies; falls back to raw text.
    """
    try:
        body = response.json()
    except ValueError:
        text = response.text.strip()
        return (text or f"HTTP {response.status_code} error"), None, None

    if not isinstance(body, dict):
        return str(body), None, None

    detail = body.get("detail")
    error_type = body.get("error")

    if isinstance(detail, list):
        messages = [
            f"{err.get('loc', ['unknown'])[-1]}: {err.get('msg', 'invalid')}"
            for err in detail
        ]
        return "; ".join(messages), "validation_error", {"errors": detail}

    if body.get("validation_errors"):
        return str(detail), error_type, {"errors": body["validation_errors"]}

    if isinstance(detail, str):
        return detail, error_type, None

    if error_type:
        return error_type, error_type, None

    return str(body), None, None


def _raise_for_status(response: httpx.Response) -> None:
    """Raise the APIError subclass matching an error status code."""
    if response.is_success:
        return

    message, error_type, details = _parse_error_response(response)
    status_code = response.status_code

    try:
        response_body = response.json()
    except ValueError:
        response_body = response.text

    if status_code >= 500:
        raise ServerError(
            message=message,
            status_code=status_code,
            details=details,
            response_body=response_body,
        )

    error_class = _STATUS_ERRORS.get(status_code)
    if error_class is not None:
        raise error_class(message=message, details=details, response_body=response_body)

    raise APIError(
        message=message,
        status_code=status_code,
        error_type=error_type,
        details=details,
        response_body=response_body,
    )


def _calculate_backoff(attempt: int, base: float = DEFAULT_RETRY_BACKOFF_BASE) -> float:
    """Exponential backoff (base * 2^attempt), capped at DEFAULT_RETRY_BACKOFF_MAX."""
    return min(base * (2 ** attempt), DEFAULT_RETRY_BACKOFF_MAX)


def _clean_params(params: dict[str, Any] | None) -> dict[str, Any] | None:
    if not params:
        return params
    return {k: v for k, v in params.items() if v is not None}


def _decode(response: httpx.Response) -> Any:
    _raise_for_status(response)
    if response.content:
        return response.json()
    return None


class _RetryPolicy:
    """Decides whether a failed attempt is retried."""

    def __init__(self, enabled: bool, max_retries: int) -> None:
        self.enabled = enabled
        self.attempts = max_retries + 1 if enabled else 1

    def retry_status(self, response: httpx.Response, attempt: int) -> bool:
        return (
            self.enabled
            and response.status_code in RETRYABLE_STATUS_CODES
            and attempt < self.attempts - 1
        )

    def retry_error(self, attempt: int) -> bool:
        return self.enabled and attempt < self.attempts - 1


def _transport_error(exc: httpx.HTTPError, url: str, timeout: float) -> Exception:
    if isinstance(exc, httpx.TimeoutException):
        return TimeoutError(message=f"Request to {url} timed out", timeout=timeout, url=url)
    return ConnectionError(message=f"Failed to connect to {url}", url=url, cause=exc)


class HTTPClient:
    """Synchronous HTTP client wrapping httpx.Client.

    Attributes:
        base_url: The base URL for all API requests.
        timeout: Request timeout in seconds.
        retry_enabled: Whether to retry on transient failures.
        max_retries: Maximum number of retry attempts.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        retry_enabled: bool = False,
        max_retries: int = 3,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.retry_enabled = retry_enabled
        self.max_retries = max_retries
        self._retry = _RetryPolicy(retry_enabled, max_retries)

        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "HTTPClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def request(
        self,
        method: HttpMethod,
        path: str,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> Any:
        """Send a request and return the decoded JSON body (None if empty).

        Raises:
            ConnectionError: If the connection fails.
            TimeoutError: If the request times out.
            APIError: If the server returns an error response.
        """
        url = f"{self.base_url}{path}"
        params = _clean_params(params)

        for attempt in range(self._retry.attempts):
            try:
                response = self._client.request(method, path, params=params, json=json)
            except (httpx.ConnectError, httpx.TimeoutException) as e:
                if not self._retry.retry_error(attempt):
                    raise _transport_error(e, url, self.timeout) from e
                time.sleep(_calculate_backoff(attempt))
                continue

            if self._retry.retry_status(response, attempt):
                time.sleep(_calculate_backoff(attempt))
                continue

            return _decode(response)

        raise RuntimeError("Unexpected error in request retry loop")

    def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return self.request("GET", path, params=params)

    def post(
        self,
        path: str,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        return self.request("POST", path, params=params, json=json)


class AsyncHTTPClient:
    """Asynchronous HTTP client wrapping httpx.AsyncClient.

    Attributes:
        base_url: The base URL for all API requests.
        timeout: Request timeout in seconds.
        retry_enabled: Whether to retry on transient failures.
        max_retries: Maximum number of retry attempts.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        retry_enabled: bool = False,
        max_retries: int = 3,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.retry_enabled = retry_enabled
        self.max_retries = max_retries
        self._retry = _RetryPolicy(retry_enabled, max_retries)

        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
        )

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "AsyncHTTPClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def request(
        self,
        method: HttpMethod,
        path: str,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> Any:
        """Send a request and return the decoded JSON body (None if empty).

        Raises:
            ConnectionError: If the connection fails.
            TimeoutError: If the request times out.
            APIError: If the server returns an error response.
        """
        url = f"{self.base_url}{path}"
        params = _clean_params(params)

        for attempt in range(self._retry.attempts):
            try:
                response = await self._client.request(method, path, params=params, json=json)
            except (httpx.ConnectError, httpx.TimeoutException) as e:
                if not self._retry.retry_error(attempt):
                    raise _transport_error(e, url, self.timeout) from e
                await asyncio.sleep(_calculate_backoff(attempt))
                continue

            if self._retry.retry_status(response, attempt):
                await asyncio.sleep(_calculate_backoff(attempt))
                continue

            return _decode(response)

        raise RuntimeError("Unexpected error in request retry loop")

    async def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return await self.request("GET", path, params=params)

    async def post(
        self,
        path: str,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        return await self.request("POST", path, params=params, json=json)
