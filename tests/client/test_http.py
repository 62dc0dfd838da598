"""Unit tests for the client HTTP layer.

Every request goes through httpx.MockTransport, so no server is needed.
"""

import json

import httpx
import pytest

from client import _http
from client._http import (
    DEFAULT_RETRY_BACKOFF_MAX,
    AsyncHTTPClient,
    HTTPClient,
    _calculate_backoff,
    _parse_error_response,
    _raise_for_status,
)
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


def make_client(handler, **kwargs) -> HTTPClient:
    return HTTPClient(
        base_url="http://localhost:8000/",
        transport=httpx.MockTransport(handler),
        **kwargs,
    )


@pytest.fixture
def no_backoff(monkeypatch):
    """Make retries immediate."""
    monkeypatch.setattr(_http, "_calculate_backoff", lambda attempt, base=0.5: 0)


# =============================================================================
# Response parsing
# =============================================================================


class TestParseErrorResponse:
    """Tests for _parse_error_response()."""

    def test_server_error_body(self) -> None:
        """The server's {error, detail} bodies keep both parts."""
        response = httpx.Response(
            409, json={"error": "Game State Conflict", "detail": "Not now", "game_state": "BOOT"}
        )

        assert _parse_error_response(response) == ("Not now", "Game State Conflict", None)

    def test_fastapi_validation_list(self) -> None:
        errors = [{"loc": ["body", "seconds"], "msg": "must be >= 0"}]
        response = httpx.Response(422, json={"detail": errors})

        message, error_type, details = _parse_error_response(response)

        assert message == "seconds: must be >= 0"
        assert error_type == "validation_error"
        assert details == {"errors": errors}

    def test_plain_text(self) -> None:
        response = httpx.Response(502, content=b"Bad gateway")

        assert _parse_error_response(response) == ("Bad gateway", None, None)

    def test_empty_body(self) -> None:
        response = httpx.Response(503, content=b"")

        assert _parse_error_response(response)[0] == "HTTP 503 error"


class TestRaiseForStatus:
    """Tests for the status-to-exception mapping."""

    def test_success_does_not_raise(self) -> None:
        _raise_for_status(httpx.Response(200, json={}))

    @pytest.mark.parametrize(
        "status_code, error_class",
        [
            (400, BadRequestError),
            (404, NotFoundError),
            (409, ConflictError),
            (422, ValidationError),
            (500, ServerError),
            (503, ServerError),
        ],
    )
    def test_mapping(self, status_code, error_class) -> None:
        with pytest.raises(error_class) as exc_info:
            _raise_for_status(httpx.Response(status_code, json={"detail": "x"}))

        assert exc_info.value.status_code == status_code

    def test_other_4xx_is_generic(self) -> None:
        with pytest.raises(APIError) as exc_info:
            _raise_for_status(httpx.Response(418, json={"detail": "teapot"}))

        assert type(exc_info.value) is APIError
        assert exc_info.value.message == "teapot"

    def test_conflict_carries_game_state(self) -> None:
        response = httpx.Response(
            409, json={"error": "Game State Conflict", "detail": "no", "game_state": "WIN"}
        )

        with pytest.raises(ConflictError) as exc_info:
            _raise_for_status(response)

        assert exc_info.value.game_state == "WIN"
        assert exc_info.value.response_body["detail"] == "no"


class TestCalculateBackoff:
    def test_exponential(self) -> None:
        assert [_calculate_backoff(n) for n in range(3)] == [0.5, 1.0, 2.0]

    def test_capped(self) -> None:
        assert _calculate_backoff(20) == DEFAULT_RETRY_BACKOFF_MAX


# =============================================================================
# HTTPClient
# =============================================================================


class TestHTTPClientRequests:
    """Tests for request building and decoding."""

    def test_base_url_trailing_slash_stripped(self) -> None:
        client = make_client(lambda request: httpx.Response(200))

        assert client.base_url == "http://localhost:8000"
        client.close()

    def test_get_drops_none_params(self) -> None:
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["params"] = dict(request.url.params)
            return httpx.Response(200, json={"ok": True})

        with make_client(handler) as client:
            assert client.get("/terminal/history", params={"since": 3, "x": None}) == {"ok": True}

        assert seen["params"] == {"since": "3"}

    def test_post_sends_json(self) -> None:
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={})

        with make_client(handler) as client:
            client.post("/terminal/command", json={"line": "ls"})

        assert seen["method"] == "POST"
        assert seen["body"] == {"line": "ls"}

    def test_empty_response_returns_none(self) -> None:
        with make_client(lambda request: httpx.Response(204)) as client:
            assert client.post("/game/restart") is None


class TestHTTPClientErrors:
    def test_connection_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused")

        with make_client(handler) as client:
            with pytest.raises(ConnectionError) as exc_info:
                client.get("/health")

        assert exc_info.value.url == "http://localhost:8000/health"

    def test_timeout(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("slow")

        with make_client(handler, timeout=5.0) as client:
            with pytest.raises(TimeoutError) as exc_info:
                client.get("/health")

        assert exc_info.value.timeout == 5.0


class TestHTTPClientRetry:
    """Tests for the retry policy."""

    def test_no_retry_by_default(self) -> None:
        attempts = []

        def handler(request: httpx.Request) -> httpx.Response:
            attempts.append(1)
            return httpx.Response(503, json={"detail": "busy"})

        with make_client(handler) as client:
            with pytest.raises(ServerError):
                client.get("/health")

        assert len(attempts) == 1

    def test_retries_transient_status(self, no_backoff) -> None:
        attempts = []

        def handler(request: httpx.Request) -> httpx.Response:
            attempts.append(1)
            if len(attempts) < 3:
                return httpx.Response(503)
            return httpx.Response(200, json={"status": "healthy"})

        with make_client(handler, retry_enabled=True, max_retries=3) as client:
            assert client.get("/health") == {"status": "healthy"}

        assert len(attempts) == 3

    def test_gives_up_after_max_retries(self, no_backoff) -> None:
        attempts = []

        def handler(request: httpx.Request) -> httpx.Response:
            attempts.append(1)
            return httpx.Response(502)

        with make_client(handler, retry_enabled=True, max_retries=2) as client:
            with pytest.raises(ServerError):
                client.get("/health")

        assert len(attempts) == 3

    def test_conflict_is_never_retried(self, no_backoff) -> None:
        attempts = []

        def handler(request: httpx.Request) -> httpx.Response:
            attempts.append(1)
            return httpx.Response(409, json={"detail": "booting", "game_state": "BOOT"})

        with make_client(handler, retry_enabled=True) as client:
            with pytest.raises(ConflictError):
                client.post("/terminal/command", json={"line": "ls"})

        assert len(attempts) == 1

    def test_retries_connection_errors(self, no_backoff) -> None:
        attempts = []

        def handler(request: httpx.Request) -> httpx.Response:
            attempts.append(1)
            if len(attempts) == 1:
                raise httpx.ConnectError("refused")
            return httpx.Response(200, json={})

        with make_client(handler, retry_enabled=True) as client:
            assert client.get("/health") == {}

        assert len(attempts) == 2


# =============================================================================
# AsyncHTTPClient
# =============================================================================


class TestAsyncHTTPClient:
    """Tests for the async HTTP client."""

    async def test_get(self) -> None:
        async def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"status": "healthy"})

        async with AsyncHTTPClient(
            base_url="http://localhost:8000", transport=httpx.MockTransport(handler)
        ) as client:
            assert await client.get("/health") == {"status": "healthy"}

    async def test_error_mapping(self) -> None:
        async def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(400, json={"error": "Invalid Value", "detail": "paused"})

        async with AsyncHTTPClient(
            base_url="http://localhost:8000", transport=httpx.MockTransport(handler)
        ) as client:
            with pytest.raises(BadRequestError) as exc_info:
                await client.post("/game/time/advance", json={"seconds": 1})

        assert exc_info.value.message == "paused"

    async def test_retries_transient_status(self, no_backoff) -> None:
        attempts = []

        async def handler(request: httpx.Request) -> httpx.Response:
            attempts.append(1)
            if len(attempts) < 2:
                return httpx.Response(504)
            return httpx.Response(200, json={})

        async with AsyncHTTPClient(
            base_url="http://localhost:8000",
            retry_enabled=True,
            transport=httpx.MockTransport(handler),
        ) as client:
            assert await client.get("/health") == {}

        assert len(attempts) == 2
