"""Base classes for the sub-clients.

Every Soul Bridge endpoint answers with a JSON object that maps onto one
pydantic response model, so the sub-clients ask for a model instead of a
raw dict. Decoding errors surface as ``pydantic.ValidationError``.

This is an internal module and should not be imported directly by users.
"""

from typing import TYPE_CHECKING, Any, TypeVar

from pydantic import BaseModel

if TYPE_CHECKING:
    from client._http import AsyncHTTPClient, HTTPClient

ModelT = TypeVar("ModelT", bound=BaseModel)


def _parse(model: type[ModelT], data: Any) -> ModelT:
    """Validate a decoded response body into ``model``."""
    return model.model_validate(data or {})


class BaseClient:
    """Base class for synchronous sub-clients.

    Attributes:
        _http: The shared HTTP client for making requests.
        _BASE_PATH: Route prefix of the sub-client (e.g. ``/terminal``).
    """

    _BASE_PATH = ""

    def __init__(self, http_client: "HTTPClient") -> None:
        self._http = http_client

    def _get(self, endpoint: str, model: type[ModelT], **params: Any) -> ModelT:
        data = self._http.get(f"{self._BASE_PATH}{endpoint}", params=params or None)
        return _parse(model, data)

    def _post(
        self,
        endpoint: str,
        model: type[ModelT],
        json: dict[str, Any] | None = None,
    ) -> ModelT:
        data = self._http.post(f"{self._BASE_PATH}{endpoint}", json=json)
        return _parse(model, data)


class AsyncBaseClient:
    """Base class for asynchronous sub-clients.

    Attributes:
        _http: The shared async HTTP client for making requests.
        _BASE_PATH: Route prefix of the sub-client.
    """

    _BASE_PATH = ""

    def __init__(self, http_client: "AsyncHTTPClient") -> None:
        self._http = http_client

    async def _get(self, endpoint: str, model: type[ModelT], **params: Any) -> ModelT:
        data = await self._http.get(f"{self._BASE_PATH}{endpoint}", params=params or None)
        return _parse(model, data)

    async def _post(
        self,
        endpoint: str,
        model: type[ModelT],
        json: dict[str, Any] | None = None,
    ) -> ModelT:
        data = await self._http.post(f"{self._BASE_PATH}{endpoint}", json=json)
        return _parse(model, data)
