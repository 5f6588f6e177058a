"""Base HTTP client shared by the fleet service clients."""

import logging
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any, Callable, Dict, Generic, Optional, TypeVar

import httpx

from viewmodels.session import Session

logger = logging.getLogger(__name__)

T = TypeVar("T")
U = TypeVar("U")

JSON_HEADERS = {"Content-Type": "application/json", "Accept": "application/json"}


@dataclass
class ApiResult(Generic[T]):
    """Uniform outcome of a service call. Never raised, always returned."""

    success: bool
    data: Optional[T] = None
    error: Optional[str] = None
    status_code: Optional[int] = None

    @classmethod
    def ok(cls, data: T, status_code: Optional[int] = None) -> "ApiResult[T]":
        return cls(success=True, data=data, status_code=status_code)

    @classmethod
    def failure(cls, error: str, status_code: Optional[int] = None) -> "ApiResult[T]":
        return cls(success=False, error=error, status_code=status_code)

    def map(self, fn: Callable[[T], U]) -> "ApiResult[U]":
        """Transform the payload of a successful result.

        A ValueError from fn (malformed payload) becomes a failed result.
        """
        if not self.success:
            return ApiResult(False, None, self.error, self.status_code)
        try:
            return ApiResult(True, fn(self.data), None, self.status_code)
        except ValueError as e:
            logger.warning("Malformed response payload: %s", e)
            return ApiResult.failure(f"Malformed response: {e}", self.status_code)


def to_json(value: Any) -> Any:
    """Make request bodies JSON-serialisable (dates, enums)."""
    if isinstance(value, dict):
        return {k: to_json(v) for k, v in value.items() if v is not None}
    if isinstance(value, (list, tuple)):
        return [to_json(v) for v in value]
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    return value


class ServiceClient:
    """
    Thin JSON-over-HTTP client for one fleet microservice.

    Every request uses the configured timeout. Failures (network errors,
    timeouts, non-2xx responses) come back as failed ApiResults; nothing is
    retried.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        session: Optional[Session] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session
        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=timeout,
            headers=JSON_HEADERS,
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def _auth_headers(self) -> Dict[str, str]:
        if self.session is not None and self.session.is_valid():
            return {"Authorization": f"Bearer {self.session.token}"}
        return {}

    def request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json: Any = None,
    ) -> ApiResult[Any]:
        if params:
            params = {k: v for k, v in params.items() if v is not None and v != []}
        body = to_json(json) if json is not None else None
        logger.debug("%s %s%s params=%s", method, self.base_url, path, params)
        try:
            response = self._client.request(
                method, path, params=params, json=body, headers=self._auth_headers()
            )
        except httpx.TimeoutException:
            logger.warning("%s %s%s timed out after %ss", method, self.base_url, path, self.timeout)
            return ApiResult.failure(f"Request timed out after {self.timeout:g}s")
        except httpx.HTTPError as e:
            logger.warning("%s %s%s failed: %s", method, self.base_url, path, e)
            return ApiResult.failure(str(e) or "Unable to reach service")
        return self._handle_response(response)

    def _handle_response(self, response: httpx.Response) -> ApiResult[Any]:
        if not response.is_success:
            message = None
            try:
                payload = response.json()
            except ValueError:
                payload = None
            if isinstance(payload, dict):
                message = payload.get("message") or payload.get("error")
            error = message or f"HTTP Error: {response.status_code}"
            logger.warning(
                "%s %s -> %d: %s",
                response.request.method,
                response.request.url,
                response.status_code,
                error,
            )
            return ApiResult.failure(error, response.status_code)

        if response.status_code == 204 or not response.content:
            return ApiResult.ok(None, response.status_code)
        try:
            return ApiResult.ok(response.json(), response.status_code)
        except ValueError:
            logger.warning("Invalid JSON from %s", response.request.url)
            return ApiResult.failure("Invalid JSON response", response.status_code)

    def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> ApiResult[Any]:
        return self.request("GET", path, params=params)

    def post(self, path: str, data: Any = None) -> ApiResult[Any]:
        return self.request("POST", path, json=data)

    def put(self, path: str, data: Any) -> ApiResult[Any]:
        return self.request("PUT", path, json=data)

    def patch(self, path: str, data: Any) -> ApiResult[Any]:
        return self.request("PATCH", path, json=data)

    def delete(self, path: str) -> ApiResult[Any]:
        return self.request("DELETE", path)
