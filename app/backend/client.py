"""Shared httpx client for the Bookworm REST backend."""
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import httpx

from app.config import settings
from app.utils.logger import get_logger

logger = get_logger(__name__)

_client: Optional[httpx.AsyncClient] = None


class BackendError(Exception):
    """A backend call failed; ``message`` is safe to show to the user."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


@dataclass
class BackendResponse:
    """Unwrapped ``{success, message, data, pagination|meta}`` envelope."""

    data: Any = None
    message: Optional[str] = None
    pagination: Optional[Dict[str, Any]] = None
    raw: Dict[str, Any] = field(default_factory=dict)


class BackendClient:
    """Thin wrapper that unwraps the backend envelope and raises ``BackendError``."""

    def __init__(self, http: httpx.AsyncClient, token: Optional[str] = None):
        self._http = http
        self.token = token

    def with_token(self, token: Optional[str]) -> "BackendClient":
        return BackendClient(self._http, token)

    async def request(
        self,
        method: str,
        path: str,
        error_message: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> BackendResponse:
        headers = {}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        try:
            response = await self._http.request(
                method, path, params=params, json=json, headers=headers
            )
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise BackendError(error_message) from exc

        try:
            payload = response.json()
        except ValueError:
            payload = {}
        if not isinstance(payload, dict):
            payload = {"success": response.is_success, "data": payload}

        if response.is_error or payload.get("success") is False:
            logger.warning("%s %s -> %s", method, path, response.status_code)
            raise BackendError(payload.get("message") or error_message, response.status_code)

        return BackendResponse(
            data=payload.get("data"),
            message=payload.get("message"),
            pagination=payload.get("pagination") or payload.get("meta"),
            raw=payload,
        )

    async def get(self, path: str, error_message: str, params: Optional[Dict[str, Any]] = None):
        return await self.request("GET", path, error_message, params=params)

    async def post(self, path: str, error_message: str, json: Optional[Dict[str, Any]] = None):
        return await self.request("POST", path, error_message, json=json)

    async def put(self, path: str, error_message: str, json: Optional[Dict[str, Any]] = None):
        return await self.request("PUT", path, error_message, json=json)

    async def patch(self, path: str, error_message: str, json: Optional[Dict[str, Any]] = None):
        return await self.request("PATCH", path, error_message, json=json)

    async def delete(self, path: str, error_message: str, json: Optional[Dict[str, Any]] = None):
        return await self.request("DELETE", path, error_message, json=json)


def init_client() -> httpx.AsyncClient:
    """Create the process-wide httpx client."""
    global _client
    if _client is None:
        _client = httpx.AsyncClient(
            base_url=settings.api_base_url,
            timeout=httpx.Timeout(settings.api_timeout_seconds, connect=5.0),
            limits=httpx.Limits(max_keepalive_connections=20, max_connections=100),
            follow_redirects=True,
        )
        logger.info("Backend client ready for %s", settings.api_base_url)
    return _client


def get_client() -> httpx.AsyncClient:
    if _client is None:
        return init_client()
    return _client


async def close_client() -> None:
    global _client
    if _client:
        await _client.aclose()
        _client = None
