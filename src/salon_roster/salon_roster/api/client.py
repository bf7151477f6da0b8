from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

import httpx

from ..core.constants import DEFAULT_REQUEST_TIMEOUT
from ..core.exceptions import RemoteFailure

logger = logging.getLogger(__name__)


@dataclass
class ApiConfig:
    base_url: str
    token: Optional[str] = None
    timeout: float = DEFAULT_REQUEST_TIMEOUT


class ApiClient:
    """Async JSON client for the dashboard backend.

    Every transport or HTTP error surfaces as RemoteFailure. Timeouts are the
    transport's job; there are no retries here.
    """

    def __init__(self, config: ApiConfig, *, transport: Optional[httpx.AsyncBaseTransport] = None):
        headers = {"Accept": "application/json"}
        if config.token:
            headers["Authorization"] = f"Bearer {config.token}"
        self._config = config
        self._client = httpx.AsyncClient(
            base_url=config.base_url.rstrip("/"),
            headers=headers,
            timeout=config.timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def get_json(self, path: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        clean = {k: v for k, v in (params or {}).items() if v is not None}
        return await self._request("GET", path, params=clean)

    async def put_json(self, path: str, body: Any) -> Any:
        return await self._request("PUT", path, json=body)

    async def post_json(self, path: str, body: Any) -> Any:
        return await self._request("POST", path, json=body)

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        try:
            response = await self._client.request(method, path, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            message = _error_message(e.response) or f"HTTP {status}"
            logger.error("%s %s failed with %s: %s", method, path, status, message)
            raise RemoteFailure(message, path=path, status_code=status) from e
        except httpx.HTTPError as e:
            logger.error("%s %s failed: %s", method, path, e)
            raise RemoteFailure(f"Сервер недоступен: {e}", path=path) from e

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise RemoteFailure("Некорректный ответ сервера", path=path, status_code=response.status_code) from e


def _error_message(response: httpx.Response) -> Optional[str]:
    try:
        data = response.json()
    except ValueError:
        return response.text or None
    if isinstance(data, dict) and isinstance(data.get("message"), str):
        return data["message"]
    return None
