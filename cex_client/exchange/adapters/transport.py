from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

import httpx

from cex_client.core.errors import TransportError


class Transport(ABC):
    """HTTP collaborator: sends one request and returns the decoded JSON payload."""

    @abstractmethod
    async def request(self, method: str, path: str, params: dict[str, Any]) -> Any:
        raise NotImplementedError

    @abstractmethod
    async def close(self) -> None:
        raise NotImplementedError


class HttpxTransport(Transport):
    def __init__(
        self,
        base_url: str,
        *,
        timeout_sec: float = 10.0,
        user_agent: str | None = None,
        http_transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        headers = {"User-Agent": user_agent} if user_agent else {}
        # trailing slash so relative paths like "ticker/GHS/BTC/" join under /api/
        base = base_url.rstrip("/") + "/"
        self._http = httpx.AsyncClient(
            base_url=base, timeout=timeout_sec, headers=headers, transport=http_transport
        )
        self._log = logging.getLogger("cexio.transport")

    async def close(self) -> None:
        await self._http.aclose()

    async def request(self, method: str, path: str, params: dict[str, Any]) -> Any:
        items = [(str(k), str(v)) for k, v in params.items() if v is not None]
        try:
            if method == "GET":
                r = await self._http.request(method, path, params=items)
            else:
                r = await self._http.request(method, path, data=dict(items))
        except httpx.HTTPError as e:
            raise TransportError(f"{method} {path} failed: {e}") from e

        try:
            payload = r.json()
        except ValueError as e:
            raise TransportError(f"{method} {path}: undecodable response http={r.status_code}") from e

        if r.status_code >= 400 and not (isinstance(payload, dict) and "error" in payload):
            raise TransportError(f"{method} {path}: http={r.status_code}")
        self._log.debug("%s %s -> http=%s", method, path, r.status_code)
        return payload
