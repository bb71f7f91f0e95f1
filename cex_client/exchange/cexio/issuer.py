from __future__ import annotations

import asyncio
import logging
from typing import Any, Mapping

from cex_client.core.config import DEFAULT_AGENT_LABEL, DEFAULT_BASE_URL
from cex_client.core.types import ApiResponse, RequestSpec
from cex_client.exchange.adapters.auth import Credentials, sign_nonce
from cex_client.exchange.adapters.clock import Clock, SystemClock
from cex_client.exchange.adapters.nonce import NonceGenerator
from cex_client.exchange.adapters.rate_limiter import MinIntervalThrottle
from cex_client.exchange.adapters.transport import HttpxTransport, Transport


class SignedRequestIssuer:
    """
    Owns credentials, nonce and throttle state for one API account.

    Every call goes through one lock: wait out the throttle, draw a nonce, sign,
    dispatch. Holding the lock across dispatch keeps nonces arriving at the
    service in increasing order when several tasks share the issuer.
    Transport errors propagate unchanged; `{"error": ...}` payloads are
    returned as data.
    """

    def __init__(
        self,
        user: str,
        key: str,
        secret: str,
        agent_label: str | None = None,
        *,
        transport: Transport | None = None,
        clock: Clock | None = None,
        min_interval_sec: float = 1.0,
        base_url: str = DEFAULT_BASE_URL,
        timeout_sec: float = 10.0,
    ) -> None:
        # raises ConfigurationError on empty values before anything else is built
        self._creds = Credentials(user=user, key=key, secret=secret)
        self.agent_label = agent_label or DEFAULT_AGENT_LABEL
        self._clock = clock or SystemClock()
        self._nonces = NonceGenerator(self._clock)
        self._throttle = MinIntervalThrottle(min_interval_sec, self._clock)
        self._transport = transport or HttpxTransport(
            base_url, timeout_sec=timeout_sec, user_agent=self.agent_label
        )
        self._lock = asyncio.Lock()
        self._log = logging.getLogger("cexio")

    @classmethod
    def from_credentials(cls, creds: Credentials, agent_label: str | None = None, **kwargs: Any) -> SignedRequestIssuer:
        return cls(creds.user, creds.key, creds.secret, agent_label, **kwargs)

    @property
    def user(self) -> str:
        return self._creds.user

    @property
    def throttle(self) -> MinIntervalThrottle:
        return self._throttle

    async def close(self) -> None:
        await self._transport.close()

    def next_nonce(self) -> int:
        return self._nonces.next()

    def sign(self, nonce: int, params: Mapping[str, Any] | None = None) -> str:
        """
        Signature for one request. `params` is accepted for symmetry with the
        request being signed; the service's scheme covers only nonce, user and key.
        """
        _ = params
        return sign_nonce(nonce, self._creds)

    async def throttled_call(self, spec: RequestSpec) -> ApiResponse:
        return await self._dispatch(spec, authenticate=spec.requires_auth)

    async def public_call(self, spec: RequestSpec) -> ApiResponse:
        return await self._dispatch(spec, authenticate=False)

    async def _dispatch(self, spec: RequestSpec, *, authenticate: bool) -> ApiResponse:
        async with self._lock:
            waited = await self._throttle.acquire()
            params: dict[str, Any] = dict(spec.params)
            nonce = None
            if authenticate:
                nonce = self.next_nonce()
                params["key"] = self._creds.key
                params["signature"] = self.sign(nonce, spec.params)
                params["nonce"] = nonce
            self._log.debug(
                "dispatch %s pair=%s auth=%s nonce=%s waited=%.3fs",
                spec.endpoint.path,
                spec.pair,
                authenticate,
                nonce,
                waited,
            )
            raw = await self._transport.request(spec.endpoint.http_method, spec.path, params)
        return ApiResponse(raw)
