from __future__ import annotations

from typing import Any

from cex_client.core.config import AppConfig
from cex_client.core.types import DEFAULT_PAIR, ApiResponse, Endpoint, OrderRequest, RequestSpec
from cex_client.exchange.adapters.auth import Credentials
from cex_client.exchange.adapters.clock import Clock
from cex_client.exchange.adapters.transport import Transport
from cex_client.exchange.base import ExchangeClient
from cex_client.exchange.cexio.issuer import SignedRequestIssuer


class CexioClient(ExchangeClient):
    def __init__(self, issuer: SignedRequestIssuer) -> None:
        self._issuer = issuer

    @classmethod
    def from_config(
        cls,
        cfg: AppConfig,
        creds: Credentials,
        *,
        transport: Transport | None = None,
        clock: Clock | None = None,
    ) -> CexioClient:
        ex = cfg.exchange
        issuer = SignedRequestIssuer.from_credentials(
            creds,
            ex.agent_label,
            transport=transport,
            clock=clock,
            min_interval_sec=ex.min_interval_sec,
            base_url=ex.base_url,
            timeout_sec=ex.timeout_sec,
        )
        return cls(issuer)

    @property
    def issuer(self) -> SignedRequestIssuer:
        return self._issuer

    async def close(self) -> None:
        await self._issuer.close()

    async def ticker(self, pair: str = DEFAULT_PAIR) -> ApiResponse:
        return await self._issuer.public_call(RequestSpec(Endpoint.TICKER, pair=pair))

    async def order_book(self, pair: str = DEFAULT_PAIR) -> ApiResponse:
        return await self._issuer.public_call(RequestSpec(Endpoint.ORDER_BOOK, pair=pair))

    async def balance(self) -> ApiResponse:
        return await self._issuer.throttled_call(RequestSpec(Endpoint.BALANCE))

    async def open_orders(self, pair: str = DEFAULT_PAIR) -> ApiResponse:
        return await self._issuer.throttled_call(RequestSpec(Endpoint.OPEN_ORDERS, pair=pair))

    async def place_order(self, req: OrderRequest) -> ApiResponse:
        spec = RequestSpec(Endpoint.PLACE_ORDER, pair=req.pair, params=req.to_params())
        return await self._issuer.throttled_call(spec)

    async def cancel_order(self, order_id: str) -> ApiResponse:
        spec = RequestSpec(Endpoint.CANCEL_ORDER, params={"id": str(order_id)})
        return await self._issuer.throttled_call(spec)

    async def trade_history(self, *args: Any, **kwargs: Any) -> ApiResponse:
        # raises NotImplementedError: the endpoint is declared but not built
        spec = RequestSpec(Endpoint.TRADE_HISTORY, params=dict(kwargs))
        return await self._issuer.throttled_call(spec)
