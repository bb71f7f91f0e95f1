from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from cex_client.core.types import DEFAULT_PAIR, ApiResponse, OrderRequest


class ExchangeClient(ABC):
    """Abstract trading API client. Every operation returns the response envelope unchanged."""

    @abstractmethod
    async def ticker(self, pair: str = DEFAULT_PAIR) -> ApiResponse:
        raise NotImplementedError

    @abstractmethod
    async def order_book(self, pair: str = DEFAULT_PAIR) -> ApiResponse:
        raise NotImplementedError

    @abstractmethod
    async def balance(self) -> ApiResponse:
        raise NotImplementedError

    @abstractmethod
    async def open_orders(self, pair: str = DEFAULT_PAIR) -> ApiResponse:
        raise NotImplementedError

    @abstractmethod
    async def place_order(self, req: OrderRequest) -> ApiResponse:
        raise NotImplementedError

    @abstractmethod
    async def cancel_order(self, order_id: str) -> ApiResponse:
        raise NotImplementedError

    @abstractmethod
    async def trade_history(self, *args: Any, **kwargs: Any) -> ApiResponse:
        raise NotImplementedError

    @abstractmethod
    async def close(self) -> None:
        raise NotImplementedError
