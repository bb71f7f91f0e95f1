from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any

from cex_client.core.errors import RemoteApiError

DEFAULT_PAIR = "GHS/BTC"
# Reference only; pairs are passed to the service unvalidated.
KNOWN_PAIRS = ("GHS/BTC", "NMC/BTC", "GHS/NMC", "BF1/BTC")


def to_decimal(value: Any) -> Decimal:
    # str() first so JSON floats keep their printed digits (0.054 -> "0.054")
    return Decimal(str(value))


def positive_decimal(name: str, value: Any) -> Decimal:
    try:
        d = to_decimal(value)
    except InvalidOperation as e:
        raise ValueError(f"{name} must be a number, got {value!r}") from e
    if not d.is_finite() or d <= 0:
        raise ValueError(f"{name} must be a positive finite number, got {value!r}")
    return d


def _opt_decimal(value: Any) -> Decimal | None:
    if value is None or value == "":
        return None
    return to_decimal(value)


class Side(str, Enum):
    BUY = "buy"
    SELL = "sell"


class Endpoint(Enum):
    """Operations of the trading API: (path, requires_auth, implemented)."""

    TICKER = ("ticker", False, True)
    ORDER_BOOK = ("order_book", False, True)
    BALANCE = ("balance", True, True)
    OPEN_ORDERS = ("open_orders", True, True)
    PLACE_ORDER = ("place_order", True, True)
    CANCEL_ORDER = ("cancel_order", True, True)
    TRADE_HISTORY = ("trade_history", True, False)

    def __init__(self, path: str, requires_auth: bool, implemented: bool) -> None:
        self.path = path
        self.requires_auth = requires_auth
        self.implemented = implemented

    @property
    def http_method(self) -> str:
        return "POST" if self.requires_auth else "GET"


@dataclass(frozen=True)
class RequestSpec:
    endpoint: Endpoint
    pair: str | None = None
    params: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.endpoint.implemented:
            raise NotImplementedError(f"endpoint '{self.endpoint.path}' is not implemented")

    @property
    def requires_auth(self) -> bool:
        return self.endpoint.requires_auth

    @property
    def path(self) -> str:
        if self.pair:
            return f"{self.endpoint.path}/{self.pair}/"
        return f"{self.endpoint.path}/"


@dataclass(frozen=True)
class ApiResponse:
    """
    Parsed response envelope, kept exactly as the service sent it.

    The service reports business errors (bad permissions, unknown pair, ...) as
    `{"error": "..."}` with a normal status, so callers check `ok`/`error`
    before reading domain fields.
    """

    raw: Any

    @property
    def error(self) -> str | None:
        if isinstance(self.raw, dict) and "error" in self.raw:
            return str(self.raw["error"])
        return None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Any:
        err = self.error
        if err is not None:
            raise RemoteApiError(err, payload=self.raw)
        return self.raw


@dataclass(frozen=True)
class Ticker:
    high: Decimal
    low: Decimal
    bid: Decimal
    ask: Decimal
    last: Decimal
    volume: Decimal
    timestamp: int

    @classmethod
    def from_raw(cls, raw: dict[str, Any]) -> Ticker:
        return cls(
            high=to_decimal(raw["high"]),
            low=to_decimal(raw["low"]),
            bid=to_decimal(raw["bid"]),
            ask=to_decimal(raw["ask"]),
            last=to_decimal(raw["last"]),
            volume=to_decimal(raw["volume"]),
            timestamp=int(raw["timestamp"]),
        )


@dataclass(frozen=True)
class OrderBook:
    asks: list[tuple[Decimal, Decimal]]
    bids: list[tuple[Decimal, Decimal]]
    timestamp: int | None = None

    @classmethod
    def from_raw(cls, raw: dict[str, Any]) -> OrderBook:
        def _levels(rows: list[list[Any]]) -> list[tuple[Decimal, Decimal]]:
            return [(to_decimal(r[0]), to_decimal(r[1])) for r in rows]

        ts = raw.get("timestamp")
        return cls(
            asks=_levels(raw.get("asks", [])),
            bids=_levels(raw.get("bids", [])),
            timestamp=int(ts) if ts is not None else None,
        )

    @property
    def best_ask(self) -> Decimal | None:
        return min((p for p, _ in self.asks), default=None)

    @property
    def best_bid(self) -> Decimal | None:
        return max((p for p, _ in self.bids), default=None)

    @property
    def spread(self) -> Decimal | None:
        ask, bid = self.best_ask, self.best_bid
        if ask is None or bid is None:
            return None
        return ask - bid


@dataclass(frozen=True)
class CurrencyBalance:
    available: Decimal
    orders: Decimal | None = None


@dataclass(frozen=True)
class AccountBalance:
    username: str
    timestamp: int | None
    currencies: dict[str, CurrencyBalance]

    @classmethod
    def from_raw(cls, raw: dict[str, Any]) -> AccountBalance:
        currencies: dict[str, CurrencyBalance] = {}
        for code, v in raw.items():
            if code in ("timestamp", "username") or not isinstance(v, dict):
                continue
            currencies[code] = CurrencyBalance(
                available=to_decimal(v.get("available", "0")),
                orders=_opt_decimal(v.get("orders")),
            )
        ts = raw.get("timestamp")
        return cls(
            username=str(raw.get("username", "")),
            timestamp=int(ts) if ts is not None else None,
            currencies=currencies,
        )


@dataclass(frozen=True)
class Order:
    order_id: str
    side: Side
    price: Decimal
    amount: Decimal
    pending: Decimal
    time: int

    @classmethod
    def from_raw(cls, raw: dict[str, Any]) -> Order:
        return cls(
            order_id=str(raw["id"]),
            side=Side(str(raw["type"]).lower()),
            price=to_decimal(raw["price"]),
            amount=to_decimal(raw["amount"]),
            pending=to_decimal(raw["pending"]),
            time=int(raw["time"]),
        )


def orders_from_raw(raw: list[dict[str, Any]]) -> list[Order]:
    return [Order.from_raw(o) for o in raw]


@dataclass(frozen=True)
class OrderRequest:
    pair: str
    side: Side
    amount: Decimal
    price: Decimal

    def __post_init__(self) -> None:
        # accept plain "buy"/"sell" and numeric strings; bad values raise ValueError
        object.__setattr__(self, "side", Side(self.side))
        object.__setattr__(self, "amount", positive_decimal("amount", self.amount))
        object.__setattr__(self, "price", positive_decimal("price", self.price))

    def to_params(self) -> dict[str, str]:
        return {"type": self.side.value, "amount": str(self.amount), "price": str(self.price)}
