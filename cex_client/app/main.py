from __future__ import annotations

import argparse
import asyncio
import json
import sys
from decimal import Decimal

from cex_client.core.config import load_config
from cex_client.core.env import load_dotenv
from cex_client.core.errors import ConfigurationError, TransportError
from cex_client.core.types import ApiResponse, OrderRequest, Side, positive_decimal
from cex_client.exchange.adapters.auth import load_credentials_from_env
from cex_client.exchange.cexio.client import CexioClient
from cex_client.monitoring.logger import get_logger, setup_logging


def _positive_number(value: str) -> Decimal:
    try:
        return positive_decimal("value", value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"expected a positive number, got {value!r}") from e


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="cex-client")
    p.add_argument("--config", default=None, help="Path to YAML config (e.g., configs/default.yaml)")
    p.add_argument("--env-file", default=".env", help="KEY=VALUE file with CEXIO_* credentials")
    p.add_argument("--log-level", default=None, help="Overrides logging.level from the config")

    sub = p.add_subparsers(dest="command", required=True)
    t = sub.add_parser("ticker")
    t.add_argument("pair", nargs="?", default=None)
    ob = sub.add_parser("order-book")
    ob.add_argument("pair", nargs="?", default=None)
    sub.add_parser("balance")
    oo = sub.add_parser("open-orders")
    oo.add_argument("pair", nargs="?", default=None)
    po = sub.add_parser("place-order")
    po.add_argument("pair")
    po.add_argument("side", choices=[s.value for s in Side])
    po.add_argument("amount", type=_positive_number)
    po.add_argument("price", type=_positive_number)
    co = sub.add_parser("cancel-order")
    co.add_argument("order_id")
    return p


async def _run(client: CexioClient, args: argparse.Namespace, default_pair: str) -> ApiResponse:
    pair = getattr(args, "pair", None) or default_pair
    if args.command == "ticker":
        return await client.ticker(pair)
    if args.command == "order-book":
        return await client.order_book(pair)
    if args.command == "balance":
        return await client.balance()
    if args.command == "open-orders":
        return await client.open_orders(pair)
    if args.command == "place-order":
        req = OrderRequest(pair=args.pair, side=Side(args.side), amount=args.amount, price=args.price)
        return await client.place_order(req)
    if args.command == "cancel-order":
        return await client.cancel_order(args.order_id)
    raise ValueError(f"unknown command {args.command}")


async def _amain(argv: list[str]) -> int:
    args = _build_parser().parse_args(argv)
    load_dotenv(args.env_file)
    log = get_logger("cexio.cli")
    try:
        cfg = load_config(args.config)
        creds = load_credentials_from_env()
    except (ConfigurationError, FileNotFoundError) as e:
        setup_logging("INFO")
        log.error("%s", e)
        return 2

    setup_logging(args.log_level or cfg.logging.level, redact=(creds.key, creds.secret))
    client = CexioClient.from_config(cfg, creds)
    try:
        resp = await _run(client, args, cfg.exchange.default_pair)
    except TransportError as e:
        log.error("request failed: %s", e)
        return 3
    finally:
        await client.close()

    print(json.dumps(resp.raw, indent=2, default=str))
    if not resp.ok:
        log.warning("remote error: %s", resp.error)
        return 1
    return 0


def main(argv: list[str] | None = None) -> None:
    try:
        rc = asyncio.run(_amain(sys.argv[1:] if argv is None else argv))
    except KeyboardInterrupt:
        rc = 130
    raise SystemExit(rc)


if __name__ == "__main__":
    main()
