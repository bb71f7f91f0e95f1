from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# Allow running this script directly (ensure project root is on sys.path).
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from cex_client.core.config import load_config
from cex_client.core.env import load_dotenv
from cex_client.core.types import OrderBook
from cex_client.exchange.adapters.auth import load_credentials_from_env
from cex_client.exchange.cexio.client import CexioClient
from cex_client.monitoring.logger import setup_logging


async def run(args: argparse.Namespace) -> int:
    cfg = load_config(args.config)
    creds = load_credentials_from_env()
    setup_logging("DEBUG" if args.verbose else cfg.logging.level, redact=(creds.key, creds.secret))

    client = CexioClient.from_config(cfg, creds)
    try:
        # the client throttles itself, so this loop needs no sleep of its own
        for _ in range(args.rounds):
            resp = await client.order_book(args.pair)
            if not resp.ok:
                logging.error("order_book %s: %s", args.pair, resp.error)
                return 1
            book = OrderBook.from_raw(resp.raw)
            print(f"{args.pair} bid={book.best_bid} ask={book.best_ask} spread={book.spread}")
    finally:
        await client.close()
    return 0


def main() -> None:
    p = argparse.ArgumentParser(description="Print best bid/ask and spread for a pair")
    p.add_argument("--config", dest="config", default=None)
    p.add_argument("--pair", default="GHS/BTC")
    p.add_argument("--rounds", type=int, default=10)
    p.add_argument("--verbose", action="store_true")
    args = p.parse_args()
    load_dotenv(".env")
    raise SystemExit(asyncio.run(run(args)))


if __name__ == "__main__":
    main()
