from __future__ import annotations

import argparse
import json
import sys
from dataclasses import asdict
from typing import Any, Dict

from .config import load_config
from .errors import CredentialsError
from .logging import configure_logging
from .oanda import OandaClient
from .service_api import DEFAULT_INSTRUMENTS, PlaceIn, PricesIn, PricesOut, build_client, run_place, run_prices
from .trade_api import DemoRequest, execute_demo


def _print_json(payload: Dict[str, Any]) -> None:
    sys.stdout.write(json.dumps(payload, default=str) + "\n")


def _split_instruments(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def _open_client() -> OandaClient | None:
    try:
        config = load_config()
    except ValueError as exc:
        _print_json({"ok": False, "error": f"invalid configuration: {exc}"})
        return None

    logger = configure_logging(config.log_level)
    try:
        return build_client(config, logger=logger)
    except CredentialsError as exc:
        logger.error("credentials_failed", extra={"error": str(exc)})
        _print_json({"ok": False, "error": str(exc)})
        return None


def cmd_prices(args: argparse.Namespace) -> int:
    client = _open_client()
    if client is None:
        return 1

    with client:
        out = run_prices(PricesIn(instruments=args.instruments), client=client)

    _print_json(asdict(out))
    return 0 if out.ok else 1


def cmd_place(args: argparse.Namespace) -> int:
    payload = PlaceIn(
        units=args.units,
        instrument=args.instrument,
        price_bound=args.price_bound,
        dry_run=args.dry_run,
    )

    if args.dry_run:
        out = run_place(payload)
        _print_json(asdict(out))
        return 0 if out.order_payload is not None else 1

    client = _open_client()
    if client is None:
        return 1

    with client:
        out = run_place(payload, client=client)

    _print_json(asdict(out))
    return 0 if out.submitted else 1


def cmd_demo(args: argparse.Namespace) -> int:
    client = _open_client()
    if client is None:
        return 1

    def dump_prices(prices: PricesOut) -> None:
        _print_json({"event": "prices", "time": prices.time, "prices": prices.prices})

    with client:
        result = execute_demo(
            DemoRequest(instruments=args.instruments, units=args.units),
            client=client,
            on_prices=dump_prices,
        )

    summary: Dict[str, Any] = {"event": "demo", "ok": result.ok, "message": result.message, "error": result.error}
    if result.order is not None:
        summary["order"] = asdict(result.order)
    _print_json(summary)
    return 0 if result.ok else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="oanda-trader")
    sub = parser.add_subparsers(dest="command", required=True)

    prices = sub.add_parser("prices", help="Fetch best bid/ask for instruments")
    prices.add_argument(
        "--instruments",
        type=_split_instruments,
        default=list(DEFAULT_INSTRUMENTS),
        help="Comma-separated instrument symbols, e.g. GBP_USD,EUR_GBP",
    )
    prices.set_defaults(func=cmd_prices)

    place = sub.add_parser("place", help="Submit a fill-or-kill market order")
    place.add_argument("--instrument", type=str, required=True, help="Instrument symbol, e.g. GBP_USD")
    place.add_argument("--units", type=int, required=True, help="Signed unit count; negative sells")
    place.add_argument("--price-bound", type=float, required=True, help="Worst acceptable fill price")
    place.add_argument("--dry-run", action="store_true", help="Print the order body but do not send it")
    place.set_defaults(func=cmd_place)

    demo = sub.add_parser("demo", help="Fetch prices and buy the first instrument if tradeable")
    demo.add_argument(
        "--instruments",
        type=_split_instruments,
        default=list(DEFAULT_INSTRUMENTS),
        help="Comma-separated instrument symbols; the first one is traded",
    )
    demo.add_argument("--units", type=int, default=1, help="Units to buy")
    demo.set_defaults(func=cmd_demo)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
