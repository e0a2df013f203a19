from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List

from .oanda import OandaClient
from .service_api import DEFAULT_INSTRUMENTS, PlaceIn, PlaceOut, PricesIn, PricesOut, run_place, run_prices

NOT_TRADEABLE_MESSAGE = "Error executing market order! Instrument currently not tradeable."

PricesHandler = Callable[[PricesOut], None]


@dataclass(frozen=True)
class DemoRequest:
    instruments: List[str] = field(default_factory=lambda: list(DEFAULT_INSTRUMENTS))
    units: int = 1


@dataclass(frozen=True)
class DemoResult:
    ok: bool
    prices: PricesOut | None = None
    order_attempted: bool = False
    order: PlaceOut | None = None
    message: str | None = None
    error: str | None = None


def execute_demo(
    request: DemoRequest,
    *,
    client: OandaClient,
    logger: logging.Logger | None = None,
    on_prices: PricesHandler | None = None,
) -> DemoResult:
    """Fetch prices, then buy the first instrument at its ask if it is tradeable.

    A pricing failure stops the run. An order failure is logged and reported
    in the result.
    """
    log = logger or logging.getLogger(__name__)

    prices = run_prices(PricesIn(instruments=request.instruments), client=client, logger=log)
    if not prices.ok or not prices.prices:
        error = prices.error or "no prices returned"
        log.error("demo_halted", extra={"error": error})
        return DemoResult(ok=False, prices=prices, error=f"Error retrieving prices: {error}")

    log.info("prices_retrieved", extra={"count": len(prices.prices)})
    if on_prices:
        on_prices(prices)

    first: Dict[str, Any] = prices.prices[0]
    if not first["tradeable"]:
        log.warning("instrument_not_tradeable", extra={"instrument": first["instrument"]})
        return DemoResult(ok=True, prices=prices, message=NOT_TRADEABLE_MESSAGE)

    order = run_place(
        PlaceIn(units=request.units, instrument=first["instrument"], price_bound=first["ask"]),
        client=client,
        logger=log,
    )
    if not order.submitted:
        error = order.error or "order was not submitted"
        log.error("demo_order_failed", extra={"error": error})
        return DemoResult(
            ok=False,
            prices=prices,
            order_attempted=True,
            order=order,
            error=f"Error placing market order: {error}",
        )

    return DemoResult(
        ok=True,
        prices=prices,
        order_attempted=True,
        order=order,
        message="Market order placed successfully.",
    )
