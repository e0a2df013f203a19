"""Minimal client for OANDA v20 pricing and market orders."""

from .domain import Credentials
from .service_api import (
    PlaceIn,
    PlaceOut,
    PricesIn,
    PricesOut,
    build_client,
    run_place,
    run_prices,
)
from .trade_api import DemoRequest, DemoResult, execute_demo

__all__ = [
    "Credentials",
    "DemoRequest",
    "DemoResult",
    "PlaceIn",
    "PlaceOut",
    "PricesIn",
    "PricesOut",
    "build_client",
    "execute_demo",
    "run_place",
    "run_prices",
]
