"""OANDA v20 REST adapter package."""

from .builders import build_headers, build_market_order, build_pricing_params, build_url
from .client import OandaClient

__all__ = ["OandaClient", "build_headers", "build_market_order", "build_pricing_params", "build_url"]
