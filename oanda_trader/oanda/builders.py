from __future__ import annotations

from typing import Dict, Sequence

from ..domain import Credentials, MarketOrder, MarketOrderRequest

PRICING_ENDPOINT = "/v3/accounts/{account_id}/pricing"
ORDER_ENDPOINT = "/v3/accounts/{account_id}/orders"


def build_url(base_url: str, endpoint: str, creds: Credentials) -> str:
    return base_url.rstrip("/") + endpoint.format(account_id=creds.account_id)


def build_headers(creds: Credentials, json_body: bool = False) -> Dict[str, str]:
    headers = {"Authorization": creds.authorization}
    if json_body:
        headers["Content-Type"] = "application/json"
    return headers


def build_pricing_params(instruments: Sequence[str]) -> Dict[str, str]:
    if isinstance(instruments, str) or not instruments:
        raise ValueError("instruments must be a non-empty list of symbols")

    cleaned = [i.strip() for i in instruments if isinstance(i, str)]
    if len(cleaned) != len(instruments) or not all(cleaned):
        raise ValueError("instrument symbols must be non-empty strings")

    return {"instruments": ",".join(cleaned)}


def build_market_order(units: int, instrument: str, price_bound: float) -> MarketOrderRequest:
    return MarketOrderRequest(order=MarketOrder.build(units, instrument, price_bound))
