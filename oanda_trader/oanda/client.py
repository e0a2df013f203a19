from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Sequence

import requests
from pydantic import ValidationError

from ..config import PRACTICE_URL
from ..domain import Credentials, OrderResponse, PricingResponse, RawPricingResponse, parse_raw_response
from ..errors import ApiStatusError, ResponseDecodeError, TransportError
from .builders import (
    ORDER_ENDPOINT,
    PRICING_ENDPOINT,
    build_headers,
    build_market_order,
    build_pricing_params,
    build_url,
)


class OandaClient:
    """Blocking client for the pricing and order endpoints of the v20 REST API.

    Every call is a single round trip; nothing is retried.
    """

    def __init__(
        self,
        credentials: Credentials,
        *,
        base_url: str = PRACTICE_URL,
        timeout: float | None = None,
        session: Optional[requests.Session] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.credentials = credentials
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session or requests.Session()
        self._logger = logger or logging.getLogger(__name__)

    def __enter__(self) -> "OandaClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        self._session.close()

    def _send(
        self,
        method: str,
        endpoint: str,
        *,
        params: Dict[str, str] | None = None,
        json_body: Dict[str, Any] | None = None,
    ) -> requests.Response:
        url = build_url(self.base_url, endpoint, self.credentials)
        try:
            return self._session.request(
                method,
                url,
                params=params,
                json=json_body,
                headers=build_headers(self.credentials, json_body=json_body is not None),
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            self._logger.error("request_failed", extra={"method": method, "endpoint": endpoint, "error": str(exc)})
            raise TransportError(f"{method} {endpoint} failed: {exc}") from exc

    def get_prices(self, instruments: Sequence[str]) -> PricingResponse:
        params = build_pricing_params(instruments)
        self._logger.info("prices_requested", extra={"instruments": params["instruments"]})

        resp = self._send("GET", PRICING_ENDPOINT, params=params)
        if resp.status_code != 200:
            raise ApiStatusError(
                f"{resp.status_code} response code received, Prices API request not working as expected",
                status_code=resp.status_code,
                body=resp.text,
            )

        try:
            raw = RawPricingResponse.from_json(resp.text)
        except ValidationError as exc:
            raise ResponseDecodeError(f"could not decode pricing response: {exc}") from exc

        pricing = parse_raw_response(raw)
        self._logger.info("prices_received", extra={"count": len(pricing.prices), "time": pricing.time})
        return pricing

    def place_market_order(self, units: int, instrument: str, price_bound: float) -> OrderResponse:
        order_request = build_market_order(units, instrument, price_bound)
        payload = order_request.to_payload()

        resp = self._send("POST", ORDER_ENDPOINT, json_body=payload)
        if resp.status_code != 201:
            self._logger.error(
                "order_rejected",
                extra={"status_code": resp.status_code, "instrument": order_request.order.instrument},
            )
            raise ApiStatusError(
                f"unexpected status code: {resp.status_code}, body: {resp.text}",
                status_code=resp.status_code,
                body=resp.text,
            )

        try:
            response = OrderResponse.from_json(resp.text)
        except ValidationError as exc:
            raise ResponseDecodeError(f"could not decode order response: {exc}") from exc

        self._logger.info(
            "order_submitted",
            extra={
                "instrument": order_request.order.instrument,
                "units": order_request.order.units,
                "price_bound": order_request.order.price_bound,
                "last_transaction_id": response.last_transaction_id,
            },
        )
        return response
