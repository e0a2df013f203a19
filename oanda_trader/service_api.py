from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List

from pydantic import ValidationError

from .config import Config, load_config
from .domain import Credentials
from .errors import ApiStatusError, OandaError
from .oanda import OandaClient, build_market_order

DEFAULT_INSTRUMENTS = ("GBP_USD", "EUR_GBP", "GBP_JPY")


@dataclass(frozen=True)
class PricesIn:
    instruments: List[str] = field(default_factory=lambda: list(DEFAULT_INSTRUMENTS))


@dataclass(frozen=True)
class PricesOut:
    ok: bool
    time: str | None = None
    prices: list[Dict[str, Any]] | None = None
    status_code: int | None = None
    error: str | None = None


@dataclass(frozen=True)
class PlaceIn:
    units: int
    instrument: str
    price_bound: float
    dry_run: bool = False


@dataclass(frozen=True)
class PlaceOut:
    submitted: bool
    dry_run: bool = False
    order_payload: Dict[str, Any] | None = None
    response: Dict[str, Any] | None = None
    status_code: int | None = None
    errors: list[Dict[str, Any]] | None = None
    error: str | None = None


def _resolve_config(config: Config | None) -> Config:
    return config or load_config()


def _resolve_logger(logger: logging.Logger | None) -> logging.Logger:
    return logger or logging.getLogger(__name__)


def _validation_errors(exc: ValidationError) -> list[Dict[str, Any]]:
    return list(exc.errors(include_url=False, include_context=False))


def build_client(config: Config | None = None, logger: logging.Logger | None = None) -> OandaClient:
    """Load credentials once and hand them to a new client.

    Raises `CredentialsError` when the credentials file is missing or malformed.
    """
    cfg = _resolve_config(config)
    creds = Credentials.from_file(cfg.credentials_path)
    return OandaClient(creds, base_url=cfg.base_url, timeout=cfg.timeout, logger=_resolve_logger(logger))


def run_prices(
    payload: PricesIn,
    *,
    client: OandaClient,
    logger: logging.Logger | None = None,
) -> PricesOut:
    log = _resolve_logger(logger)

    try:
        pricing = client.get_prices(payload.instruments)
    except ApiStatusError as exc:
        log.error("prices_failed", extra={"status_code": exc.status_code, "error": str(exc)})
        return PricesOut(ok=False, status_code=exc.status_code, error=str(exc))
    except (OandaError, ValueError) as exc:
        log.error("prices_failed", extra={"error": str(exc)})
        return PricesOut(ok=False, error=str(exc))

    return PricesOut(
        ok=True,
        time=pricing.time,
        prices=[p.model_dump() for p in pricing.prices],
    )


def run_place(
    payload: PlaceIn,
    *,
    client: OandaClient | None = None,
    logger: logging.Logger | None = None,
) -> PlaceOut:
    log = _resolve_logger(logger)

    try:
        order_request = build_market_order(payload.units, payload.instrument, payload.price_bound)
    except ValidationError as exc:
        return PlaceOut(submitted=False, errors=_validation_errors(exc))
    except (TypeError, ValueError) as exc:
        return PlaceOut(submitted=False, errors=[{"type": "value_error", "msg": str(exc)}])

    order_payload = order_request.to_payload()

    if payload.dry_run:
        return PlaceOut(submitted=False, dry_run=True, order_payload=order_payload)

    if client is None:
        raise ValueError("client is required unless dry_run is set")

    try:
        response = client.place_market_order(payload.units, payload.instrument, payload.price_bound)
    except ApiStatusError as exc:
        log.error("order_failed", extra={"status_code": exc.status_code, "error": str(exc)})
        return PlaceOut(
            submitted=False,
            order_payload=order_payload,
            status_code=exc.status_code,
            error=str(exc),
        )
    except OandaError as exc:
        log.error("order_failed", extra={"error": str(exc)})
        return PlaceOut(submitted=False, order_payload=order_payload, error=str(exc))

    return PlaceOut(submitted=True, order_payload=order_payload, response=response.to_payload())
