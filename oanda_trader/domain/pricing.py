from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict

from ..errors import MissingPriceLevelError


class PriceBucket(BaseModel):
    """One order-book level; the wire encodes the price as a string."""

    model_config = ConfigDict(extra="ignore")

    price: float


class RawPrice(BaseModel):
    model_config = ConfigDict(extra="ignore")

    instrument: str
    tradeable: bool
    bids: List[PriceBucket] = []
    asks: List[PriceBucket] = []


class RawPricingResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    time: str
    prices: List[RawPrice] = []

    @classmethod
    def from_json(cls, payload: str | bytes) -> "RawPricingResponse":
        return cls.model_validate_json(payload)


class Price(BaseModel):
    """Flattened quote holding only the best bid and best ask."""

    model_config = ConfigDict(frozen=True)

    instrument: str
    tradeable: bool
    bid: float
    ask: float


class PricingResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    time: str
    prices: List[Price]


def parse_raw_response(raw: RawPricingResponse) -> PricingResponse:
    """Reshape the nested pricing reply into one `Price` per instrument.

    Only the first (best) bid and ask levels are kept. A single instrument
    without a bid or ask level fails the whole batch.
    """
    prices: List[Price] = []
    for raw_price in raw.prices:
        if not raw_price.bids:
            raise MissingPriceLevelError(f"No bid prices received for {raw_price.instrument}.")
        if not raw_price.asks:
            raise MissingPriceLevelError(f"No ask prices received for {raw_price.instrument}.")

        prices.append(
            Price(
                instrument=raw_price.instrument,
                tradeable=raw_price.tradeable,
                bid=raw_price.bids[0].price,
                ask=raw_price.asks[0].price,
            )
        )

    return PricingResponse(time=raw.time, prices=prices)
