from __future__ import annotations

from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

TIME_IN_FORCE = "FOK"
ORDER_TYPE = "MARKET"
POSITION_FILL = "DEFAULT"


def format_units(units: int) -> str:
    if isinstance(units, bool) or not isinstance(units, int):
        raise TypeError(f"units must be an integer, got {units!r}")
    return f"{units:d}"


def format_price_bound(price_bound: float) -> str:
    return f"{float(price_bound):.5f}"


class MarketOrder(BaseModel):
    """Market order body; numeric fields travel as text on the wire."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    units: str
    instrument: str = Field(min_length=1)
    price_bound: str = Field(alias="priceBound")
    time_in_force: Literal["FOK"] = Field(default=TIME_IN_FORCE, alias="timeInForce")
    type: Literal["MARKET"] = ORDER_TYPE
    position_fill: Literal["DEFAULT"] = Field(default=POSITION_FILL, alias="positionFill")

    @field_validator("units")
    @classmethod
    def _check_units(cls, value: str) -> str:
        int(value)
        return value

    @classmethod
    def build(cls, units: int, instrument: str, price_bound: float) -> "MarketOrder":
        return cls(
            units=format_units(units),
            instrument=instrument,
            price_bound=format_price_bound(price_bound),
        )


class MarketOrderRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    order: MarketOrder

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True)


class _Passthrough(BaseModel):
    # Replies are handed back as received: unknown fields are kept.
    model_config = ConfigDict(extra="allow", populate_by_name=True)


class TradeOpened(_Passthrough):
    trade_id: str | None = Field(default=None, alias="tradeID")
    units: str | None = None


class OrderCreateTransaction(_Passthrough):
    account_id: str | None = Field(default=None, alias="accountID")
    batch_id: str | None = Field(default=None, alias="batchID")
    id: str | None = None
    instrument: str | None = None
    position_fill: str | None = Field(default=None, alias="positionFill")
    reason: str | None = None
    time: str | None = None
    time_in_force: str | None = Field(default=None, alias="timeInForce")
    type: str | None = None
    units: str | None = None
    user_id: int | None = Field(default=None, alias="userID")


class OrderFillTransaction(_Passthrough):
    account_balance: str | None = Field(default=None, alias="accountBalance")
    account_id: str | None = Field(default=None, alias="accountID")
    batch_id: str | None = Field(default=None, alias="batchID")
    financing: str | None = None
    id: str | None = None
    instrument: str | None = None
    order_id: str | None = Field(default=None, alias="orderID")
    pl: str | None = None
    price: str | None = None
    reason: str | None = None
    time: str | None = None
    trade_opened: TradeOpened | None = Field(default=None, alias="tradeOpened")
    type: str | None = None
    units: str | None = None
    user_id: int | None = Field(default=None, alias="userID")


class OrderResponse(_Passthrough):
    last_transaction_id: str | None = Field(default=None, alias="lastTransactionID")
    order_create_transaction: OrderCreateTransaction | None = Field(default=None, alias="orderCreateTransaction")
    order_fill_transaction: OrderFillTransaction | None = Field(default=None, alias="orderFillTransaction")
    related_transaction_ids: List[str] = Field(default_factory=list, alias="relatedTransactionIDs")

    @classmethod
    def from_json(cls, payload: str | bytes) -> "OrderResponse":
        return cls.model_validate_json(payload)

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True, exclude_unset=True)
