from .credentials import Credentials
from .orders import MarketOrder, MarketOrderRequest, OrderResponse
from .pricing import Price, PricingResponse, RawPricingResponse, parse_raw_response

__all__ = [
    "Credentials",
    "MarketOrder",
    "MarketOrderRequest",
    "OrderResponse",
    "Price",
    "PricingResponse",
    "RawPricingResponse",
    "parse_raw_response",
]
