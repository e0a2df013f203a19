from __future__ import annotations

import json
import unittest
from typing import Any
from unittest.mock import MagicMock, patch

import oanda_trader
from oanda_trader.domain import Credentials
from oanda_trader.oanda import OandaClient
from oanda_trader.service_api import PlaceOut, PricesOut
from oanda_trader.trade_api import NOT_TRADEABLE_MESSAGE, DemoRequest, execute_demo


CREDS = Credentials(accountID="101-004-1234567-001", bearerToken="secret-token")


def make_response(status_code: int, body: Any) -> MagicMock:
    resp = MagicMock()
    resp.status_code = status_code
    resp.text = body if isinstance(body, str) else json.dumps(body)
    return resp


def make_client(*responses: MagicMock) -> tuple[OandaClient, MagicMock]:
    session = MagicMock()
    session.request.side_effect = list(responses)
    return OandaClient(CREDS, base_url="https://api-fxpractice.oanda.com", session=session), session


def pricing_body(*quotes: tuple[str, bool, list[str], list[str]]) -> dict:
    return {
        "time": "2024-05-01T12:00:00.000000000Z",
        "prices": [
            {
                "type": "PRICE",
                "instrument": instrument,
                "tradeable": tradeable,
                "bids": [{"price": p, "liquidity": 10000000} for p in bids],
                "asks": [{"price": p, "liquidity": 10000000} for p in asks],
            }
            for instrument, tradeable, bids, asks in quotes
        ],
    }

ORDER_REPLY = {
    "lastTransactionID": "6358",
    "orderCreateTransaction": {"id": "6357", "instrument": "GBP_USD", "type": "MARKET_ORDER", "units": "1"},
    "orderFillTransaction": {"id": "6358", "orderID": "6357", "price": "1.25302", "tradeOpened": {"tradeID": "6358", "units": "1"}},
    "relatedTransactionIDs": ["6357", "6358"],
}


def _prices(tradeable: bool) -> PricesOut:
    return PricesOut(
        ok=True,
        time="t",
        prices=[
            {"instrument": "GBP_USD", "tradeable": tradeable, "bid": 1.2529, "ask": 1.2531},
            {"instrument": "EUR_GBP", "tradeable": True, "bid": 0.8551, "ask": 0.8553},
        ],
    )


class TradeApiTestCase(unittest.TestCase):
    def test_top_level_exports(self) -> None:
        self.assertIn("execute_demo", oanda_trader.__all__)
        self.assertIn("DemoRequest", oanda_trader.__all__)

    @patch("oanda_trader.trade_api.run_place")
    @patch("oanda_trader.trade_api.run_prices")
    def test_not_tradeable_skips_order(self, mock_prices, mock_place) -> None:
        mock_prices.return_value = _prices(tradeable=False)

        out = execute_demo(DemoRequest(), client=MagicMock())

        self.assertTrue(out.ok)
        self.assertFalse(out.order_attempted)
        self.assertEqual(out.message, NOT_TRADEABLE_MESSAGE)
        mock_place.assert_not_called()

    @patch("oanda_trader.trade_api.run_place")
    @patch("oanda_trader.trade_api.run_prices")
    def test_pricing_failure_halts(self, mock_prices, mock_place) -> None:
        mock_prices.return_value = PricesOut(ok=False, status_code=500, error="500 response code received")

        out = execute_demo(DemoRequest(), client=MagicMock())

        self.assertFalse(out.ok)
        self.assertIn("Error retrieving prices", out.error)
        mock_place.assert_not_called()

    @patch("oanda_trader.trade_api.run_place")
    @patch("oanda_trader.trade_api.run_prices")
    def test_tradeable_places_one_unit_at_ask(self, mock_prices, mock_place) -> None:
        mock_prices.return_value = _prices(tradeable=True)
        mock_place.return_value = PlaceOut(submitted=True, response={"lastTransactionID": "1"})
        seen = []

        out = execute_demo(DemoRequest(), client=MagicMock(), on_prices=seen.append)

        self.assertTrue(out.ok)
        self.assertTrue(out.order_attempted)
        self.assertEqual(len(seen), 1)
        placed = mock_place.call_args.args[0]
        self.assertEqual(placed.units, 1)
        self.assertEqual(placed.instrument, "GBP_USD")
        self.assertEqual(placed.price_bound, 1.2531)

    @patch("oanda_trader.trade_api.run_place")
    @patch("oanda_trader.trade_api.run_prices")
    def test_order_failure_is_reported(self, mock_prices, mock_place) -> None:
        mock_prices.return_value = _prices(tradeable=True)
        mock_place.return_value = PlaceOut(submitted=False, status_code=400, error="unexpected status code: 400")

        out = execute_demo(DemoRequest(), client=MagicMock())

        self.assertFalse(out.ok)
        self.assertTrue(out.order_attempted)
        self.assertEqual(out.order.status_code, 400)
        self.assertIn("Error placing market order", out.error)

    def test_end_to_end_against_mocked_session(self) -> None:
        body = pricing_body(
            ("GBP_USD", True, ["1.25290"], ["1.25310"]),
            ("EUR_GBP", True, ["0.85510"], ["0.85530"]),
            ("GBP_JPY", True, ["190.100"], ["190.130"]),
        )
        client, session = make_client(make_response(200, body), make_response(201, ORDER_REPLY))

        out = execute_demo(DemoRequest(), client=client)

        self.assertTrue(out.ok)
        self.assertEqual(session.request.call_count, 2)
        order_body = session.request.call_args.kwargs["json"]
        self.assertEqual(order_body["order"]["instrument"], "GBP_USD")
        self.assertEqual(order_body["order"]["priceBound"], "1.25310")

    def test_end_to_end_not_tradeable_makes_one_call(self) -> None:
        body = pricing_body(("GBP_USD", False, ["1.25290"], ["1.25310"]))
        client, session = make_client(make_response(200, body))

        out = execute_demo(DemoRequest(instruments=["GBP_USD"]), client=client)

        self.assertTrue(out.ok)
        self.assertFalse(out.order_attempted)
        self.assertEqual(session.request.call_count, 1)


if __name__ == "__main__":
    unittest.main()
