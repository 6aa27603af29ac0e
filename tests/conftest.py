"""Shared test fixtures for the mercator test suite.

FakeClient provides a test double for python-binance's Client, allowing
headless testing without API credentials or network access.
"""

from io import StringIO
from typing import Any

import pytest
from loguru import logger

import mercator.scopes
from mercator.config import DEFAULTS
from mercator.engine.environment import Environment
from mercator.scopes.binance import BinanceScope
from mercator.scopes.root import RootScope


def makeSymbol(
    symbol: str, base: str, quote: str, basePrecision: int = 8, quotePrecision: int = 8
) -> dict[str, Any]:
    """Stub for one entry of the exchange info 'symbols' list."""
    return {
        "symbol": symbol,
        "status": "TRADING",
        "baseAsset": base,
        "baseAssetPrecision": basePrecision,
        "quoteAsset": quote,
        "quotePrecision": quotePrecision,
        "orderTypes": ["LIMIT", "MARKET"],
        "icebergAllowed": True,
        "ocoAllowed": False,
        "isSpotTradingAllowed": True,
        "isMarginTradingAllowed": False,
    }


class FakeClient:
    """Test double for binance.client.Client.

    Every call is recorded in ``calls`` as (method name, kwargs).
    """

    def __init__(self):
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.symbols: list[dict[str, Any]] = []
        self.prices: dict[str, str] = {}
        self.account: dict[str, Any] = {"balances": []}
        self.trades: list[dict[str, Any]] = []
        self.book: dict[str, Any] = {"bids": [], "asks": []}
        self.assets: dict[str, Any] = {}
        self.serverTime = 1_600_000_000_000

    def add_symbol(self, symbol: str, base: str, quote: str, price: str, **kwargs):
        self.symbols.append(makeSymbol(symbol, base, quote, **kwargs))
        self.prices[symbol] = price

    def get_exchange_info(self) -> dict[str, Any]:
        self.calls.append(("get_exchange_info", {}))
        return {
            "timezone": "UTC",
            "serverTime": self.serverTime,
            "rateLimits": [
                {
                    "rateLimitType": "REQUEST_WEIGHT",
                    "interval": "MINUTE",
                    "intervalNum": 1,
                    "limit": 1200,
                }
            ],
            "symbols": self.symbols,
        }

    def get_all_tickers(self) -> list[dict[str, str]]:
        self.calls.append(("get_all_tickers", {}))
        return [{"symbol": s, "price": p} for s, p in self.prices.items()]

    def get_account(self, **params) -> dict[str, Any]:
        self.calls.append(("get_account", params))
        return self.account

    def get_my_trades(self, **params) -> list[dict[str, Any]]:
        self.calls.append(("get_my_trades", params))
        return self.trades

    def get_order_book(self, **params) -> dict[str, Any]:
        self.calls.append(("get_order_book", params))
        return self.book

    def get_historical_trades(self, **params) -> list[dict[str, Any]]:
        self.calls.append(("get_historical_trades", params))
        return self.trades

    def get_recent_trades(self, **params) -> list[dict[str, Any]]:
        self.calls.append(("get_recent_trades", params))
        return self.trades

    def get_asset_details(self, **params) -> dict[str, Any]:
        self.calls.append(("get_asset_details", params))
        return self.assets


# ── Fixtures ──


@pytest.fixture
def fake_client() -> FakeClient:
    """Pre-populated FakeClient with sample markets, balances and trades."""
    client = FakeClient()

    client.add_symbol("BTCUSDT", "BTC", "USDT", "20000.00", quotePrecision=2)
    client.add_symbol("ETHUSDT", "ETH", "USDT", "1500.00", quotePrecision=2)
    client.add_symbol("ETHBTC", "ETH", "BTC", "0.07000000")
    client.add_symbol("BNBBTC", "BNB", "BTC", "0.01500000")

    client.account = {
        "makerCommission": 10,
        "takerCommission": 10,
        "buyerCommission": 0,
        "sellerCommission": 0,
        "canTrade": True,
        "canDeposit": True,
        "canWithdraw": False,
        "balances": [
            {"asset": "BTC", "free": "0.50000000", "locked": "0.00000000"},
            {"asset": "ETH", "free": "10.00000000", "locked": "2.00000000"},
            {"asset": "XRP", "free": "0.00000000", "locked": "0.00000000"},
        ],
    }

    client.trades = [
        {"id": 1, "time": 1_600_000_000_000, "price": "20000.00", "qty": "0.1", "isBuyer": True},
        {"id": 2, "time": 1_600_000_060_000, "price": "20010.00", "qty": "0.2", "isBuyer": False},
    ]

    client.book = {
        "bids": [["19999.00", "1.5"], ["19998.00", "2.0"]],
        "asks": [["20001.00", "0.5"], ["20002.00", "1.0"]],
    }

    client.assets = {
        "BTC": {
            "minWithdrawAmount": "0.001",
            "depositStatus": True,
            "withdrawFee": 0.0005,
            "withdrawStatus": True,
        }
    }

    return client


@pytest.fixture
def env() -> Environment:
    """Environment at the root scope with every registered scope reachable."""
    return Environment(RootScope(mercator.scopes.SCOPES), dict(DEFAULTS))


@pytest.fixture
def binance_env(env, fake_client) -> Environment:
    """Environment with a BinanceScope (backed by fake_client) pushed."""
    env.push(BinanceScope(fake_client, fake_client.symbols))
    return env


@pytest.fixture
def log_capture():
    """Capture loguru output for assertion. Yields a StringIO buffer."""
    buf = StringIO()
    handler_id = logger.add(buf, format="{message}", level="DEBUG")
    yield buf
    logger.remove(handler_id)
