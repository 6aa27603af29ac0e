"""Narrow protocols for the collaborators command bodies talk to.

Commands only need a handful of exchange calls; typing against this protocol
instead of ``binance.client.Client`` lets tests hand in a small fake.
"""
from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ExchangeClient(Protocol):
    """The subset of the python-binance ``Client`` API used by the binance scope."""

    def get_exchange_info(self) -> dict[str, Any]: ...
    def get_all_tickers(self) -> list[dict[str, str]]: ...
    def get_account(self, **params) -> dict[str, Any]: ...
    def get_my_trades(self, **params) -> list[dict[str, Any]]: ...
    def get_order_book(self, **params) -> dict[str, Any]: ...
    def get_historical_trades(self, **params) -> list[dict[str, Any]]: ...
    def get_recent_trades(self, **params) -> list[dict[str, Any]]: ...
    def get_asset_details(self, **params) -> dict[str, Any]: ...
