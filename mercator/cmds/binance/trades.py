"""Commands: account-trades, historical-market-trades, recent-market-trades

Category: Trades
"""
from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from mercator import render
from mercator.engine.command import CommandNode, Flag, Invocation, noArgs
from mercator.engine.errors import CommandError
from mercator.engine.suggest import afterFlag

if TYPE_CHECKING:
    from mercator.scopes.binance import BinanceScope

DEFAULT_LIMIT = 50


def tradeFlags() -> list[Flag]:
    return [
        Flag("symbol", str, "", "Filter trades by this symbol", required=True),
        Flag("limit", int, DEFAULT_LIMIT, "Number of results to return"),
    ]


def tradeRows(trades: list[dict[str, Any]], withSide: bool = False) -> list[list[Any]]:
    rows = []
    for trade in trades:
        row = [trade["id"], render.timestamp(trade["time"]), trade["price"], trade["qty"]]
        if withSide:
            row.append("BUY" if trade.get("isBuyer") else "SELL")

        rows.append(row)

    return rows


def addTradeCommands(scope: BinanceScope) -> None:
    def tradesRunner(
        fetch: Callable[..., list[dict[str, Any]]], withSide: bool = False
    ) -> Callable[[Invocation], None]:
        def run(inv: Invocation) -> None:
            limit = inv.flag("limit")
            if limit <= 0:
                raise CommandError("limit must be greater than 0")

            symbol = inv.flag("symbol").upper()
            trades = fetch(symbol=symbol, limit=limit)

            columns = ["ID", "Timestamp", "Price", "Quantity"]
            if withSide:
                columns.append("Side")

            render.table(tradeRows(trades, withSide), columns)

        return run

    symbolsAfterFlag = afterFlag("symbol", scope.symbolNames)

    scope.addCommand(
        CommandNode(
            name="account-trades",
            short="Show user account trades",
            flags=tradeFlags(),
            validate=noArgs,
            suggest=symbolsAfterFlag,
            run=tradesRunner(scope.client.get_my_trades, withSide=True),
        ),
        CommandNode(
            name="historical-market-trades",
            short="List the historical market trades",
            flags=tradeFlags(),
            validate=noArgs,
            suggest=symbolsAfterFlag,
            run=tradesRunner(scope.client.get_historical_trades),
        ),
        CommandNode(
            name="recent-market-trades",
            short="List the recent market trades",
            flags=tradeFlags(),
            validate=noArgs,
            suggest=symbolsAfterFlag,
            run=tradesRunner(scope.client.get_recent_trades),
        ),
    )
