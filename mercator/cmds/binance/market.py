"""Commands: rate-limits, server-time, depth

Category: Exchange Market Data
"""
from __future__ import annotations

from typing import TYPE_CHECKING

from mercator import render
from mercator.engine.command import CommandNode, Invocation, exactArgs, noArgs

if TYPE_CHECKING:
    from mercator.scopes.binance import BinanceScope

DEPTH_LIMIT = 10


def addMarketCommands(scope: BinanceScope) -> None:
    def runRateLimits(inv: Invocation) -> None:
        info = scope.client.get_exchange_info()
        for limit in info.get("rateLimits", []):
            render.info("Interval", f"{limit.get('intervalNum', 1)} {limit['interval']}")
            render.info("Limit", limit["limit"], prefix="  ")
            render.info("Type", limit["rateLimitType"], prefix="  ")
            print()

    def runServerTime(inv: Invocation) -> None:
        info = scope.client.get_exchange_info()
        render.info("Server Time", render.timestamp(info["serverTime"]))
        render.info("Timezone", info.get("timezone", ""))

    def runDepth(inv: Invocation) -> None:
        symbol = inv.args[0].upper()
        book = scope.client.get_order_book(symbol=symbol, limit=DEPTH_LIMIT)

        print(f"\n       {symbol} Order Book")
        print("------------------------------")
        # asks print highest first so the spread sits in the middle
        for price, qty in reversed(book.get("asks", [])):
            render.show(f" {render.paint('ansimagenta', f'{price:>12}')} {float(qty):>15.4f}")

        print()
        for price, qty in book.get("bids", []):
            render.show(f" {render.paint('ansicyan', f'{price:>12}')} {float(qty):>15.4f}")

        print("------------ -----------------")
        print()

    scope.addCommand(
        CommandNode(
            name="rate-limits",
            short="API limits for the exchange",
            validate=noArgs,
            run=runRateLimits,
        ),
        CommandNode(
            name="server-time",
            short="Server time and timezone",
            validate=noArgs,
            run=runServerTime,
        ),
        CommandNode(
            name="depth",
            short="Show symbol depth",
            validate=exactArgs(1),
            suggest=lambda env, args: scope.symbolNames(),
            eager=True,
            run=runDepth,
        ),
    )
