"""Commands: symbol-price, asset-price, compare

Category: Exchange Prices
"""
from __future__ import annotations

from typing import TYPE_CHECKING

from mercator import calc, render
from mercator.engine.command import CommandNode, Invocation, exactArgs, minimumArgs
from mercator.engine.errors import CommandError

if TYPE_CHECKING:
    from mercator.scopes.binance import BinanceScope


def addPriceCommands(scope: BinanceScope) -> None:
    def runSymbolPrice(inv: Invocation) -> None:
        prices = scope.currentPrices()
        for arg in inv.args:
            symbol = arg.upper()
            if (price := prices.get(symbol)) is None:
                render.show(f"{render.label(symbol)}:  {render.red('unknown symbol')}")
                continue

            render.info(symbol, price)

    def runAssetPrice(inv: Invocation) -> None:
        asset = inv.args[0].upper()
        markets = scope.baseAssetMap.get(asset)
        if not markets:
            raise CommandError(f"unknown symbol: {asset}")

        prices = scope.currentPrices()
        for market in markets:
            symbol = market["symbol"]
            if (price := prices.get(symbol)) is None:
                render.show(f"{render.label(symbol)}:  {render.red('unknown price')}")
                continue

            render.info(symbol, price)

    def runCompare(inv: Invocation) -> None:
        market, leg1, leg2 = (a.upper() for a in inv.args)
        prices = scope.currentPrices()

        marketPrice = scope.currentPrice(market, prices)
        p1 = scope.currentPrice(leg1, prices)
        p2 = scope.currentPrice(leg2, prices)
        for symbol in (market, leg1, leg2):
            render.info(symbol, prices[symbol])

        try:
            result = calc.priceComparison(marketPrice, p1, p2)
        except ValueError as e:
            raise CommandError(str(e)) from e

        print(f"\nConverted Price: {result.converted:0.8f}")
        print(f"Difference:      {result.difference:0.8f} ({result.percent:0.2f}%)")

        print("\nSuggestion:")
        if not result.hasOpportunity:
            print(
                f"No opportunity: the price difference is under {calc.OPPORTUNITY_THRESHOLD_PCT:.1f}%."
            )
        elif result.legsCheaper:
            print(
                f"Buy through {leg1} and {leg2} at {result.converted:0.8f} and sell {market} "
                f"at {prices[market]} for a gain of {result.percent:0.2f}%"
            )
        else:
            print(
                f"Buy {market} at {prices[market]} and sell through {leg1} and {leg2} "
                f"at {result.converted:0.8f} for a gain of {result.percent:0.2f}%"
            )

    scope.addCommand(
        CommandNode(
            name="symbol-price",
            short="Get the current price for the given symbols",
            validate=minimumArgs(1),
            suggest=lambda env, args: scope.symbolNames(),
            eager=True,
            run=runSymbolPrice,
        ),
        CommandNode(
            name="asset-price",
            short="Get all current prices for an asset",
            validate=exactArgs(1),
            suggest=lambda env, args: scope.baseAssets(),
            eager=True,
            run=runAssetPrice,
        ),
        CommandNode(
            name="compare",
            short="Compare price from one asset to another through an intermediary market",
            long="""This converts the price from two markets and compares the price to the direct
market price. For example, to check whether the ETHUSDT price matches the
ETHBTC/BTCUSDT price:

    compare ETHUSDT ETHBTC BTCUSDT""",
            validate=exactArgs(3),
            suggest=lambda env, args: scope.symbolNames(),
            eager=True,
            run=runCompare,
        ),
    )
