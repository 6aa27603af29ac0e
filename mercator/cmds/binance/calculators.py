"""Commands: shares, risk, current-value, future-value

Category: Calculators
"""
from __future__ import annotations

from typing import TYPE_CHECKING

from loguru import logger

from mercator import calc, render
from mercator.engine.command import CommandNode, Flag, Invocation, exactArgs, minimumArgs, noArgs
from mercator.engine.errors import CommandError
from mercator.engine.suggest import afterFlag

if TYPE_CHECKING:
    from mercator.scopes.binance import BinanceScope


def checked(fn, *args):
    """Call a calc function, turning its ValueError into a reportable CommandError."""
    try:
        return fn(*args)
    except ValueError as e:
        raise CommandError(str(e)) from e


def addCalculatorCommands(scope: BinanceScope) -> None:
    def runShares(inv: Invocation) -> None:
        investment = inv.flag("inv")

        if not inv.args:
            if not inv.isSet("price"):
                raise CommandError("either price or symbol is required")

            price = inv.flag("price")
            qty = checked(calc.shares, investment, price)
            render.show(f"{render.green('Shares')}: {qty:.8f} at {price:.8f}")
            return

        if len(inv.args) > 1:
            logger.warning("More than one symbol provided. Using {}", inv.args[0])

        symbol = inv.args[0].upper()
        info = scope.symbolInfo(symbol)
        price = scope.currentPrice(symbol)
        qty = checked(calc.shares, investment, price)

        render.show(
            f"{render.label('Shares')}: {scope.formatQuote(info, investment)} "
            f"{render.blue(info['quoteAsset'])} buys {scope.formatBase(info, qty)} "
            f"{render.blue(info['baseAsset'])} at {scope.formatQuote(info, price)}"
        )

    def runRisk(inv: Invocation) -> None:
        symbol = inv.args[0].upper()
        info = scope.symbolInfo(symbol)
        investment = inv.flag("inv")

        rr = checked(
            calc.riskReward, investment, inv.flag("entry"), inv.flag("stop"), inv.flag("ratio")
        )

        quote = render.blue(info["quoteAsset"])
        render.show(
            f"{render.green('Shares')}: {scope.formatQuote(info, investment)} {quote} buys "
            f"{scope.formatBase(info, rr.shares)} {render.blue(info['baseAsset'])} "
            f"at {scope.formatQuote(info, inv.flag('entry'))}"
        )
        render.show(f"{render.green('Risk')}: {scope.formatQuote(info, rr.risk)} {quote}")
        render.show(
            f"{render.green('Earnings')}: {scope.formatQuote(info, rr.earnings)} {quote} "
            f"if sold at {scope.formatQuote(info, rr.target)} {quote}"
        )

    def runCurrentValue(inv: Invocation) -> None:
        amount = inv.flag("amount")
        prices = scope.currentPrices()

        for arg in inv.args:
            symbol = arg.upper()
            info = scope.symbolMap.get(symbol)
            if info is None or symbol not in prices:
                render.show(f"{render.label(symbol)}: {render.red('unknown symbol')}")
                continue

            value = amount * scope.currentPrice(symbol, prices)
            render.show(
                f"{render.label(symbol)}: {scope.formatQuote(info, value)} "
                f"{render.blue(info['quoteAsset'])}"
            )

    def runFutureValue(inv: Invocation) -> None:
        amount = inv.flag("amount")
        price = inv.flag("price")
        if price <= 0:
            raise CommandError("price must be positive")

        render.show(
            f"The {render.yellow(f'{amount:.8f}')} shares would be valued at "
            f"{render.green(f'{amount * price:.8f}')} if sold at {render.blue(f'{price:.8f}')}"
        )

    scope.addCommand(
        CommandNode(
            name="shares",
            short="Calculate shares if bought at a certain price",
            long="""Calculate shares if bought at a certain price.

Give either --price, or a symbol to use its current market price:

    shares --inv 100 --price 0.25
    shares --inv 100 BTCUSDT""",
            flags=[
                Flag("inv", float, 0.0, "Investment amount", short="i", required=True),
                Flag("price", float, 0.0, "Buy price", short="p"),
            ],
            suggest=afterFlag("inv", scope.symbolNames, short="i"),
            run=runShares,
        ),
        CommandNode(
            name="risk",
            short="Calculate risk if bought and sold at certain prices",
            flags=[
                Flag("inv", float, 0.0, "Investment amount", required=True),
                Flag("entry", float, 0.0, "Entry price", required=True),
                Flag("stop", float, 0.0, "Stop price", required=True),
                Flag("ratio", float, 2.0, "Risk/reward ratio"),
            ],
            validate=exactArgs(1),
            suggest=lambda env, args: scope.symbolNames(),
            run=runRisk,
        ),
        CommandNode(
            name="current-value",
            short="Get the current value of an asset for the given symbols",
            flags=[Flag("amount", float, 1.0, "Amount of asset", required=True)],
            validate=minimumArgs(1),
            suggest=afterFlag("amount", scope.symbolNames),
            run=runCurrentValue,
        ),
        CommandNode(
            name="future-value",
            short="Calculate value of shares if sold at a future price",
            flags=[
                Flag("amount", float, 0.0, "Number of shares", short="a", required=True),
                Flag("price", float, 0.0, "Sell price", short="p", required=True),
            ],
            validate=noArgs,
            run=runFutureValue,
        ),
    )
