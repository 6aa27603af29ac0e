"""Commands: account-info, account-balance

Category: Account
"""
from __future__ import annotations

from typing import TYPE_CHECKING

from mercator import calc, render
from mercator.engine.command import CommandNode, Invocation, noArgs

if TYPE_CHECKING:
    from mercator.scopes.binance import BinanceScope


def addAccountCommands(scope: BinanceScope) -> None:
    def runAccountInfo(inv: Invocation) -> None:
        account = scope.client.get_account()

        print("\nCommissions:")
        for name, key in (
            ("Maker Commission", "makerCommission"),
            ("Taker Commission", "takerCommission"),
            ("Buyer Commission", "buyerCommission"),
            ("Seller Commission", "sellerCommission"),
        ):
            render.info(name, account.get(key, 0), prefix="- ")

        print("\nPermissions:")
        for name, key in (
            ("Can Trade", "canTrade"),
            ("Can Deposit", "canDeposit"),
            ("Can Withdraw", "canWithdraw"),
        ):
            render.show(f"- {render.label(name)}: {render.boolean(bool(account.get(key)))}")

    def runAccountBalance(inv: Invocation) -> None:
        account = scope.client.get_account()
        balances = calc.sortBalances(account.get("balances", []))

        render.show(render.paint("ansiwhite", "\nAccount Balance(s):"))
        if not balances:
            print("No balances held.")
            return

        for balance in balances:
            render.show(f"{render.label(balance['asset'])}:")
            render.show(f"  {render.yellow('Free')}:     {balance['free']}")
            render.show(f"  {render.yellow('Locked')}:   {balance['locked']}")
            render.show(f"  {render.yellow('Total')}:    {calc.balanceTotal(balance):0.8f}")

    scope.addCommand(
        CommandNode(
            name="account-info",
            short="Show user account info",
            validate=noArgs,
            run=runAccountInfo,
        ),
        CommandNode(
            name="account-balance",
            short="Show user account balances",
            validate=noArgs,
            run=runAccountBalance,
        ),
    )
