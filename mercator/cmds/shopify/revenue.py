"""Command: revenue

Category: Projections
"""
from __future__ import annotations

import math

from mercator import calc, render
from mercator.engine.command import CommandNode, Flag, Invocation, noArgs
from mercator.engine.errors import CommandError
from mercator.engine.scope import Scope


def settingFloat(inv: Invocation, name: str) -> float:
    raw = inv.env.settings.get(name)
    try:
        val = float(raw)
    except (TypeError, ValueError):
        raise CommandError(f"setting {name} must be a number, got: {raw!r}")

    if not math.isfinite(val):
        raise CommandError(f"setting {name} must be a number, got: {raw!r}")

    return val


def fmtRatio(value: float) -> str:
    return "n/a" if math.isnan(value) else f"{value:.4f}"


def runRevenue(inv: Invocation) -> None:
    cpm = settingFloat(inv, "shopify.cpm")
    ctr = settingFloat(inv, "shopify.ctr")
    conv = settingFloat(inv, "shopify.conv")

    try:
        p = calc.revenueProjection(
            inv.flag("cost"), inv.flag("price"), inv.flag("goal"), cpm, ctr, conv
        )
    except ValueError as e:
        raise CommandError(str(e)) from e

    render.info("Cost Per Thousand Impressions", f"${cpm:.2f}")
    render.info("Click Through Rate", f"{ctr * 100:.2f}%")
    render.info("Conversion Rate", f"{conv * 100:.2f}%")
    print()
    render.info("Revenue Per Sale", f"${p.revenuePerSale:,.2f}")
    render.info("Sales Needed", f"{p.sales:,.0f}")
    render.info("Visitors Needed", f"{p.visitors:,.0f}")
    render.info("Impressions Needed", f"{p.impressions:,.0f}")
    print()
    render.info("Gross", f"${p.gross:,.2f}")
    render.info("Product Expenses", f"${p.productExpenses:,.2f}")
    render.info("Marketing Budget", f"${p.marketingBudget:,.2f}")
    render.info("Net Revenue", f"${p.revenue:,.2f}")
    print()
    render.info("Profit/Marketing Ratio", fmtRatio(p.profitMarketingRatio))
    render.info("Profit/Expenses Ratio", fmtRatio(p.profitExpensesRatio))
    render.info("Cost Per Visitor", f"${p.costPerVisitor:,.2f}")
    render.info("Cost Per Purchase", f"${p.costPerPurchase:,.2f}")
    render.info("Profit Per Sale", f"${p.profitPerSale:,.2f}")


def addRevenueCommands(scope: Scope) -> None:
    scope.addCommand(
        CommandNode(
            name="revenue",
            short="Calculate revenue needed to reach a sales goal",
            long="""Calculate the sales, traffic and ad spend needed to gross a goal.

Ad inputs come from the session settings shopify.cpm, shopify.ctr and
shopify.conv (see 'set').""",
            flags=[
                Flag("cost", float, 1.0, "Cost of one product"),
                Flag("price", float, 1.0, "Sell price of one product"),
                Flag("goal", float, 1000.0, "Gross sales goal"),
            ],
            validate=noArgs,
            run=runRevenue,
        )
    )
