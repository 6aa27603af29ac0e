"""Arithmetic behind the calculator commands.

Nothing here talks to the exchange or prints; callers fetch prices, call these,
and render the results. Invalid inputs raise ``ValueError`` with a message fit
for showing to the user.
"""
from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Final

# below this percentage difference a cross-market price gap isn't worth trading
OPPORTUNITY_THRESHOLD_PCT: Final = 1.0


def fmtPrecision(value: float, digits: int) -> str:
    return f"{value:.{digits}f}"


def shares(investment: float, price: float) -> float:
    """Number of units ``investment`` buys at ``price``."""
    if price == 0:
        raise ValueError("current price is 0.0")

    if price < 0:
        raise ValueError("price must be positive")

    return investment / price


@dataclass(slots=True, frozen=True)
class RiskReward:
    shares: float
    risk: float
    earnings: float
    target: float


def riskReward(investment: float, entry: float, stop: float, ratio: float) -> RiskReward:
    """Position size, amount at risk, and reward for a stop/target pair.

    The target price sits ``ratio`` times the entry-to-stop distance above entry.
    """
    if entry <= 0:
        raise ValueError("entry price must be positive")

    if stop <= 0:
        raise ValueError("stop price must be positive")

    if stop >= entry:
        raise ValueError("stop price must be less than entry price")

    if ratio <= 0:
        raise ValueError("risk/reward ratio must be greater than 0")

    qty = investment / entry
    risk = qty * (entry - stop)
    return RiskReward(
        shares=qty,
        risk=risk,
        earnings=risk * ratio,
        target=entry + (entry - stop) * ratio,
    )


@dataclass(slots=True, frozen=True)
class PriceComparison:
    market: float
    converted: float
    difference: float
    percent: float

    @property
    def hasOpportunity(self) -> bool:
        return self.percent >= OPPORTUNITY_THRESHOLD_PCT

    @property
    def legsCheaper(self) -> bool:
        """True when buying through the two legs costs less than the direct market."""
        return self.converted < self.market


def priceComparison(market: float, leg1: float, leg2: float) -> PriceComparison:
    """Compare a direct market price against the price implied by two legs.

    e.g. ETHUSDT against ETHBTC * BTCUSDT.
    """
    if market <= 0:
        raise ValueError("market price must be positive")

    if leg2 <= 0:
        raise ValueError("second leg price has gone to 0")

    converted = leg1 * leg2
    diff = abs(converted - market)
    return PriceComparison(
        market=market, converted=converted, difference=diff, percent=diff / market * 100
    )


def _ratio(num: float, den: float) -> float:
    return num / den if den else math.nan


@dataclass(slots=True, frozen=True)
class RevenueProjection:
    revenuePerSale: float
    sales: float
    visitors: float
    impressions: float
    gross: float
    productExpenses: float
    marketingBudget: float
    revenue: float

    @property
    def profitMarketingRatio(self) -> float:
        return _ratio(self.revenue, self.marketingBudget)

    @property
    def profitExpensesRatio(self) -> float:
        return _ratio(self.revenue, self.marketingBudget + self.productExpenses)

    @property
    def costPerVisitor(self) -> float:
        return _ratio(self.marketingBudget, self.visitors)

    @property
    def costPerPurchase(self) -> float:
        return _ratio(self.marketingBudget, self.sales)

    @property
    def profitPerSale(self) -> float:
        return self.revenuePerSale - self.costPerPurchase


def revenueProjection(
    cost: float, price: float, goal: float, cpm: float, ctr: float, conversion: float
) -> RevenueProjection:
    """Sales, traffic and ad spend needed to gross ``goal`` selling at ``price``.

    ``cpm`` is cost per thousand ad impressions; ``ctr`` and ``conversion`` are
    fractions (0.03 == 3%).
    """
    if price <= 0:
        raise ValueError("price must be positive")

    if ctr <= 0 or conversion <= 0:
        raise ValueError("click-through and conversion rates must be positive")

    sales = math.floor(goal / price + 1)
    visitors = sales / conversion
    impressions = visitors / ctr

    gross = sales * price
    productExpenses = sales * cost
    marketingBudget = impressions / 1000.0 * cpm

    return RevenueProjection(
        revenuePerSale=price - cost,
        sales=sales,
        visitors=visitors,
        impressions=impressions,
        gross=gross,
        productExpenses=productExpenses,
        marketingBudget=marketingBudget,
        revenue=gross - productExpenses - marketingBudget,
    )


def balanceTotal(balance: Mapping[str, Any]) -> float:
    return float(balance.get("free") or 0) + float(balance.get("locked") or 0)


def sortBalances(balances: Iterable[Mapping[str, Any]]) -> list[Mapping[str, Any]]:
    """Non-empty balances, largest total (free + locked) first."""
    held = [b for b in balances if balanceTotal(b) > 0]
    return sorted(held, key=balanceTotal, reverse=True)
