"""Commands: asset-detail, symbol-detail

Category: Reference Data
"""
from __future__ import annotations

from typing import TYPE_CHECKING

from mercator import render
from mercator.engine.command import CommandNode, Flag, Invocation, noArgs
from mercator.engine.errors import CommandError
from mercator.engine.suggest import afterFlag

if TYPE_CHECKING:
    from mercator.scopes.binance import BinanceScope


def addDetailCommands(scope: BinanceScope) -> None:
    def runAssetDetail(inv: Invocation) -> None:
        asset = inv.flag("asset").upper()
        details = scope.client.get_asset_details()

        if (detail := details.get(asset)) is None:
            raise CommandError(f"unknown asset: {asset}")

        render.show(f"Deposit Status: {render.boolean(bool(detail.get('depositStatus')))}")
        render.info("Deposit Tip", detail.get("depositTip", ""))
        render.show(f"Withdraw Status: {render.boolean(bool(detail.get('withdrawStatus')))}")
        render.info("Minimum Withdraw Amount", f"{float(detail.get('minWithdrawAmount', 0)):f}")
        render.info("Withdraw Fee", f"{float(detail.get('withdrawFee', 0)):f}")

    def runSymbolDetail(inv: Invocation) -> None:
        details = scope.symbolInfo(inv.flag("symbol").upper())

        render.info("Symbol Status", details.get("status", ""))
        render.info("Base Asset", details.get("baseAsset", ""))
        render.info("Base Asset Precision", details.get("baseAssetPrecision", ""))
        render.info("Quote Asset", details.get("quoteAsset", ""))
        render.info("Quote Precision", details.get("quotePrecision", ""))
        for name, key in (
            ("Iceberg Allowed", "icebergAllowed"),
            ("OCO Orders Allowed", "ocoAllowed"),
            ("Spot Trading", "isSpotTradingAllowed"),
            ("Margin Trading", "isMarginTradingAllowed"),
        ):
            render.show(f"{render.label(name)}: {render.boolean(bool(details.get(key)))}")

        print("\nSupported Order Types:")
        for orderType in details.get("orderTypes", []):
            print(f"  {orderType}")

        print()

    scope.addCommand(
        CommandNode(
            name="asset-detail",
            short="Returns the asset details",
            flags=[Flag("asset", str, "", "Get the details for this asset", required=True)],
            validate=noArgs,
            suggest=afterFlag("asset", scope.baseAssets),
            run=runAssetDetail,
        ),
        CommandNode(
            name="symbol-detail",
            short="Returns the symbol details",
            flags=[Flag("symbol", str, "", "Get the details for the symbol", required=True)],
            validate=noArgs,
            suggest=afterFlag("symbol", scope.symbolNames),
            run=runSymbolDetail,
        ),
    )
