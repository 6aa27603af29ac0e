"""The binance scope: exchange queries and calculators priced off live markets.

Building the scope needs API credentials and one successful exchange-info call
(the symbol list feeds every symbol/asset suggestion); if either is missing
the scope is never created.
"""
from __future__ import annotations

from collections import defaultdict
from collections.abc import Mapping
from typing import Any
from urllib.parse import quote, urlsplit, urlunsplit

import requests
from binance.client import Client
from binance.exceptions import BinanceAPIException, BinanceRequestException
from loguru import logger

from mercator.calc import fmtPrecision
from mercator.cmds.binance.account import addAccountCommands
from mercator.cmds.binance.calculators import addCalculatorCommands
from mercator.cmds.binance.details import addDetailCommands
from mercator.cmds.binance.market import addMarketCommands
from mercator.cmds.binance.prices import addPriceCommands
from mercator.cmds.binance.trades import addTradeCommands
from mercator.cmds.common import addCommonCommands
from mercator.engine.environment import Environment
from mercator.engine.errors import CommandError, ScopeInitError
from mercator.engine.protocols import ExchangeClient
from mercator.engine.scope import Scope
from mercator.scopes.registry import scope

PREFIX = "binance"
DESCRIPTION = "Access Binance exchange information"

# exchange failures that mean "couldn't build the scope" rather than a bug
UPSTREAM_ERRORS = (BinanceAPIException, BinanceRequestException, requests.RequestException)


def proxySettings(config: Mapping[str, str]) -> dict[str, str] | None:
    """Authenticated proxy URLs for requests, or None when no proxy credentials are set.

    Credentials come from PROXY_USER / PROXY_PASS; the proxy address from
    HTTPS_PROXY (or HTTP_PROXY).
    """
    user = config.get("PROXY_USER") or ""
    password = config.get("PROXY_PASS") or ""
    if not user and not password:
        return None

    if not (user and password):
        raise ScopeInitError("Binance scope requires env variables: PROXY_USER and PROXY_PASS")

    address = next(
        (
            config[k]
            for k in ("HTTPS_PROXY", "https_proxy", "HTTP_PROXY", "http_proxy")
            if config.get(k)
        ),
        None,
    )
    if not address:
        raise ScopeInitError("Proxy credentials given but HTTPS_PROXY or HTTP_PROXY is not set")

    parts = urlsplit(address if "://" in address else f"http://{address}")
    if not parts.hostname:
        raise ScopeInitError(f"Invalid proxy address: {address}")

    netloc = f"{quote(user, safe='')}:{quote(password, safe='')}@{parts.hostname}"
    if parts.port:
        netloc += f":{parts.port}"

    url = urlunsplit((parts.scheme, netloc, parts.path, "", ""))
    return {"http": url, "https": url}


def createClient(config: Mapping[str, str]) -> Client:
    apiKey = config.get("BINANCE_API_KEY")
    apiSecret = config.get("BINANCE_API_SECRET")
    if not apiKey or not apiSecret:
        raise ScopeInitError(
            "Binance scope requires env variables: BINANCE_API_KEY and BINANCE_API_SECRET"
        )

    proxies = proxySettings(config)
    requestsParams = {"proxies": proxies} if proxies else None
    return Client(apiKey, apiSecret, requests_params=requestsParams)


class BinanceScope(Scope):
    """Binance commands bound to one client and one snapshot of the symbol list."""

    def __init__(self, client: ExchangeClient, symbols: list[dict[str, Any]]):
        super().__init__(PREFIX, DESCRIPTION)
        self.client = client
        self.symbols = symbols
        self.symbolMap: dict[str, dict[str, Any]] = {s["symbol"]: s for s in symbols}

        byBase: dict[str, list[dict[str, Any]]] = defaultdict(list)
        for s in symbols:
            if (base := (s.get("baseAsset") or "").strip()):
                byBase[base].append(s)

        self.baseAssetMap = dict(byBase)

        addMarketCommands(self)
        addPriceCommands(self)
        addAccountCommands(self)
        addTradeCommands(self)
        addCalculatorCommands(self)
        addDetailCommands(self)
        addCommonCommands(self)

    # ── symbol lookups ──────────────────────────────────────────────

    def symbolNames(self) -> list[str]:
        return sorted(self.symbolMap)

    def baseAssets(self) -> list[str]:
        return sorted(self.baseAssetMap)

    def symbolInfo(self, symbol: str) -> dict[str, Any]:
        try:
            return self.symbolMap[symbol]
        except KeyError:
            raise CommandError(f"unknown symbol: {symbol}")

    def currentPrices(self) -> dict[str, str]:
        """Latest price for every symbol, as the exchange's decimal strings."""
        return {t["symbol"]: t["price"] for t in self.client.get_all_tickers()}

    def currentPrice(self, symbol: str, prices: Mapping[str, str] | None = None) -> float:
        if prices is None:
            prices = self.currentPrices()

        try:
            raw = prices[symbol]
        except KeyError:
            raise CommandError(f"unknown symbol: {symbol}")

        try:
            return float(raw)
        except ValueError:
            raise CommandError(f"could not convert price: {symbol} {raw}")

    # ── formatting ──────────────────────────────────────────────────

    @staticmethod
    def formatBase(info: Mapping[str, Any], value: float) -> str:
        return fmtPrecision(value, int(info.get("baseAssetPrecision", 8)))

    @staticmethod
    def formatQuote(info: Mapping[str, Any], value: float) -> str:
        return fmtPrecision(value, int(info.get("quotePrecision", 8)))


@scope(PREFIX, DESCRIPTION)
def createBinanceScope(env: Environment) -> BinanceScope:
    try:
        client = createClient(env.config)
        info = client.get_exchange_info()
    except UPSTREAM_ERRORS as e:
        logger.debug("Exchange info request failed: {}", e)
        raise ScopeInitError("failed to list symbols") from e

    symbols = info.get("symbols") or []
    logger.info("[{}] Loaded {:,} symbols", PREFIX, len(symbols))
    return BinanceScope(client, symbols)
