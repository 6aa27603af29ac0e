"""The shopify scope: projections for running a store off paid traffic."""
from __future__ import annotations

from mercator.cmds.common import addCommonCommands
from mercator.cmds.shopify.revenue import addRevenueCommands
from mercator.config import configFloat
from mercator.engine.environment import Environment
from mercator.engine.errors import ScopeInitError
from mercator.engine.scope import Scope
from mercator.scopes.registry import scope

PREFIX = "shopify"
DESCRIPTION = "Utilities for managing shopify account"

# setting name -> configuration key supplying its starting value
SETTINGS = {
    "shopify.cpm": "SHOPIFY_CPM",
    "shopify.ctr": "SHOPIFY_CTR",
    "shopify.conv": "SHOPIFY_CONV",
}


class ShopifyScope(Scope):
    def __init__(self):
        super().__init__(PREFIX, DESCRIPTION)
        addRevenueCommands(self)
        addCommonCommands(self)


@scope(PREFIX, DESCRIPTION)
def createShopifyScope(env: Environment) -> ShopifyScope:
    try:
        seeds = {name: str(configFloat(env.config, key)) for name, key in SETTINGS.items()}
    except ValueError as e:
        raise ScopeInitError(str(e)) from e

    # values changed with 'set' survive leaving and re-entering the scope
    for name, value in seeds.items():
        env.settings.setdefault(name, value)

    return ShopifyScope()
