"""Scopes installed in the shell.

Importing this package registers every scope module below with the registry
so the root scope can offer them under ``use``.
"""

from mercator.scopes.registry import SCOPES, ScopeEntry, scope

from mercator.scopes import binance, shopify  # noqa: E402,F401  (registration)

__all__ = ["SCOPES", "ScopeEntry", "scope"]
