"""Registry of scopes reachable through ``use <name>``."""
from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mercator.engine.environment import Environment
    from mercator.engine.scope import Scope

ScopeFactory = Callable[["Environment"], "Scope"]


@dataclass(frozen=True, slots=True)
class ScopeEntry:
    name: str
    description: str
    factory: ScopeFactory


SCOPES: dict[str, ScopeEntry] = {}


def scope(name: str, description: str):
    """Register a scope factory under ``name``.

    The factory receives the environment and returns a fully built scope, or
    raises ``ScopeInitError``; a failed factory never gets pushed.
    """

    def register(factory: ScopeFactory) -> ScopeFactory:
        if name in SCOPES:
            raise ValueError(f"Scope already registered: {name}")

        SCOPES[name] = ScopeEntry(name, description, factory)
        return factory

    return register
