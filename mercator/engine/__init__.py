"""mercator engine layer: the scoped command shell with no terminal UI dependency.

Modules
-------
errors
    Exception taxonomy.
    - ``MercatorError`` and subclasses: reported as one warning line, REPL continues
    - ``ExitRequested``: ``SystemExit(0)`` raised by ``quit`` and by popping the root scope

command
    Command trees.
    - ``CommandNode``: name, descriptions, flags, arity rule, suggestion source, run body, children
    - ``Flag``: typed ``--flag`` declaration (str/int/float/bool, default, required)
    - ``Invocation``: per-execution parsed arguments handed to run bodies
    - Arity rules: ``noArgs``, ``exactArgs``, ``minimumArgs``, ``maximumArgs``, ``rangeArgs``

scope
    - ``Scope``: prefix + description + root command node
    - ``ScopeMeta``: (prefix, description)

environment
    - ``Environment``: scope stack, live prompt prefix, ``execute(line)``, ``complete(line, word)``
    - ``splitLine``: shell-style tokenizer

suggest
    - ``collectSuggestions``: recursive tree walk producing completion candidates
    - ``fuzzyFilter``: case-insensitive subsequence filter with match-position ranking

protocols
    - ``ExchangeClient``: the slice of the python-binance client used by commands
"""

from mercator.engine.command import CommandNode, Flag, Invocation
from mercator.engine.environment import Environment
from mercator.engine.errors import CommandError, ExitRequested, MercatorError, ScopeInitError
from mercator.engine.scope import Scope, ScopeMeta
from mercator.engine.suggest import Suggestion

__all__ = [
    "CommandError",
    "CommandNode",
    "Environment",
    "ExitRequested",
    "Flag",
    "Invocation",
    "MercatorError",
    "Scope",
    "ScopeInitError",
    "ScopeMeta",
    "Suggestion",
]
