"""Exception types raised by the shell engine and by command bodies.

Everything deriving from ``MercatorError`` is an *input* or *collaborator*
failure: the executor reports it as a single warning line and the REPL keeps
running. ``ExitRequested`` is different: it is a ``SystemExit`` and is meant to
propagate all the way out of the REPL.
"""
from __future__ import annotations


class MercatorError(Exception):
    """Base class for all reportable shell errors."""


class CommandError(MercatorError):
    """A command body failed with a descriptive message."""


class CommandNotFound(MercatorError):
    """No command in the active tree matches the input."""

    def __init__(self, name: str, parent: str):
        self.name = name
        self.parent = parent
        super().__init__(f'unknown command "{name}" for "{parent}"')


class FlagError(MercatorError):
    """Unknown flag, missing flag value, bad flag value, or missing required flag."""


class ArityError(MercatorError):
    """Wrong number of positional arguments."""


class ScopeInitError(MercatorError):
    """A scope could not be constructed and must not be pushed."""


class EmptyStackError(MercatorError):
    """The scope stack is empty (never happens while the root invariant holds)."""


class ExitRequested(SystemExit):
    """Request to leave the program with status 0.

    Raised by ``quit`` and by popping the root scope.
    """

    def __init__(self, code: int = 0):
        super().__init__(code)
