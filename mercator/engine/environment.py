"""The scope stack plus line execution and completion against the active scope."""
from __future__ import annotations

import shlex
from collections.abc import Mapping

from loguru import logger

from mercator.engine.errors import EmptyStackError, ExitRequested, MercatorError
from mercator.engine.scope import Scope
from mercator.engine.suggest import Suggestion, collectSuggestions, fuzzyFilter

PROMPT_SEPARATOR = ":"
PROMPT_MARKER = "> "


def splitLine(line: str) -> list[str]:
    """Shell-style split: quoted strings with spaces stay one token.

    Raises ValueError for malformed input such as an unclosed quote.
    """
    return shlex.split(line)


class Environment:
    """Owns the stack of active scopes; the top of the stack is the active scope.

    The bottom scope is pushed at construction and is never removed: popping
    it is a request to leave the program.
    """

    def __init__(self, root: Scope, config: Mapping[str, str] | None = None):
        self.stack: list[Scope] = [root]
        self.config: dict[str, str] = dict(config or {})

        # runtime-adjustable values (see the 'set' command), seeded by scopes
        self.settings: dict[str, str] = {}

    @property
    def depth(self) -> int:
        return len(self.stack)

    def push(self, scope: Scope) -> None:
        logger.debug("[{}] Entering scope", scope.meta().prefix)
        self.stack.append(scope)

    def pop(self) -> Scope:
        if len(self.stack) <= 1:
            raise ExitRequested(0)

        scope = self.stack.pop()
        logger.debug("[{}] Leaving scope", scope.meta().prefix)
        return scope

    def currentScope(self) -> Scope:
        if not self.stack:
            raise EmptyStackError("current scope is missing")

        return self.stack[-1]

    def promptPrefix(self) -> str:
        prefixes = [scope.meta().prefix for scope in self.stack]
        return PROMPT_SEPARATOR.join(prefixes) + PROMPT_MARKER

    def execute(self, line: str) -> None:
        """Run one line of user input against the active scope.

        Failures are reported as warnings; only ``ExitRequested`` escapes.
        """
        if not line.strip():
            return

        try:
            args = splitLine(line)
        except ValueError as e:
            logger.warning("Error parsing input: {}", e)
            return

        try:
            scope = self.currentScope()
        except EmptyStackError as e:
            logger.warning("{}", e)
            return

        try:
            scope.rootCommand().execute(self, args)
        except MercatorError as e:
            logger.warning("{}", e)
        except Exception as e:
            # exchange/network failures from the command body
            logger.warning("[{}] {}", args[0], e)

    def complete(self, line: str, word: str) -> list[Suggestion]:
        """Ranked suggestions for ``line``, filtered by the word before the cursor."""
        text = line.strip()
        if not text:
            return []

        scope = self.currentScope()
        found = collectSuggestions(self, scope.rootCommand().children, text)
        return fuzzyFilter(found, word)
