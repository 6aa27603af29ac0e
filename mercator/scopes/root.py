"""The root scope: always at the bottom of the stack, entry point to every other scope."""
from __future__ import annotations

from collections.abc import Mapping

from loguru import logger

from mercator.cmds.common import addCommonCommands
from mercator.engine.command import CommandNode, Invocation, noArgs
from mercator.engine.errors import CommandError
from mercator.engine.scope import Scope
from mercator.scopes.registry import ScopeEntry

ROOT_PREFIX = "mercator"
ROOT_DESCRIPTION = "A command line tool for managing monetary assets"


def enterScope(entry: ScopeEntry):
    def run(inv: Invocation) -> None:
        # ScopeInitError propagates to the executor; nothing is pushed
        scope = entry.factory(inv.env)
        inv.env.push(scope)
        logger.info("[{}] {}", scope.meta().prefix, scope.meta().description)

    return run


def runUse(inv: Invocation) -> None:
    if inv.args:
        raise CommandError(f"unknown scope: {inv.args[0]}")

    names = [cmd.name for cmd in inv.command.children]
    if not names:
        raise CommandError("no scopes available")

    print(inv.command.helpText())


class RootScope(Scope):
    def __init__(self, registry: Mapping[str, ScopeEntry]):
        super().__init__(ROOT_PREFIX, ROOT_DESCRIPTION)

        use = CommandNode(
            name="use",
            short="Use changes the scope for the environment",
            run=runUse,
        )
        for entry in registry.values():
            use.add(
                CommandNode(
                    name=entry.name,
                    short=entry.description,
                    validate=noArgs,
                    run=enterScope(entry),
                )
            )

        self.addCommand(use)
        addCommonCommands(self)
