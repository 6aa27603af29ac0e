"""Commands: help, set, exit, quit

Category: Shell

Installed in every scope.
"""
from __future__ import annotations

from loguru import logger

from mercator import render
from mercator.engine.command import CommandNode, Invocation, noArgs, rangeArgs
from mercator.engine.environment import Environment
from mercator.engine.errors import CommandError, CommandNotFound, ExitRequested
from mercator.engine.scope import Scope


def runHelp(inv: Invocation) -> None:
    root = inv.env.currentScope().rootCommand()
    node, rest = root.resolve(inv.args)
    if rest:
        raise CommandNotFound(rest[0], node.name)

    print(node.helpText())


def suggestHelp(env: Environment, args: list[str]) -> list[str]:
    return [cmd.name for cmd in env.currentScope().rootCommand().children]


def runSet(inv: Invocation) -> None:
    settings = inv.env.settings

    if not inv.args:
        if not settings:
            logger.info("No settings in this session yet.")
            return

        for key in sorted(settings):
            render.info(key, settings[key])

        return

    key = inv.args[0]
    if key not in settings:
        raise CommandError(f"unknown setting: {key}")

    if len(inv.args) == 1:
        render.info(key, settings[key])
        return

    settings[key] = inv.args[1]
    logger.info("Set {} = {}", key, inv.args[1])


def suggestSet(env: Environment, args: list[str]) -> list[str]:
    if len(args) > 1:
        return []

    return sorted(env.settings)


def runExit(inv: Invocation) -> None:
    inv.env.pop()


def runQuit(inv: Invocation) -> None:
    raise ExitRequested(0)


def addCommonCommands(scope: Scope) -> None:
    scope.addCommand(
        CommandNode(
            name="help",
            short="Prints help for this scope or a command",
            suggest=suggestHelp,
            run=runHelp,
        ),
        CommandNode(
            name="set",
            short="Show or change session settings",
            long="""Show or change session settings.

    set                 list all settings
    set KEY             show one setting
    set KEY VALUE       change a setting""",
            validate=rangeArgs(0, 2),
            suggest=suggestSet,
            eager=True,
            run=runSet,
        ),
        CommandNode(
            name="exit",
            short="Exits the current scope. Exits CLI if at top-level scope.",
            validate=noArgs,
            run=runExit,
        ),
        CommandNode(
            name="quit",
            short="Fully exits the CLI regardless of scope",
            validate=noArgs,
            run=runQuit,
        ),
    )
