"""Command trees: flags, arity rules, dispatch and help text.

A scope owns exactly one root ``CommandNode``; every child node is a command
(or a group of sub-commands) reachable by typing its name. Executing a line
walks the tree while tokens name children, then parses the remaining tokens
as flags and positional arguments for the node it stopped at.

Flag values never outlive one execution: each run body receives a fresh
``Invocation`` holding the parsed arguments, so a flag omitted on the second
call falls back to its default instead of keeping the first call's value.
"""
from __future__ import annotations

import math
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from mercator.engine.errors import ArityError, CommandNotFound, FlagError

if TYPE_CHECKING:
    from mercator.engine.environment import Environment

ArgValidator = Callable[[list[str]], None]
SuggestFunc = Callable[["Environment", list[str]], Sequence[str]]
RunFunc = Callable[["Invocation"], None]

HELP_TOKENS: frozenset[str] = frozenset({"--help", "-h"})

_TRUE = {"1", "t", "true", "y", "yes", "on"}
_FALSE = {"0", "f", "false", "n", "no", "off"}

_TYPE_NAMES = {str: "string", int: "int", float: "float", bool: ""}


def parseBool(raw: str) -> bool:
    val = raw.strip().lower()
    if val in _TRUE:
        return True

    if val in _FALSE:
        return False

    raise ValueError(f"not a boolean: {raw}")


def looksNumeric(token: str) -> bool:
    """True for tokens like ``-5`` or ``-0.25`` which are values, not flags."""
    try:
        float(token)
    except ValueError:
        return False

    return True


@dataclass(slots=True)
class Flag:
    """A named ``--flag`` option declared on a command."""

    name: str
    type: Callable[[str], Any] = str
    default: Any = None
    usage: str = ""
    short: str = ""
    required: bool = False

    @property
    def isBool(self) -> bool:
        return self.type is bool

    def convert(self, raw: str) -> Any:
        try:
            if self.isBool:
                return parseBool(raw)

            val = self.type(raw)
        except ValueError:
            raise FlagError(f'invalid argument "{raw}" for "--{self.name}" flag')

        if isinstance(val, float) and not math.isfinite(val):
            raise FlagError(f'invalid argument "{raw}" for "--{self.name}" flag')

        return val

    def display(self) -> str:
        lead = f"-{self.short}, " if self.short else "    "
        kind = _TYPE_NAMES.get(self.type, getattr(self.type, "__name__", ""))
        return f"{lead}--{self.name} {kind}".rstrip()


# ── Arity rules ─────────────────────────────────────────────────────


def noArgs(args: list[str]) -> None:
    if args:
        raise ArityError(f"accepts 0 arg(s), received {len(args)}")


def exactArgs(n: int) -> ArgValidator:
    def validate(args: list[str]) -> None:
        if len(args) != n:
            raise ArityError(f"accepts {n} arg(s), received {len(args)}")

    return validate


def minimumArgs(n: int) -> ArgValidator:
    def validate(args: list[str]) -> None:
        if len(args) < n:
            raise ArityError(f"requires at least {n} arg(s), only received {len(args)}")

    return validate


def maximumArgs(n: int) -> ArgValidator:
    def validate(args: list[str]) -> None:
        if len(args) > n:
            raise ArityError(f"accepts at most {n} arg(s), received {len(args)}")

    return validate


def rangeArgs(lo: int, hi: int) -> ArgValidator:
    def validate(args: list[str]) -> None:
        if not lo <= len(args) <= hi:
            raise ArityError(f"accepts between {lo} and {hi} arg(s), received {len(args)}")

    return validate


# ── Parsed arguments ────────────────────────────────────────────────


@dataclass(slots=True)
class Invocation:
    """Everything a run body gets for one execution of its command."""

    env: Environment
    command: CommandNode
    args: list[str] = field(default_factory=list)
    flags: dict[str, Any] = field(default_factory=dict)
    changed: set[str] = field(default_factory=set)

    def flag(self, name: str) -> Any:
        return self.flags[name]

    def isSet(self, name: str) -> bool:
        """True when the user typed the flag on this invocation."""
        return name in self.changed


# ── Tree nodes ──────────────────────────────────────────────────────


@dataclass(eq=False)
class CommandNode:
    """One named entry in a scope's command tree."""

    name: str
    short: str = ""
    long: str = ""
    flags: list[Flag] = field(default_factory=list)
    validate: ArgValidator | None = None
    suggest: SuggestFunc | None = None

    # offer 'suggest' results as soon as the command name is typed
    eager: bool = False

    run: RunFunc | None = None
    children: list[CommandNode] = field(default_factory=list)
    parent: CommandNode | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        if not self.name or any(c.isspace() for c in self.name):
            raise ValueError(f"Invalid command name: {self.name!r}")

        seen: set[str] = set()
        for f in self.flags:
            if f.name in seen:
                raise ValueError(f"[{self.name}] Duplicate flag: --{f.name}")

            seen.add(f.name)

        children, self.children = self.children, []
        self.add(*children)

    def add(self, *commands: CommandNode) -> CommandNode:
        """Attach child commands. Sibling names must be unique."""
        for cmd in commands:
            if self.child(cmd.name) is not None:
                raise ValueError(f"[{self.name}] Duplicate command: {cmd.name}")

            cmd.parent = self
            self.children.append(cmd)

        return self

    def child(self, name: str) -> CommandNode | None:
        for cmd in self.children:
            if cmd.name == name:
                return cmd

        return None

    def flagNamed(self, name: str) -> Flag | None:
        for f in self.flags:
            if f.name == name:
                return f

        return None

    def flagShort(self, short: str) -> Flag | None:
        for f in self.flags:
            if f.short and f.short == short:
                return f

        return None

    @property
    def path(self) -> str:
        names = []
        node: CommandNode | None = self
        while node is not None:
            names.append(node.name)
            node = node.parent

        return " ".join(reversed(names))

    def resolve(self, tokens: Sequence[str]) -> tuple[CommandNode, list[str]]:
        """Walk down while tokens name children; return (node, unconsumed tokens)."""
        node = self
        consumed = 0
        for token in tokens:
            found = node.child(token)
            if found is None:
                break

            node = found
            consumed += 1

        return node, list(tokens[consumed:])

    def parseFlags(self, tokens: Sequence[str]) -> tuple[list[str], dict[str, Any], set[str]]:
        """Split tokens into (positionals, flag values, names of flags given)."""
        values = {f.name: f.default for f in self.flags}
        changed: set[str] = set()
        positionals: list[str] = []

        idx = 0
        while idx < len(tokens):
            token = tokens[idx]
            idx += 1

            if token == "--":
                positionals.extend(tokens[idx:])
                break

            if token.startswith("--") and len(token) > 2:
                name, eq, inline = token[2:].partition("=")
                flag = self.flagNamed(name)
                if flag is None:
                    raise FlagError(f"unknown flag: --{name}")
            elif token.startswith("-") and len(token) > 1 and not looksNumeric(token):
                name, eq, inline = token[1:].partition("=")
                flag = self.flagShort(name)
                if flag is None:
                    raise FlagError(f"unknown shorthand flag: '{name}' in {token}")
            else:
                positionals.append(token)
                continue

            if eq:
                raw = inline
            elif flag.isBool:
                raw = "true"
            elif idx < len(tokens):
                raw = tokens[idx]
                idx += 1
            else:
                raise FlagError(f"flag needs an argument: {token}")

            values[flag.name] = flag.convert(raw)
            changed.add(flag.name)

        return positionals, values, changed

    def execute(self, env: Environment, tokens: Sequence[str]) -> None:
        """Dispatch tokens into this tree and run the command they select."""
        node, rest = self.resolve(tokens)

        flagPart = rest[: rest.index("--")] if "--" in rest else rest
        if HELP_TOKENS & set(flagPart) and not any(
            f.short == "h" for f in node.flags
        ):
            print(node.helpText())
            return

        if node.run is None:
            if rest:
                raise CommandNotFound(rest[0], node.name)

            print(node.helpText())
            return

        args, values, changed = node.parseFlags(rest)

        # one validation point for required flags, before arity and the run body
        missing = [f.name for f in node.flags if f.required and f.name not in changed]
        if missing:
            names = ", ".join(f'"{m}"' for m in missing)
            raise FlagError(f"required flag(s) {names} not set")

        if node.validate:
            node.validate(args)

        node.run(Invocation(env, node, args, values, changed))

    def helpText(self) -> str:
        lines = [(self.long or self.short).strip(), "", "Usage:"]
        if self.run is not None:
            lines.append(f"  {self.path} [flags]" if self.flags else f"  {self.path}")

        if self.children:
            lines.append(f"  {self.path} [command]")
            lines += ["", "Available Commands:"]
            width = max(len(c.name) for c in self.children)
            for cmd in self.children:
                lines.append(f"  {cmd.name:<{width}}  {cmd.short}")

        if self.flags:
            lines += ["", "Flags:"]
            rendered = [f.display() for f in self.flags]
            width = max(len(r) for r in rendered)
            for f, r in zip(self.flags, rendered):
                usage = f.usage
                if f.required:
                    usage += " (required)"
                elif f.default not in (None, "", False):
                    usage += f" (default {f.default})"

                lines.append(f"  {r:<{width}}  {usage}")

        return "\n".join(lines).lstrip("\n")
