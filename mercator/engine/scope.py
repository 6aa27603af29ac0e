"""Scopes: named command contexts the environment can push and pop."""
from __future__ import annotations

from dataclasses import dataclass

from mercator.engine.command import CommandNode


@dataclass(frozen=True, slots=True)
class ScopeMeta:
    prefix: str
    description: str


class Scope:
    """A prefix, a description, and the command tree installed under them.

    Subclasses add their commands in ``__init__`` (or the factory that builds
    them); once pushed onto an environment the tree is not reshaped.
    """

    def __init__(self, prefix: str, description: str):
        if not prefix or not prefix.strip():
            raise ValueError("Scope prefix must not be empty")

        self.prefix = prefix
        self.description = description
        self.command = CommandNode(name=prefix, short=description)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.prefix!r})"

    def meta(self) -> ScopeMeta:
        return ScopeMeta(self.prefix, self.description)

    def rootCommand(self) -> CommandNode:
        return self.command

    def addCommand(self, *commands: CommandNode) -> None:
        self.command.add(*commands)
