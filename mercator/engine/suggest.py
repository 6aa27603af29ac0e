"""Suggestion generation by walking a command tree, plus fuzzy ranking.

Everything here is pure: it reads the tree and the typed text and builds new
lists, so it can run on every keystroke.
"""
from __future__ import annotations

import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mercator.engine.command import CommandNode
    from mercator.engine.environment import Environment


@dataclass(frozen=True, slots=True)
class Suggestion:
    text: str
    description: str = ""


def matchCommand(name: str, text: str) -> str | None:
    """If ``text`` starts with the command ``name`` as a whole word, return the rest."""
    if text == name:
        return ""

    if text.startswith(name) and text[len(name)].isspace():
        return text[len(name) :].lstrip()

    return None


def collectSuggestions(
    env: Environment, commands: Sequence[CommandNode], text: str
) -> list[Suggestion]:
    """Candidates for ``text`` typed against sibling ``commands``.

    The first command named by ``text`` is descended into; its sub-commands,
    its ``--flags`` and its own suggestion source are offered. When nothing
    matches, the menu of the siblings themselves is returned.
    """
    menu: list[Suggestion] = []
    for cmd in commands:
        rest = matchCommand(cmd.name, text)
        if rest is None:
            menu.append(Suggestion(cmd.name, cmd.short))
            continue

        found = collectSuggestions(env, cmd.children, rest)
        found += [Suggestion(f"--{f.name}", f.usage) for f in cmd.flags]

        if cmd.suggest is not None:
            # typing hasn't settled; quotes may be unbalanced so don't use shlex here
            args = rest.split()
            if cmd.eager or args:
                found += [Suggestion(s) for s in cmd.suggest(env, args)]

        return found

    return menu


def fuzzyFilter(suggestions: Sequence[Suggestion], word: str) -> list[Suggestion]:
    """Keep suggestions containing ``word`` as a case-insensitive subsequence.

    Results are ordered by where the tightest match starts, then by how long
    it is; ties keep their original order. An empty word keeps everything.
    """
    if not word:
        return list(suggestions)

    # lookahead so overlapping candidate matches are all visited
    pattern = re.compile(
        "(?=({}))".format(".*?".join(map(re.escape, word))), re.IGNORECASE
    )

    ranked = []
    for idx, suggestion in enumerate(suggestions):
        matches = list(pattern.finditer(suggestion.text))
        if not matches:
            continue

        best = min(matches, key=lambda m: (len(m.group(1)), m.start()))
        ranked.append((best.start(), len(best.group(1)), idx, suggestion))

    ranked.sort(key=lambda r: r[:3])
    return [r[3] for r in ranked]


def afterFlag(
    flagName: str, source: Callable[[], Sequence[str]], short: str = ""
) -> Callable[..., list[str]]:
    """Suggestion source that stays quiet until ``--flagName VALUE`` has been typed.

    Used for commands whose positional arguments only make sense once the
    gating flag has a value (e.g. ``shares --inv 100 <symbol>``). The one-letter
    ``short`` form (``shares -i 100``) unlocks it too.
    """
    options = [f"--{flagName}"]
    if short:
        options.append(f"-{short}")

    def suggest(env: Environment, args: list[str]) -> list[str]:
        for idx, arg in enumerate(args):
            for option in options:
                if arg == option and idx + 1 < len(args):
                    return list(source())

                if arg.startswith(option + "="):
                    return list(source())

        return []

    return suggest
