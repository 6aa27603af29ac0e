"""Terminal output helpers: colored label/value lines, tables, and the title banner.

Color markup goes through prompt_toolkit's ``HTML`` so it renders as ANSI on a
terminal and as plain text when stdout is redirected (or captured in tests).
"""
from __future__ import annotations

import html
import sys
from collections.abc import Sequence
from typing import Any

import pandas as pd
from prompt_toolkit import print_formatted_text
from prompt_toolkit.formatted_text import HTML

BANNER: str = r"""
                                                        888
                                                        888
                                                        888
        88888b.d88b.   .d88b.  888d888 .d8888b  8888b.  888888 .d88b.  888d888
        888 "888 "88b d8P  Y8b 888P"  d88P"        "88b 888   d88""88b 888P"
        888  888  888 88888888 888    888      .d888888 888   888  888 888
        888  888  888 Y8b.     888    Y88b.    888  888 Y88b. Y88..88P 888
        888  888  888  "Y8888  888     "Y8888P "Y888888  "Y888 "Y88P"  888
"""


def paint(color: str, text: Any) -> str:
    """Wrap escaped ``text`` in a prompt_toolkit color tag (e.g. ``ansigreen``)."""
    return f"<{color}>{html.escape(str(text))}</{color}>"


def green(text: Any) -> str:
    return paint("ansigreen", text)


def red(text: Any) -> str:
    return paint("ansired", text)


def yellow(text: Any) -> str:
    return paint("ansiyellow", text)


def blue(text: Any) -> str:
    return paint("ansibrightblue", text)


def label(text: Any) -> str:
    return paint("ansibrightgreen", text)


def show(markup: str = "") -> None:
    """Print a line of color markup built from the helpers above."""
    print_formatted_text(HTML(markup), file=sys.stdout)


def info(name: str, value: Any, prefix: str = "") -> None:
    show(f"{prefix}{label(name)}: {html.escape(str(value))}")


def boolean(val: bool) -> str:
    return green("true") if val else red("false")


def table(rows: Sequence[Sequence[Any]], columns: Sequence[str]) -> None:
    if not rows:
        print("(no results)")
        return

    df = pd.DataFrame(list(rows), columns=list(columns))
    print(df.to_string(index=False))


def banner(title: str) -> None:
    if title == "mercator":
        print(BANNER)
    else:
        print(f"\n        {title}\n")

    show(paint("ansigray", "                      a personal CLI for financial things"))
    print()


def timestamp(millis: int) -> str:
    """RFC 3339 UTC time for an exchange epoch-milliseconds value."""
    return pd.Timestamp(millis, unit="ms", tz="UTC").strftime("%Y-%m-%dT%H:%M:%SZ")
