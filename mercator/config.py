"""Configuration: defaults, then a local dotenv file, then the process environment."""
from __future__ import annotations

import os
from typing import Final

from dotenv import dotenv_values

CONFIG_FILE: Final = ".env.mercator"

DEFAULTS: Final[dict[str, str]] = dict(
    MERCATOR_TITLE="mercator",
    MERCATOR_LOGDIR="runlogs",
    MERCATOR_LOGLEVEL="INFO",
    MERCATOR_HISTORY="~/.mercator_history",
    # shopify revenue projection inputs
    SHOPIFY_CPM="6.2",
    SHOPIFY_CTR="0.0259",
    SHOPIFY_CONV="0.03",
)


def loadConfig(path: str | os.PathLike = CONFIG_FILE) -> dict[str, str]:
    """Merge configuration sources; later sources win.

    Keys present in the dotenv file without a value (``KEY`` alone on a line)
    are skipped so they don't blank out a default.
    """
    fromFile = {k: v for k, v in dotenv_values(path).items() if v is not None}
    return {**DEFAULTS, **fromFile, **os.environ}


def configFloat(config: dict[str, str], key: str) -> float:
    try:
        return float(config.get(key) or DEFAULTS[key])
    except ValueError:
        raise ValueError(f"{key} must be a number, got: {config.get(key)!r}")
