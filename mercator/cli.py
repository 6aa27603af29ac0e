#!/usr/bin/env python3
"""The interactive shell: logging, banner, and the prompt loop."""

import logging
import os
import pathlib
from collections.abc import Mapping

import pandas as pd
from loguru import logger
from prompt_toolkit import PromptSession
from prompt_toolkit.auto_suggest import AutoSuggestFromHistory
from prompt_toolkit.history import FileHistory

import mercator.scopes
from mercator import render
from mercator.completer import ScopeCompleter
from mercator.config import loadConfig
from mercator.engine.environment import Environment
from mercator.engine.errors import ExitRequested
from mercator.scopes.root import RootScope


class MercatorApp:
    def __init__(self, config: Mapping[str, str] | None = None):
        self.config: dict[str, str] = dict(loadConfig() if config is None else config)
        self.env = Environment(RootScope(mercator.scopes.SCOPES), self.config)
        self._console_handler_id: int | None = None

    def setupLogging(self) -> None:
        now = pd.Timestamp("now")
        LOGDIR = (
            pathlib.Path(self.config.get("MERCATOR_LOGDIR") or "runlogs")
            / f"{now.year}"
            / f"{now.month:02}"
        )
        LOGDIR.mkdir(exist_ok=True, parents=True)
        LOG_FILE_TEMPLATE = str(LOGDIR / f"mercator-{now.isoformat()}".replace(" ", "_"))

        # requests/urllib3/python-binance use stdlib logging; keep it out of the console
        logging.basicConfig(
            level=logging.INFO,
            filename=LOG_FILE_TEMPLATE + "-http.log",
            format="%(asctime)s %(message)s",
        )

        logger.remove()
        self._console_handler_id = logger.add(
            lambda x: print(x, end=""),
            colorize=True,
            level=self.config.get("MERCATOR_LOGLEVEL") or "INFO",
        )

        # user input is logged at TRACE so it lands in the files but not on the console
        logger.add(sink=LOG_FILE_TEMPLATE + "-mercator.log", level="TRACE", colorize=False)
        logger.add(
            sink=LOG_FILE_TEMPLATE + "-mercator-color.log",
            level="TRACE",
            colorize=True,
        )

        logger.info("Logging session with prefix: {}", LOG_FILE_TEMPLATE)

    def historyPath(self) -> str:
        return os.path.expanduser(self.config.get("MERCATOR_HISTORY") or "~/.mercator_history")

    def dorepl(self) -> None:
        session: PromptSession = PromptSession(
            history=FileHistory(self.historyPath()),
            auto_suggest=AutoSuggestFromHistory(),
            completer=ScopeCompleter(self.env),
        )

        while True:
            try:
                text = session.prompt(
                    self.env.promptPrefix,
                    complete_while_typing=True,
                    reserve_space_for_menu=6,
                )

                # log user input to our active logfile(s)
                logger.trace("{}{}", self.env.promptPrefix(), text)

                # ExitRequested from 'quit' or 'exit' at the root leaves the loop
                self.env.execute(text)
            except KeyboardInterrupt:
                # Control-C pressed at the prompt or during a command. Try again.
                continue
            except EOFError:
                # Control-D pressed
                logger.info("Exiting...")
                raise ExitRequested(0)

    def run(self) -> None:
        self.setupLogging()
        render.banner(self.config.get("MERCATOR_TITLE") or "mercator")
        self.dorepl()


def main() -> None:
    app = MercatorApp()
    try:
        app.run()
    except ExitRequested:
        logger.info("Goodbye!")
        raise


if __name__ == "__main__":
    main()
