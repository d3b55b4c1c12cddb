"""Logging setup for **ScopeCrawler**.

Every component logs to a child of the ``ScopeCrawler`` logger::

    from scope_crawler.logger import get_logger
    log = get_logger("fetcher")        # -> "ScopeCrawler.fetcher"

Importing this module installs no handlers. Until :func:`configure` runs,
records propagate to the root logger like any library's would. The CLI
calls :func:`configure` once, with its ``--log-*`` options.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, Union

DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
ROOT_NAME: Final[str] = "ScopeCrawler"

_LevelT = Union[int, str]


class _StdoutHandler(logging.StreamHandler):
    """Writes to the current ``sys.stdout``, even if it was swapped after setup."""

    def __init__(self) -> None:
        super().__init__(sys.stdout)

    @property
    def stream(self):
        return sys.stdout

    @stream.setter
    def stream(self, value) -> None:
        pass


def get_logger(component: str | None = None) -> logging.Logger:
    """Return the project logger or its ``ScopeCrawler.<component>`` child."""
    return logging.getLogger(f"{ROOT_NAME}.{component}" if component else ROOT_NAME)


def configure(
    *,
    level: _LevelT = "INFO",
    log_file: str | Path | None = None,
    log_format: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """Send project logs to stdout (and *log_file*, rotated at 5 MiB) at *level*.

    Calling it again replaces the handlers installed by the previous call.
    """
    lg = get_logger()
    lg.setLevel(level)
    for handler in list(lg.handlers):
        lg.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(log_format)
    handlers: list[logging.Handler] = [_StdoutHandler()]
    if log_file is not None:
        handlers.append(
            RotatingFileHandler(str(log_file), maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8")
        )
    for handler in handlers:
        handler.setFormatter(formatter)
        lg.addHandler(handler)

    lg.propagate = False
    return lg


__all__ = ["get_logger", "configure", "DEFAULT_FORMAT", "ROOT_NAME"]
