"""
Diagnostic messages

Leveled message channel used by every pipeline stage. Any object with
debug/info/warning methods taking a string works as a sink; a configured
`logging.Logger` is the default.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Protocol, Tuple

from colorama import Fore, Style

from configs.ct_paths import LOGGER_NAME


class MessageSink(Protocol):
    def debug(self, msg: str) -> None: ...
    def info(self, msg: str) -> None: ...
    def warning(self, msg: str) -> None: ...


LEVEL_COLORS = {
    logging.DEBUG: Style.DIM,
    logging.INFO: Fore.CYAN,
    logging.WARNING: Fore.YELLOW,
    logging.ERROR: Fore.RED,
    logging.CRITICAL: Fore.MAGENTA + Style.BRIGHT,
}


class ColorFormatter(logging.Formatter):
    """`[LEVEL] message` with the level tag colored"""

    def __init__(self, use_color: bool = True):
        super().__init__("[%(levelname)s] %(message)s")
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        if not self.use_color:
            return text
        color = LEVEL_COLORS.get(record.levelno, "")
        return f"{color}{text}{Style.RESET_ALL}"


def setup_logger(level: str = "INFO", use_color: Optional[bool] = None) -> logging.Logger:
    logger = logging.getLogger(LOGGER_NAME)
    if not logger.handlers:
        h = logging.StreamHandler()
        if use_color is None:
            use_color = h.stream.isatty()
        h.setFormatter(ColorFormatter(use_color=use_color))
        logger.addHandler(h)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    return logger


def get_messages() -> logging.Logger:
    """Default sink; handlers are attached by setup_logger()"""
    return logging.getLogger(LOGGER_NAME)


class RecordingSink:
    """
    Sink that keeps every message in memory

    Used by tests and by the --inspect workflow to collect warnings.
    """

    def __init__(self):
        self.records: List[Tuple[str, str]] = []

    def debug(self, msg: str) -> None:
        self.records.append(("debug", msg))

    def info(self, msg: str) -> None:
        self.records.append(("info", msg))

    def warning(self, msg: str) -> None:
        self.records.append(("warning", msg))

    def messages(self, level: Optional[str] = None) -> List[str]:
        return [m for lvl, m in self.records if level is None or lvl == level]

    def __len__(self):
        return len(self.records)
