# binbreak/log.py
# The UI owns the terminal, so log records go to a file or nowhere.

import logging
from typing import Optional, TextIO

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "binbreak"


def setup_logging(log_file: Optional[str], level: int = logging.DEBUG) -> Optional[TextIO]:
    """Route the package logger to `log_file`. Returns the open stream, if any."""
    logger = logging.getLogger(LOGGER_NAME)
    for h in list(logger.handlers):
        logger.removeHandler(h)
    logger.propagate = False

    if not log_file:
        logger.addHandler(logging.NullHandler())
        return None

    stream = open(log_file, "a", encoding="utf-8")
    console = Console(file=stream, highlight=False, soft_wrap=True, width=120, color_system=None)
    handler = RichHandler(console=console, show_path=False, rich_tracebacks=True, markup=False)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(level)
    return stream
