"""Logging setup for the command-line interface.

Library modules only create module loggers; handlers are attached here, once,
by the CLI. Output goes to stderr through rich so stdout stays clean for
JSON/YAML that callers may pipe elsewhere.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

from postmeta.conf import settings

logger = logging.getLogger("postmeta")


def configure_logging(level: str | int | None = None) -> None:
    """Attach a rich stderr handler to the postmeta logger.

    Calling it again replaces the previous handler instead of stacking a new one.
    """
    logger.setLevel(level if level is not None else settings.LOG_LEVEL.upper())
    logger.propagate = False

    for h in list(logger.handlers):
        try:
            h.close()
        finally:
            logger.removeHandler(h)

    handler = RichHandler(
        console=Console(stderr=True),
        show_time=False,
        show_path=False,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
