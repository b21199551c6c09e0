"""Logging configuration for the command line."""

import logging

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(verbose: bool = False, console: Console | None = None) -> None:
    """Route ``epubmaker`` loggers through rich.

    DEBUG when verbose, otherwise only warnings and errors.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    handler = RichHandler(
        console=console,
        show_path=False,
        show_time=verbose,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))

    logger = logging.getLogger("epubmaker")
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    # Pillow's plugin chatter is noise even in verbose mode
    logging.getLogger("PIL").setLevel(logging.WARNING)
