"""Logging setup for the longpath CLI.

Library modules only create loggers with ``logging.getLogger(__name__)``;
the CLI decides the level and routes records to the shared stderr
console.
"""

import logging

from rich.logging import RichHandler

from longpath.utils.formatting import err_console


def configure_logging(*, verbose: bool = False, quiet: bool = False) -> None:
    """Configure the ``longpath`` logger for a CLI run.

    Args:
        verbose: Log at DEBUG level.
        quiet: Log only errors. Ignored when verbose is set.
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING

    logger = logging.getLogger("longpath")
    logger.setLevel(level)
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=err_console,
        show_time=verbose,
        show_path=False,
        markup=False,
    )
    handler.setLevel(level)
    logger.addHandler(handler)
