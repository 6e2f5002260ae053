"""Logging configuration using Rich handlers."""

import logging

from rich.logging import RichHandler

from pacup.utils.formatting import err_console


def setup_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Configure the root logger with a RichHandler on stderr.

    Args:
        verbose: Log DEBUG records and show module paths.
        quiet: Only log errors.
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING

    handler = RichHandler(
        console=err_console,
        show_time=verbose,
        show_path=verbose,
        rich_tracebacks=True,
        markup=False,
    )
    logging.basicConfig(
        level=level,
        handlers=[handler],
        format="%(message)s",
        force=True,
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.DEBUG if verbose else logging.WARNING)
