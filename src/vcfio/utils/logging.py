"""
Logging utilities for vcfio.

Everything under the `vcfio` logger goes to a rich console handler on stderr,
and optionally to a plain-text log file as well.
"""

import logging
import time
from contextlib import contextmanager
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

__all__ = [
    "setup_logging",
    "timed",
]

PACKAGE_LOGGER = "vcfio"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Diagnostics go to stderr so that stdout stays usable for data
_console = Console(stderr=True)


def setup_logging(verbose: bool = False, log_file: Path | str | None = None) -> logging.Logger:
    """
    Configure the `vcfio` package logger.

    Calling it again replaces the handlers of the previous call, closing any
    log file they held.

    Args:
        verbose: If True, set log level to DEBUG. Otherwise INFO.
        log_file: Optional path to also write logs to.

    Raises:
        OSError: If the log file cannot be opened.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    logger.addHandler(
        RichHandler(
            console=_console,
            rich_tracebacks=True,
            markup=False,
            show_path=verbose,
        )
    )

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        logger.addHandler(file_handler)

    return logger


@contextmanager
def timed(operation: str, logger: logging.Logger):
    """
    Log how long the enclosed block takes, at DEBUG.

    Example:
        with timed("Reading header", logger):
            reader = VcfReader(stream)
    """
    start = time.perf_counter()
    logger.debug("%s...", operation)
    try:
        yield
    finally:
        logger.debug("%s took %.3fs", operation, time.perf_counter() - start)
