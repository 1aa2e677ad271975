"""
Diagnostics for the adcirclive CLI.

stdout belongs to command output (mesh tables, generated XDMF and ASGS
config text), so that it can be piped into files. Everything else, request
traces with --verbose and warnings such as an empty XDMF output selection,
goes through the `adcirclive.*` loggers to stderr.

Usage:
    from adcirclive.logging_utils import get_logger

    logger = get_logger(__name__)
    logger.debug("GET %s", url)
"""

import logging
import sys
from typing import Optional

ROOT_LOGGER_NAME = "adcirclive"

# Format for the stderr handler
DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Set once the stderr handler is attached
_handler_installed = False


def configure_logging(
    level: int = logging.WARNING,
    format_str: str = DEFAULT_FORMAT,
    date_format: str = DEFAULT_DATE_FORMAT,
    stream: Optional[object] = None,
) -> None:
    """
    Attach the stderr handler to the `adcirclive` logger.

    The CLI is quiet by default: only warnings and errors reach stderr until
    --verbose lowers the level. Only the first call has an effect, so every
    module can call get_logger() at import time.

    Args:
        level: Starting level for the `adcirclive` logger (default: WARNING)
        format_str: Log record format
        date_format: Timestamp format
        stream: Destination stream (default: sys.stderr)
    """
    global _handler_installed
    if _handler_installed:
        return

    client_logger = logging.getLogger(ROOT_LOGGER_NAME)
    client_logger.setLevel(level)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(format_str, date_format))

    client_logger.addHandler(handler)
    _handler_installed = True


def get_logger(name: str) -> logging.Logger:
    """
    Logger for a client module.

    Module names inside the package (`adcirclive.transport`) are used as-is.
    Anything else is placed under `adcirclive.` so that --verbose reaches it.
    """
    configure_logging()

    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)

    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def set_verbose(verbose: bool) -> None:
    """
    Switch request tracing on or off.

    Args:
        verbose: True for DEBUG (each request's method, URL, nonce and
            status), False for WARNING.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    logging.getLogger(ROOT_LOGGER_NAME).setLevel(level)
