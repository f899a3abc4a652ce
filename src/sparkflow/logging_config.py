"""Logging configuration for Sparkflow."""

import sys

from loguru import logger

_DEFAULT_FORMAT = "{level.icon} {message}"
_VERBOSE_FORMAT = "{time:HH:mm:ss} {level.icon} {name}:{function} {message}"


def configure_logging(*, verbose: bool = False) -> None:
    """Send loguru output to stderr, with call sites at DEBUG when verbose.

    stdout stays clean for command output and the MCP stdio transport.
    """
    logger.remove()
    if verbose:
        logger.add(sys.stderr, level="DEBUG", format=_VERBOSE_FORMAT)
    else:
        logger.add(sys.stderr, level="INFO", format=_DEFAULT_FORMAT)
