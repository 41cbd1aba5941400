"""Logging configuration for blogpage.

All modules log through the single ``blogpage`` logger. In verbose mode the
emitting module is shown, so resolver decisions (``resolver: Article ...``)
can be told apart from sitemap loading and config reading.
"""

import logging
import sys
from typing import Optional, Union

DEFAULT_FORMAT = "[ %(levelname)-8s ] %(message)s"
VERBOSE_FORMAT = "[ %(levelname)-8s ] %(module)s: %(message)s"


def setup_logger(
    name: str = "blogpage",
    level: Union[int, str] = "INFO",
    format_string: Optional[str] = None,
    verbose: bool = False,
) -> logging.Logger:
    """Set up and configure logger.

    Args:
        name: Logger name
        level: Logging level, ignored when verbose
        format_string: Custom format string
        verbose: Log at DEBUG level and prefix messages with their module

    Returns:
        Configured logger instance
    """
    if verbose:
        level = logging.DEBUG
    if format_string is None:
        format_string = VERBOSE_FORMAT if verbose else DEFAULT_FORMAT

    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Re-running setup (e.g. from the CLI) must not stack handlers
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(format_string))
    logger.addHandler(console_handler)

    logger.propagate = False

    return logger


# Global logger instance
logger = setup_logger()
