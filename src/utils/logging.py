"""
Logging configuration utilities for the PUTNOTIF adapter.

Standard output carries the notification protocol, so every handler set up
here writes to standard error.
"""

import logging
import sys
from typing import Optional, TextIO


def setup_logger(
    name: str,
    level: int = logging.INFO,
    format_string: Optional[str] = None,
    include_timestamp: bool = True,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """
    Set up a logger with consistent formatting.

    Args:
        name: Logger name
        level: Logging level
        format_string: Custom format string
        include_timestamp: Whether to include timestamp in logs
        stream: Output stream, stderr when omitted

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Avoid adding multiple handlers
    if logger.handlers:
        return logger

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(level)

    if format_string is None:
        if include_timestamp:
            format_string = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        else:
            format_string = '%(name)s - %(levelname)s - %(message)s'

    formatter = logging.Formatter(format_string)
    handler.setFormatter(formatter)

    logger.addHandler(handler)

    return logger


def set_global_log_level(level: int) -> None:
    """
    Set the logging level for the adapter's loggers.

    Args:
        level: Logging level (e.g., logging.DEBUG, logging.WARNING)
    """
    for logger_name in ['src.putnotif', 'src.tui']:
        logger = logging.getLogger(logger_name)
        logger.setLevel(level)
        for handler in logger.handlers:
            handler.setLevel(level)


def configure_logging(debug: bool) -> logging.Logger:
    """
    Configure the adapter's logging for a run.

    Debug runs log at DEBUG with source line numbers; otherwise only warnings
    and errors are reported, so stderr stays free for DISCARD diagnostics.
    """
    if debug:
        logger = setup_logger(
            'src.putnotif',
            level=logging.DEBUG,
            format_string='%(asctime)s - %(name)s:%(lineno)d - %(levelname)s - %(message)s',
        )
        set_global_log_level(logging.DEBUG)
    else:
        logger = setup_logger('src.putnotif', level=logging.WARNING)
        set_global_log_level(logging.WARNING)
    return logger
