import logging
import sys
from typing import Optional, Union

from .models.config import LogLevel

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
FALLBACK_HANDLER_NAME = "lightnet-fallback"

_LEVELS = {
    LogLevel.INFO: logging.INFO,
    LogLevel.DEBUG: logging.DEBUG,
}


def level_for(log_level: LogLevel) -> int:
    """Map a network LogLevel onto a stdlib logging level (OFF disables everything)."""
    return _LEVELS.get(log_level, logging.CRITICAL + 1)


def add_console_handler(
    logger: logging.Logger,
    level: int,
    format_string: Optional[str] = None,
) -> logging.Handler:
    """Attach a stdout handler to a logger and return it."""
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(format_string or DEFAULT_FORMAT))
    logger.addHandler(console_handler)
    return console_handler


def add_fallback_handler(logger: logging.Logger) -> logging.Handler:
    """
    Attach the stdout handler used when the application configured no logging.

    setup_logging() replaces it, so dumps are never printed twice.
    """
    console_handler = add_console_handler(logger, logging.INFO)
    console_handler.set_name(FALLBACK_HANDLER_NAME)
    return console_handler


def setup_logging(
    level: Union[str, LogLevel] = "INFO",
    log_file: Optional[str] = None,
    format_string: Optional[str] = None,
    force: bool = False,
) -> logging.Logger:
    """
    Set up logging configuration for lightnet.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
               or a network LogLevel
        log_file: Optional file path for logging output
        format_string: Optional custom format string for log messages
        force: If True, reconfigure even if handlers exist

    Returns:
        Configured logger instance
    """
    if format_string is None:
        format_string = DEFAULT_FORMAT

    if isinstance(level, LogLevel):
        numeric_level = level_for(level)
    else:
        numeric_level = getattr(logging, level.upper(), logging.INFO)
    logger = logging.getLogger("lightnet")
    logger.setLevel(numeric_level)

    for handler in [h for h in logger.handlers if h.get_name() == FALLBACK_HANDLER_NAME]:
        logger.removeHandler(handler)

    # Only clear and reconfigure if forced or no handlers exist
    if force or not logger.handlers:
        logger.handlers.clear()

        add_console_handler(logger, numeric_level, format_string)

        if log_file:
            file_handler = logging.FileHandler(log_file)
            file_handler.setLevel(numeric_level)
            file_handler.setFormatter(logging.Formatter(format_string))
            logger.addHandler(file_handler)

    # Prevent propagation to root logger to avoid duplicate logs
    logger.propagate = False

    return logger
