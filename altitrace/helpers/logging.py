"""Logger factory shared by every SDK module.

Loggers are configured once per name and cached. The level defaults to
``ALTITRACE_LOG_LEVEL`` (``INFO`` when unset), so an application can turn on
request tracing without touching SDK code.
"""

import logging
import sys

import colorlog

from altitrace.helpers.config import get_optional_env


loggers: dict[str, logging.Logger] = {}

LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

LOG_COLORS = {
    "DEBUG": "cyan",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "red,bg_white",
}


def _build_handler(log_handler: str, log_color: bool) -> logging.Handler:
    streams = {"stdout": sys.stdout, "stderr": sys.stderr}
    if log_handler not in streams:
        err_msg = f"Invalid handler: {log_handler}"
        raise ValueError(err_msg)

    if log_color:
        handler = colorlog.StreamHandler(streams[log_handler])
        formatter = colorlog.ColoredFormatter(
            f"%(log_color)s {LOG_FORMAT}", log_colors=LOG_COLORS
        )
        handler.setFormatter(formatter)
    else:
        handler = logging.StreamHandler(streams[log_handler])
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
    return handler


def get_logger(
    name: str,
    log_handler: str = "stdout",
    log_level: str | None = None,
    log_color: bool = False,
) -> logging.Logger:
    """Get logger.

    Args:
        name: The name of the logger.
        log_handler: The log handler type ('stdout' or 'stderr').
        log_level: The logging level ('DEBUG', 'INFO', 'WARNING', 'ERROR',
            'CRITICAL'). Defaults to ALTITRACE_LOG_LEVEL, then 'INFO'.
        log_color: Whether to use colored output.

    Returns:
        logging.Logger: Configured logger instance. Later calls with the same
        name return it unchanged, whatever their arguments.

    Raises:
        ValueError: If invalid handler or log level is provided.
    """
    if name in loggers:
        return loggers[name]

    level_name = log_level or get_optional_env("ALTITRACE_LOG_LEVEL") or "INFO"
    level_name = level_name.upper()
    if level_name not in LOG_LEVELS:
        err_msg = f"Invalid log level: {level_name}"
        raise ValueError(err_msg)

    handler = _build_handler(log_handler, log_color)
    level = LOG_LEVELS[level_name]
    handler.setLevel(level)

    logger = colorlog.getLogger(name) if log_color else logging.getLogger(name)
    logger.setLevel(level)
    logger.addHandler(handler)

    loggers[name] = logger
    return logger


__all__ = [
    "LOG_LEVELS",
    "get_logger",
]
