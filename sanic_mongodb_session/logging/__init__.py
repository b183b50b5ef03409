"""
Logging Package
Structured logging with security features

Provides a drop-in getLogger plus the null sink the session store
uses when logging is disabled.
"""
from sanic_mongodb_session.logging.logger_config import (
    LoggerConfig,
    JSONFormatter,
    SensitiveDataFilter
)
import logging
from typing import Optional

__all__ = [
    'LoggerConfig',
    'JSONFormatter',
    'SensitiveDataFilter',
    'getLogger',
    'null_logger',
    'INFO',
    'DEBUG',
    'WARNING',
    'ERROR',
    'CRITICAL',
]

# Export logging levels for convenience
INFO = logging.INFO
DEBUG = logging.DEBUG
WARNING = logging.WARNING
ERROR = logging.ERROR
CRITICAL = logging.CRITICAL

NULL_LOGGER_NAME = 'sanic_mongodb_session.null'


def getLogger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger instance (drop-in replacement for logging.getLogger)

    Names outside the package namespace are nested under it so that
    LoggerConfig.setup_logger('sanic_mongodb_session') configures them all.

    Args:
        name: Logger name (package root logger if None)

    Returns:
        Logger instance

    Example:
        from sanic_mongodb_session.logging import getLogger
        logger = getLogger(__name__)
        logger.warning("Session not found", extra={'session_id': sid})
    """
    if name is None:
        return logging.getLogger('sanic_mongodb_session')

    if not name.startswith('sanic_mongodb_session'):
        name = f'sanic_mongodb_session.{name}'

    return logging.getLogger(name)


def null_logger() -> logging.Logger:
    """
    Get the logger injected when session logging is disabled

    Detached from the logging hierarchy: it has a NullHandler, does not
    propagate and is disabled, so nothing it receives is emitted.
    """
    logger = logging.Logger(NULL_LOGGER_NAME)
    logger.addHandler(logging.NullHandler())
    logger.propagate = False
    logger.disabled = True
    return logger
