"""Structured logging for the Bitcoin.de client."""

from .logger import (
    LoggerManager,
    StructuredFormatter,
    initialize_logging,
    get_logger,
    get_logger_manager,
)

__all__ = [
    'LoggerManager',
    'StructuredFormatter',
    'initialize_logging',
    'get_logger',
    'get_logger_manager',
]
