"""
Structured logging for the Bitcoin.de client.

Installs a JSON (or plain text) formatter on a rotating log file, a separate
error log and optionally the console.
"""

import json
import logging
import logging.handlers
import sys
import traceback
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional


# Attributes every LogRecord carries; anything else came in through extra=
_RESERVED_ATTRS = frozenset([
    'name', 'msg', 'args', 'levelname', 'levelno', 'pathname', 'filename', 'module',
    'lineno', 'funcName', 'created', 'msecs', 'relativeCreated', 'thread', 'threadName',
    'processName', 'process', 'getMessage', 'exc_info', 'exc_text', 'stack_info',
    'taskName', 'message', 'asctime',
])

VALID_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


class StructuredFormatter(logging.Formatter):
    """Custom formatter for structured logging with JSON output."""

    def __init__(self, include_extra: bool = True):
        super().__init__()
        self.include_extra = include_extra

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as structured JSON."""
        log_data = {
            'timestamp': datetime.fromtimestamp(record.created).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno
        }

        if record.exc_info:
            log_data['exception'] = {
                'type': record.exc_info[0].__name__ if record.exc_info[0] else None,
                'message': str(record.exc_info[1]) if record.exc_info[1] else None,
                'traceback': traceback.format_exception(*record.exc_info)
            }

        if self.include_extra:
            extra_fields = {
                k: v for k, v in record.__dict__.items()
                if k not in _RESERVED_ATTRS and not k.startswith('_')
            }
            if extra_fields:
                log_data['extra'] = extra_fields

        return json.dumps(log_data, ensure_ascii=False, default=str)


class LoggerManager:
    """
    Centralized logging manager with file rotation.

    Configures the root logger once; modules keep using
    logging.getLogger(__name__).
    """

    def __init__(self,
                 log_dir: str = "logs",
                 log_level: str = "INFO",
                 max_file_size: int = 5 * 1024 * 1024,  # 5MB
                 backup_count: int = 10,
                 console_output: bool = True,
                 structured_format: bool = True,
                 log_file_name: str = "bitcoin_de_client.log"):
        """
        Initialize logging manager.

        Args:
            log_dir: Directory for log files
            log_level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            max_file_size: Maximum size per log file in bytes
            backup_count: Number of rotated files to keep
            console_output: Whether to output logs to stderr
            structured_format: Whether to use structured JSON format
            log_file_name: Name of the main log file
        """
        if log_level.upper() not in VALID_LEVELS:
            raise ValueError(f"Invalid log level: {log_level}")

        self.log_dir = Path(log_dir)
        self.log_level = getattr(logging, log_level.upper())
        self.max_file_size = max_file_size
        self.backup_count = backup_count
        self.console_output = console_output
        self.structured_format = structured_format
        self.log_file_name = log_file_name

        self.log_dir.mkdir(parents=True, exist_ok=True)
        self._handlers = []
        self._setup_logging()

        self.logger = logging.getLogger(__name__)
        self.logger.debug("LoggerManager initialized", extra={
            'log_dir': str(self.log_dir),
            'log_level': log_level,
        })

    def _setup_logging(self) -> None:
        """Setup logging configuration with handlers and formatters."""
        root_logger = logging.getLogger()
        root_logger.setLevel(self.log_level)

        if self.structured_format:
            formatter = StructuredFormatter()
        else:
            formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')

        file_handler = logging.handlers.RotatingFileHandler(
            filename=self.log_dir / self.log_file_name,
            maxBytes=self.max_file_size,
            backupCount=self.backup_count,
            encoding='utf-8'
        )
        file_handler.setLevel(self.log_level)
        file_handler.setFormatter(formatter)
        self._add_handler(root_logger, file_handler)

        error_handler = logging.handlers.RotatingFileHandler(
            filename=self.log_dir / "errors.log",
            maxBytes=self.max_file_size,
            backupCount=self.backup_count,
            encoding='utf-8'
        )
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(formatter)
        self._add_handler(root_logger, error_handler)

        # stderr keeps stdout free for command output
        if self.console_output:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setLevel(self.log_level)
            console_handler.setFormatter(formatter)
            self._add_handler(root_logger, console_handler)

    def _add_handler(self, root_logger: logging.Logger, handler: logging.Handler) -> None:
        root_logger.addHandler(handler)
        self._handlers.append(handler)

    def get_logger(self, name: str) -> logging.Logger:
        return logging.getLogger(name)

    def log_api_call(self, method_name: str, status: str, details: Optional[Dict[str, Any]] = None) -> None:
        """
        Log the outcome of an API call.

        Args:
            method_name: API method name, e.g. 'showRates'
            status: 'ok' or an error kind
            details: Additional context (never credentials)
        """
        level = logging.INFO if status == 'ok' else logging.WARNING
        self.logger.log(level, f"API call {method_name}: {status}", extra={
            'event_type': 'api_call',
            'method_name': method_name,
            'status': status,
            'details': details or {},
        })

    def log_error_with_context(self, error: Exception, context: Dict[str, Any]) -> None:
        """
        Log errors with full context and stack trace.

        Args:
            error: Exception instance
            context: Additional context information
        """
        self.logger.error(f"Error occurred: {str(error)}", extra={
            'error_type': type(error).__name__,
            'error_message': str(error),
            'context': context,
        }, exc_info=error)

    def shutdown(self) -> None:
        """Detach and close the handlers installed by this manager."""
        root_logger = logging.getLogger()
        for handler in self._handlers:
            root_logger.removeHandler(handler)
            handler.close()
        self._handlers = []


_logger_manager: Optional[LoggerManager] = None


def initialize_logging(log_dir: str = "logs",
                       log_level: str = "INFO",
                       **kwargs) -> LoggerManager:
    """
    Initialize global logging system.

    Args:
        log_dir: Directory for log files
        log_level: Minimum log level
        **kwargs: Additional LoggerManager arguments

    Returns:
        LoggerManager instance
    """
    global _logger_manager
    if _logger_manager is not None:
        _logger_manager.shutdown()
    _logger_manager = LoggerManager(log_dir=log_dir, log_level=log_level, **kwargs)
    return _logger_manager


def get_logger_manager() -> Optional[LoggerManager]:
    return _logger_manager


def get_logger(name: str) -> logging.Logger:
    """Get a logger; works whether or not initialize_logging() ran."""
    return logging.getLogger(name)
