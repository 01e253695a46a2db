"""Logging configuration for jsonflatpy flatten operations.

This module provides structured logging for parsing, flattening and rendering,
making debugging and troubleshooting easier for users and developers.
"""

import json
import logging
import sys
import time
from typing import Any, Dict, Optional


class FlattenOperationFilter(logging.Filter):
    """Custom filter for flatten operation logs."""

    def filter(self, record: logging.LogRecord) -> bool:
        """Filter log records for flatten operations."""
        if hasattr(record, 'flatten_operation'):
            return True

        return record.name.startswith('jsonflatpy')


class StructuredFormatter(logging.Formatter):
    """Structured formatter for better log parsing and analysis."""

    json_format = False

    _STANDARD_ATTRS = frozenset([
        'name', 'msg', 'args', 'levelname', 'levelno', 'pathname',
        'filename', 'module', 'lineno', 'funcName', 'created',
        'msecs', 'relativeCreated', 'thread', 'threadName', 'taskName',
        'processName', 'process', 'message', 'exc_info', 'exc_text',
        'stack_info', 'flatten_operation'
    ])

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with structured information."""
        log_data = {
            'timestamp': time.strftime('%Y-%m-%d %H:%M:%S', time.localtime(record.created)),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        custom_attrs = {
            key: value for key, value in record.__dict__.items()
            if key not in self._STANDARD_ATTRS
        }
        if custom_attrs:
            log_data['context'] = custom_attrs

        if self.json_format:
            return json.dumps(log_data, default=str)

        msg = f"{log_data['timestamp']} - {log_data['level']} - {log_data['logger']} - {log_data['message']}"
        if 'context' in log_data:
            context_str = ', '.join(f"{k}={v}" for k, v in log_data['context'].items())
            msg += f" [{context_str}]"
        if 'exception' in log_data:
            msg += f"\n{log_data['exception']}"
        return msg


class FlattenOperationLogger:
    """Logger for flatten operations with context tracking."""

    def __init__(self, name: str):
        """Initialize flatten operation logger.

        Args:
            name: Logger name (typically module name)
        """
        self.logger = logging.getLogger(name)
        self._operation_context: Dict[str, Any] = {}

    def set_operation_context(self, **context: Any) -> None:
        """Set operation context for subsequent log messages."""
        self._operation_context.update(context)

    def clear_operation_context(self) -> None:
        self._operation_context.clear()

    def _log_with_context(self, level: int, message: str, **extra: Any) -> None:
        context = {**self._operation_context, **extra}
        context['flatten_operation'] = True

        self.logger.log(level, message, extra=context)

    def debug(self, message: str, **context: Any) -> None:
        self._log_with_context(logging.DEBUG, message, **context)

    def info(self, message: str, **context: Any) -> None:
        self._log_with_context(logging.INFO, message, **context)

    def warning(self, message: str, **context: Any) -> None:
        self._log_with_context(logging.WARNING, message, **context)

    def error(self, message: str, **context: Any) -> None:
        self._log_with_context(logging.ERROR, message, **context)

    def log_source_parsing(
        self,
        source_name: str,
        success: bool,
        duration: float,
        root_type: Optional[str] = None,
        error: Optional[str] = None
    ) -> None:
        """Log a JSON parse operation.

        Args:
            source_name: Description of the source ('<string>', a file name, ...)
            success: Whether parsing succeeded
            duration: Parse duration in seconds
            root_type: JSON type of the parsed root value
            error: Error message if parsing failed
        """
        context = {
            'operation': 'source_parsing',
            'source': source_name,
            'duration_seconds': round(duration, 3),
            'success': success
        }

        if success:
            context['root_type'] = root_type
            self.debug(f"Parsed JSON source: {source_name}", **context)
        else:
            context['error'] = error
            self.error(f"Failed to parse JSON source: {source_name}", **context)

    def log_flatten_pass(
        self,
        mode: str,
        entries: int,
        max_depth: int,
        duration: float
    ) -> None:
        """Log a completed flatten pass.

        Args:
            mode: Flatten mode name
            entries: Number of entries emitted into the output mapping
            max_depth: Deepest cursor stack size reached during traversal
            duration: Traversal duration in seconds
        """
        self.debug(
            f"Flattened document into {entries} entries",
            operation='flatten_pass',
            mode=mode,
            entries=entries,
            max_depth=max_depth,
            duration_seconds=round(duration, 3)
        )


def configure_logging(
    level: str = "WARNING",
    json_format: bool = False,
    log_file: Optional[str] = None,
    enable_operation_filter: bool = True
) -> None:
    """Configure logging for jsonflatpy.

    Console output goes to stderr so flattened JSON on stdout stays parseable.

    Args:
        level: Log level ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')
        json_format: Whether to use JSON format for logs
        log_file: Optional log file path
        enable_operation_filter: Whether to restrict handlers to jsonflatpy records
    """
    numeric_level = getattr(logging, level.upper(), logging.WARNING)

    formatter = StructuredFormatter()
    formatter.json_format = json_format

    handlers = []

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(numeric_level)
    handlers.append(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        file_handler.setLevel(logging.DEBUG)  # Always debug level for files
        handlers.append(file_handler)

    if enable_operation_filter:
        operation_filter = FlattenOperationFilter()
        for handler in handlers:
            handler.addFilter(operation_filter)

    logging.basicConfig(
        level=numeric_level,
        handlers=handlers,
        force=True  # Override existing configuration
    )

    logging.getLogger('jsonflatpy').setLevel(logging.DEBUG if log_file else numeric_level)


def get_flatten_logger(name: str) -> FlattenOperationLogger:
    """Get a flatten operation logger for the given name.

    Args:
        name: Logger name (typically __name__)

    Returns:
        FlattenOperationLogger instance
    """
    return FlattenOperationLogger(name)


class PerformanceTimer:
    """Context manager for timing operations and logging performance."""

    def __init__(self, logger: FlattenOperationLogger, operation: str, **context: Any):
        """Initialize performance timer.

        Args:
            logger: Logger instance
            operation: Operation name
            **context: Additional context
        """
        self.logger = logger
        self.operation = operation
        self.context = context
        self.start_time = 0.0
        self.duration = 0.0

    def __enter__(self) -> 'PerformanceTimer':
        self.start_time = time.perf_counter()
        self.logger.debug(f"Starting {self.operation}", **self.context)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.duration = time.perf_counter() - self.start_time

        context = {**self.context, 'duration_seconds': round(self.duration, 3)}

        if exc_type is None:
            self.logger.info(f"Completed {self.operation}", **context)
        else:
            context['error'] = str(exc_val) if exc_val else 'Unknown error'
            self.logger.error(f"Failed {self.operation}", **context)
