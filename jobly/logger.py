"""
Structured logging for jobly.

Provides centralized logging with console and file outputs, log levels,
and metrics tracking for monitoring statement traffic against the store.
"""

import logging
import sys
from pathlib import Path
from typing import Optional
from datetime import datetime
import json

from .env import get_settings


class StructuredLogger:
    """
    Centralized logger with support for console and file outputs.
    Tracks metrics for the statements issued to the store.
    """

    def __init__(
        self,
        name: str = "jobly",
        level: str = "INFO",
        log_dir: Optional[Path] = None,
        enable_file: bool = True,
        enable_console: bool = True,
    ):
        """
        Initialize the structured logger.

        Args:
            name: Logger name
            level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_dir: Directory for log files (default: logs/)
            enable_file: Write logs to file
            enable_console: Output logs to console
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, level.upper()))
        self.logger.handlers.clear()  # Remove existing handlers

        # Metrics tracking
        self.metrics = {
            "queries_executed": 0,
            "rows_returned": 0,
            "not_found": 0,
            "errors_by_type": {},
            "queries_by_operation": {},
        }

        # Console handler
        if enable_console:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setLevel(getattr(logging, level.upper()))
            console_formatter = logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            console_handler.setFormatter(console_formatter)
            self.logger.addHandler(console_handler)

        # File handler
        if enable_file:
            if log_dir is None:
                log_dir = Path("logs")
            log_dir.mkdir(parents=True, exist_ok=True)

            log_file = log_dir / f"jobly_{datetime.now().strftime('%Y%m%d')}.log"
            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setLevel(logging.DEBUG)  # Always log everything to file
            file_formatter = logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            file_handler.setFormatter(file_formatter)
            self.logger.addHandler(file_handler)

    def debug(self, message: str, **kwargs):
        """Log debug message with optional context."""
        self._log(logging.DEBUG, message, kwargs)

    def info(self, message: str, **kwargs):
        """Log info message with optional context."""
        self._log(logging.INFO, message, kwargs)

    def warning(self, message: str, **kwargs):
        """Log warning message with optional context."""
        self._log(logging.WARNING, message, kwargs)

    def error(self, message: str, **kwargs):
        """Log error message with optional context."""
        self._log(logging.ERROR, message, kwargs)

    def critical(self, message: str, **kwargs):
        """Log critical message with optional context."""
        self._log(logging.CRITICAL, message, kwargs)

    def _log(self, level: int, message: str, context: dict):
        """Internal logging method with context."""
        if context:
            # Decimal equity values and the like are not JSON-native
            message = f"{message} | Context: {json.dumps(context, default=str)}"
        self.logger.log(level, message)

    # Metric tracking methods

    def record_query(self, operation: str, row_count: int):
        """Record a completed statement and the rows it produced."""
        self.metrics["queries_executed"] += 1
        self.metrics["rows_returned"] += row_count
        by_op = self.metrics["queries_by_operation"]
        by_op[operation] = by_op.get(operation, 0) + 1

    def record_not_found(self):
        """Record a lookup or write that matched no row."""
        self.metrics["not_found"] += 1

    def record_error(self, error_type: str):
        """Record a failed statement."""
        if error_type not in self.metrics["errors_by_type"]:
            self.metrics["errors_by_type"][error_type] = 0
        self.metrics["errors_by_type"][error_type] += 1

    def get_metrics(self) -> dict:
        """Return a copy of current metrics."""
        metrics_copy = self.metrics.copy()
        metrics_copy["errors_by_type"] = dict(self.metrics["errors_by_type"])
        metrics_copy["queries_by_operation"] = dict(self.metrics["queries_by_operation"])
        return metrics_copy

    def log_metrics_summary(self):
        """Log a summary of current metrics."""
        metrics = self.get_metrics()

        self.info("=== Store Session Metrics ===")
        self.info(f"Queries: {metrics['queries_executed']}")
        self.info(f"Rows returned: {metrics['rows_returned']}")
        self.info(f"Not found: {metrics['not_found']}")

        if metrics["queries_by_operation"]:
            self.info("Queries by operation:")
            for operation, count in metrics["queries_by_operation"].items():
                self.info(f"  {operation}: {count}")

        if metrics["errors_by_type"]:
            self.info("Error Types:")
            for error_type, count in metrics["errors_by_type"].items():
                self.info(f"  {error_type}: {count}")


# Global logger instance
_global_logger: Optional[StructuredLogger] = None


def get_logger(
    name: str = "jobly",
    level: Optional[str] = None,
    **kwargs
) -> StructuredLogger:
    """
    Get or create the global logger instance.

    Settings from the environment (JOBLY_LOG_LEVEL, JOBLY_LOG_DIR,
    JOBLY_LOG_TO_FILE) fill in whatever is not passed explicitly.

    Args:
        name: Logger name
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        **kwargs: Additional arguments passed to StructuredLogger

    Returns:
        StructuredLogger instance
    """
    global _global_logger

    if _global_logger is None:
        settings = get_settings()
        kwargs.setdefault("log_dir", settings.log_dir)
        kwargs.setdefault("enable_file", settings.log_to_file)
        _global_logger = StructuredLogger(
            name=name, level=level or settings.log_level, **kwargs
        )

    return _global_logger


def reset_logger():
    """Reset the global logger (useful for testing)."""
    global _global_logger
    _global_logger = None
