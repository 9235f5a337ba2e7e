"""Structured logging utilities for the spreadsheet reader.

This module provides:
- Document/sheet tracking using contextvars so every record emitted while a
  workbook is being resolved carries the file it belongs to
- Structured logging with consistent format and metadata
- Performance metrics logging helpers

Usage:
    from xlsx_cell_reader.utils.logging import (
        get_logger,
        LogContext,
        timed_operation,
    )

    logger = get_logger(__name__)

    with LogContext(document="book.xlsx", sheet="Sheet1"):
        logger.info("Decoding worksheet")

    with timed_operation(logger, "load_worksheet") as metrics:
        metrics.cells_decoded = 42
"""

import logging
from collections.abc import Generator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

# Context variables for document tracking
_document_var: ContextVar[str | None] = ContextVar("document", default=None)
_sheet_var: ContextVar[str | None] = ContextVar("sheet", default=None)
_extra_context_var: ContextVar[dict[str, Any] | None] = ContextVar(
    "extra_context", default=None
)


def get_document() -> str | None:
    """Get the document currently being processed.

    Returns:
        The document path or None if not set.
    """
    return _document_var.get()


def set_document(document: str | None) -> None:
    """Set the document in context.

    Args:
        document: The document path to set, or None to clear.
    """
    _document_var.set(document)


def get_sheet() -> str | None:
    """Get the worksheet currently being decoded."""
    return _sheet_var.get()


def set_sheet(sheet: str | None) -> None:
    """Set the worksheet in context."""
    _sheet_var.set(sheet)


def get_extra_context() -> dict[str, Any]:
    """Get additional context from context vars.

    Returns:
        Dictionary of extra context values.
    """
    ctx = _extra_context_var.get()
    return ctx if ctx is not None else {}


def set_extra_context(context: dict[str, Any]) -> None:
    """Set additional context in context vars."""
    _extra_context_var.set(context)


def clear_context() -> None:
    """Clear all context variables."""
    _document_var.set(None)
    _sheet_var.set(None)
    _extra_context_var.set(None)


@dataclass
class PerformanceMetrics:
    """Container for performance metrics during processing.

    Attributes:
        operation: Name of the operation being measured.
        start_time: When the operation started.
        end_time: When the operation ended.
        duration_seconds: Duration in seconds.
        parts_read: Number of archive parts read.
        relationships_resolved: Number of relationships in the table.
        strings_loaded: Number of shared strings loaded.
        cells_decoded: Number of cells emitted.
        custom_metrics: Additional custom metrics.
    """

    operation: str
    start_time: datetime = field(default_factory=lambda: datetime.now(UTC))
    end_time: datetime | None = None
    duration_seconds: float = 0.0
    parts_read: int = 0
    relationships_resolved: int = 0
    strings_loaded: int = 0
    cells_decoded: int = 0
    custom_metrics: dict[str, Any] = field(default_factory=dict)

    def finish(self) -> None:
        """Mark the operation as complete and calculate duration."""
        self.end_time = datetime.now(UTC)
        self.duration_seconds = (self.end_time - self.start_time).total_seconds()

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging.

        Zero-valued counters are omitted.
        """
        result: dict[str, Any] = {
            "operation": self.operation,
            "duration_seconds": self.duration_seconds,
        }
        if self.parts_read > 0:
            result["parts_read"] = self.parts_read
        if self.relationships_resolved > 0:
            result["relationships_resolved"] = self.relationships_resolved
        if self.strings_loaded > 0:
            result["strings_loaded"] = self.strings_loaded
        if self.cells_decoded > 0:
            result["cells_decoded"] = self.cells_decoded
        if self.custom_metrics:
            result["custom_metrics"] = self.custom_metrics
        return result


class StructuredLogFormatter(logging.Formatter):
    """Log formatter that prefixes records with the active document context."""

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record with context information.

        Args:
            record: The log record to format.

        Returns:
            Formatted log message string.
        """
        prefix_parts = []
        document = get_document()
        if document:
            prefix_parts.append(f"document={document}")
        sheet = get_sheet()
        if sheet:
            prefix_parts.append(f"sheet={sheet}")
        for key, value in get_extra_context().items():
            prefix_parts.append(f"{key}={value}")

        prefix = f"[{' '.join(prefix_parts)}] " if prefix_parts else ""

        original_msg = record.msg
        record.msg = f"{prefix}{original_msg}"
        result = super().format(record)
        record.msg = original_msg

        return result


class StructuredLogger:
    """Enhanced logger with structured logging capabilities.

    Wraps a standard Python logger so call sites can pass key-value data,
    which is rendered as ``message | key=value, ...``.
    """

    def __init__(self, name: str) -> None:
        """Initialize the structured logger.

        Args:
            name: Logger name (typically __name__ of the module).
        """
        self._logger = logging.getLogger(name)
        self._name = name

    @property
    def logger(self) -> logging.Logger:
        """Access the underlying Python logger."""
        return self._logger

    def _build_message(
        self,
        message: str,
        **kwargs: Any,
    ) -> str:
        if not kwargs:
            return message

        parts = [f"{k}={v}" for k, v in kwargs.items()]
        return f"{message} | {', '.join(parts)}"

    def debug(self, message: str, **kwargs: Any) -> None:
        """Log a debug message."""
        self._logger.debug(self._build_message(message, **kwargs))

    def info(self, message: str, **kwargs: Any) -> None:
        """Log an info message."""
        self._logger.info(self._build_message(message, **kwargs))

    def warning(self, message: str, **kwargs: Any) -> None:
        """Log a warning message."""
        self._logger.warning(self._build_message(message, **kwargs))

    def error(self, message: str, exc_info: bool = False, **kwargs: Any) -> None:
        """Log an error message.

        Args:
            message: Log message.
            exc_info: Whether to include exception info.
            **kwargs: Additional structured data.
        """
        self._logger.error(self._build_message(message, **kwargs), exc_info=exc_info)

    def exception(self, message: str, **kwargs: Any) -> None:
        """Log an exception with traceback."""
        self._logger.exception(self._build_message(message, **kwargs))

    def log_performance(self, metrics: PerformanceMetrics) -> None:
        """Log performance metrics.

        Args:
            metrics: Performance metrics to log.
        """
        self.info(
            f"Performance: {metrics.operation}",
            **metrics.to_dict(),
        )


class LogContext:
    """Context manager for adding temporary context to logs.

    Usage:
        with LogContext(document="book.xlsx", phase="load"):
            logger.info("Resolving relationships")
    """

    def __init__(self, **kwargs: Any) -> None:
        """Initialize with context values.

        Args:
            **kwargs: Key-value pairs to add to log context. ``document`` and
                ``sheet`` are stored in their dedicated context variables.
        """
        self._new_context = kwargs
        self._old_context: dict[str, Any] = {}
        self._old_document: str | None = None
        self._old_sheet: str | None = None

    def __enter__(self) -> "LogContext":
        """Enter the context, saving old values and setting new ones."""
        self._old_context = get_extra_context().copy()
        self._old_document = get_document()
        self._old_sheet = get_sheet()

        new_context = dict(self._new_context)
        document = new_context.pop("document", None)
        sheet = new_context.pop("sheet", None)

        if document is not None:
            set_document(document)
        if sheet is not None:
            set_sheet(sheet)

        merged = self._old_context.copy()
        merged.update(new_context)
        set_extra_context(merged)

        return self

    def __exit__(self, *args: Any) -> None:
        """Exit the context, restoring old values."""
        set_extra_context(self._old_context)
        set_document(self._old_document)
        set_sheet(self._old_sheet)


@contextmanager
def timed_operation(
    logger: StructuredLogger,
    operation: str,
) -> Generator[PerformanceMetrics, None, None]:
    """Context manager for timing operations.

    Usage:
        with timed_operation(logger, "load") as metrics:
            metrics.parts_read = 3

        # Automatically logs: "Performance: load | duration_seconds=..."

    Args:
        logger: Logger to use for output.
        operation: Name of the operation.

    Yields:
        PerformanceMetrics instance for tracking.
    """
    metrics = PerformanceMetrics(operation=operation)
    try:
        yield metrics
    finally:
        metrics.finish()
        logger.log_performance(metrics)


def configure_logging(
    level: int | str | None = None,
    format_string: str | None = None,
    use_structured_formatter: bool = True,
) -> None:
    """Configure logging for an application embedding the reader.

    Args:
        level: Log level (int or string like "INFO"). Defaults to the
            configured ``log_level``, or DEBUG when ``debug`` is enabled.
        format_string: Custom format string (uses default if None).
        use_structured_formatter: Whether to use the structured formatter.
    """
    if level is None:
        from xlsx_cell_reader.config import settings

        level = logging.DEBUG if settings.debug else settings.log_level_int

    if isinstance(level, str):
        level = getattr(logging, level.upper())

    if format_string is None:
        format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setLevel(level)

    formatter: logging.Formatter
    if use_structured_formatter:
        formatter = StructuredLogFormatter(format_string)
    else:
        formatter = logging.Formatter(format_string)

    handler.setFormatter(formatter)
    root_logger.addHandler(handler)


def get_logger(name: str) -> StructuredLogger:
    """Get a structured logger for a module.

    Args:
        name: Logger name (typically __name__).

    Returns:
        StructuredLogger instance.

    Example:
        logger = get_logger(__name__)
        logger.debug("Read part", part="xl/workbook.xml", size=1024)
    """
    return StructuredLogger(name)
