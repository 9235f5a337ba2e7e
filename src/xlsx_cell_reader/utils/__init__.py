"""Utilities package for the spreadsheet reader.

This package provides:
- Centralized exception classes (exceptions.py)
- Structured logging utilities (logging.py)
"""

from xlsx_cell_reader.utils.exceptions import (
    ArchiveError,
    ArchiveFormatError,
    ArchiveNotFoundError,
    ArchiveReadError,
    EncodingError,
    ErrorCode,
    FloatParseError,
    IntegerParseError,
    LookupFailedError,
    PartNotFoundError,
    PartTooLargeError,
    RelationshipNotFoundError,
    SharedStringIndexError,
    SheetNotFoundError,
    ValueParseError,
    XlsxReaderError,
    XmlReadError,
)
from xlsx_cell_reader.utils.logging import (
    LogContext,
    StructuredLogger,
    configure_logging,
    get_logger,
    timed_operation,
)

__all__ = [
    # Exceptions
    "ArchiveError",
    "ArchiveFormatError",
    "ArchiveNotFoundError",
    "ArchiveReadError",
    "EncodingError",
    "ErrorCode",
    "FloatParseError",
    "IntegerParseError",
    "LookupFailedError",
    "PartNotFoundError",
    "PartTooLargeError",
    "RelationshipNotFoundError",
    "SharedStringIndexError",
    "SheetNotFoundError",
    "ValueParseError",
    "XlsxReaderError",
    "XmlReadError",
    # Logging
    "LogContext",
    "StructuredLogger",
    "configure_logging",
    "get_logger",
    "timed_operation",
]
