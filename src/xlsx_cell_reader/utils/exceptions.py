"""Centralized exception classes for the spreadsheet reader.

This module provides a hierarchy of custom exceptions with error codes and
structured error details for consistent error handling throughout the
document-model resolution and cell-decoding pipeline.

Exception Hierarchy:
    XlsxReaderError (base)
    ├── ArchiveError
    │   ├── ArchiveNotFoundError
    │   ├── ArchiveReadError
    │   ├── ArchiveFormatError
    │   │   └── PartNotFoundError
    │   ├── PartTooLargeError
    │   └── EncodingError
    ├── XmlReadError
    ├── LookupFailedError
    │   ├── SheetNotFoundError
    │   ├── RelationshipNotFoundError
    │   └── SharedStringIndexError
    └── ValueParseError
        ├── IntegerParseError
        └── FloatParseError

Error Codes:
    All errors have a unique error code (e.g., "E1001") that can be used
    for programmatic error handling and documentation.
"""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Enumeration of all error codes used by the reader.

    Error codes are grouped by category:
    - E1xxx: Archive/part errors
    - E2xxx: XML tokenizer errors
    - E3xxx: Table lookup errors
    - E4xxx: Cell value parse errors
    - E9xxx: Internal/unexpected errors
    """

    # Archive errors (E1xxx)
    ARCHIVE_NOT_FOUND = "E1001"
    PART_TOO_LARGE = "E1002"
    ARCHIVE_FORMAT_ERROR = "E1003"
    ARCHIVE_READ_ERROR = "E1004"
    PART_NOT_FOUND = "E1005"
    ENCODING_ERROR = "E1006"

    # XML errors (E2xxx)
    XML_READ_ERROR = "E2001"

    # Lookup errors (E3xxx)
    SHEET_NOT_FOUND = "E3001"
    RELATIONSHIP_NOT_FOUND = "E3002"
    SHARED_STRING_INDEX_OUT_OF_RANGE = "E3003"

    # Value errors (E4xxx)
    INTEGER_PARSE_FAILED = "E4001"
    FLOAT_PARSE_FAILED = "E4002"

    # Internal errors (E9xxx)
    INTERNAL_ERROR = "E9001"


class XlsxReaderError(Exception):
    """Base exception for all spreadsheet reader errors.

    All custom exceptions in the package inherit from this class.
    It provides:
    - Unique error codes for programmatic handling
    - Structured error details for logging and debugging

    Attributes:
        message: Human-readable error message.
        error_code: Unique error code from ErrorCode enum.
        details: Optional dictionary with additional error details.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Error code from ErrorCode enum.
            details: Optional additional details about the error.
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert the exception to a dictionary.

        Returns:
            Dictionary with error information.
        """
        result: dict[str, Any] = {
            "error_code": self.error_code.value,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        return result

    def __str__(self) -> str:
        """Return string representation with error code."""
        return f"[{self.error_code.value}] {self.message}"


# =============================================================================
# Archive Errors (E1xxx)
# =============================================================================


class ArchiveError(XlsxReaderError):
    """Base class for archive and part access errors."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.ARCHIVE_READ_ERROR,
        file_path: str | None = None,
        part_name: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with archive location information.

        Args:
            message: Error message.
            error_code: Error code.
            file_path: Path to the archive on disk.
            part_name: Name of the entry inside the archive.
            details: Additional details.
        """
        details = details or {}
        if file_path:
            details["file_path"] = file_path
        if part_name:
            details["part_name"] = part_name
        super().__init__(message, error_code, details)
        self.file_path = file_path
        self.part_name = part_name


class ArchiveNotFoundError(ArchiveError):
    """Raised when the spreadsheet file does not exist."""

    def __init__(
        self,
        file_path: str,
        message: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with file path.

        Args:
            file_path: Path to the file that was not found.
            message: Optional custom message.
            details: Additional details.
        """
        message = message or f"Spreadsheet not found: {file_path}"
        super().__init__(
            message=message,
            error_code=ErrorCode.ARCHIVE_NOT_FOUND,
            file_path=file_path,
            details=details,
        )


class ArchiveReadError(ArchiveError):
    """Raised when reading or seeking the underlying bytes fails."""

    def __init__(
        self,
        message: str,
        file_path: str | None = None,
        part_name: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=ErrorCode.ARCHIVE_READ_ERROR,
            file_path=file_path,
            part_name=part_name,
            details=details,
        )


class ArchiveFormatError(ArchiveError):
    """Raised when the container is not a readable ZIP archive."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.ARCHIVE_FORMAT_ERROR,
        file_path: str | None = None,
        part_name: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            file_path=file_path,
            part_name=part_name,
            details=details,
        )


class PartNotFoundError(ArchiveFormatError):
    """Raised when a named entry is missing from the archive."""

    def __init__(
        self,
        part_name: str,
        file_path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with the missing part name.

        Args:
            part_name: Entry name that was requested.
            file_path: Optional archive path.
            details: Additional details.
        """
        super().__init__(
            message=f"Part not found in archive: {part_name}",
            error_code=ErrorCode.PART_NOT_FOUND,
            file_path=file_path,
            part_name=part_name,
            details=details,
        )


class PartTooLargeError(ArchiveError):
    """Raised when a part exceeds the configured uncompressed size limit."""

    def __init__(
        self,
        part_name: str,
        part_size: int,
        max_size: int,
        file_path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with size information.

        Args:
            part_name: Entry name inside the archive.
            part_size: Uncompressed size in bytes.
            max_size: Maximum allowed size in bytes.
            file_path: Optional archive path.
            details: Additional details.
        """
        details = details or {}
        details["part_size_bytes"] = part_size
        details["max_size_bytes"] = max_size
        message = (
            f"Part {part_name} ({part_size} bytes) exceeds maximum "
            f"allowed size ({max_size} bytes)"
        )
        super().__init__(
            message=message,
            error_code=ErrorCode.PART_TOO_LARGE,
            file_path=file_path,
            part_name=part_name,
            details=details,
        )
        self.part_size = part_size
        self.max_size = max_size


class EncodingError(ArchiveError):
    """Raised when part content cannot be decoded as text."""

    def __init__(
        self,
        message: str,
        encoding: str | None = None,
        part_name: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with encoding information.

        Args:
            message: Error message.
            encoding: The encoding that caused the error.
            part_name: Optional entry name.
            details: Additional details.
        """
        details = details or {}
        if encoding:
            details["encoding"] = encoding
        super().__init__(
            message=message,
            error_code=ErrorCode.ENCODING_ERROR,
            part_name=part_name,
            details=details,
        )
        self.encoding = encoding


# =============================================================================
# XML Errors (E2xxx)
# =============================================================================


class XmlReadError(XlsxReaderError):
    """Raised when the XML tokenizer cannot read a part."""

    def __init__(
        self,
        message: str,
        part_name: str | None = None,
        line: int | None = None,
        column: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with the failing position.

        Args:
            message: Error message from the tokenizer.
            part_name: Entry name being tokenized.
            line: Line number reported by the tokenizer.
            column: Column number reported by the tokenizer.
            details: Additional details.
        """
        details = details or {}
        if part_name:
            details["part_name"] = part_name
        if line is not None:
            details["line"] = line
        if column is not None:
            details["column"] = column
        super().__init__(message, ErrorCode.XML_READ_ERROR, details)
        self.part_name = part_name


# =============================================================================
# Lookup Errors (E3xxx)
# =============================================================================


class LookupFailedError(XlsxReaderError):
    """Base class for failed lookups in the resolved tables."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode,
        key: str | int,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        details["key"] = key
        super().__init__(message, error_code, details)
        self.key = key


class SheetNotFoundError(LookupFailedError):
    """Raised when a worksheet name is not declared by the workbook."""

    def __init__(
        self,
        sheet_name: str,
        available: list[str] | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if available is not None:
            details["available_sheets"] = available
        super().__init__(
            message=f"Sheet '{sheet_name}' not found in workbook",
            error_code=ErrorCode.SHEET_NOT_FOUND,
            key=sheet_name,
            details=details,
        )


class RelationshipNotFoundError(LookupFailedError):
    """Raised when a sheet points at a relationship id nobody declared."""

    def __init__(
        self,
        relationship_id: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=f"Relationship '{relationship_id}' not found",
            error_code=ErrorCode.RELATIONSHIP_NOT_FOUND,
            key=relationship_id,
            details=details,
        )


class SharedStringIndexError(LookupFailedError):
    """Raised when a string cell references past the end of the string table."""

    def __init__(
        self,
        index: int,
        table_size: int,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        details["table_size"] = table_size
        super().__init__(
            message=(
                f"Shared string index {index} out of range "
                f"(table has {table_size} entries)"
            ),
            error_code=ErrorCode.SHARED_STRING_INDEX_OUT_OF_RANGE,
            key=index,
            details=details,
        )
        self.index = index
        self.table_size = table_size


# =============================================================================
# Value Errors (E4xxx)
# =============================================================================


class ValueParseError(XlsxReaderError):
    """Base class for cell and attribute text that fails numeric parsing."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode,
        text: str,
        row: int | None = None,
        column: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with the offending text and cursor position.

        Args:
            message: Error message.
            error_code: Error code.
            text: The text that failed to parse.
            row: Current row when the failure occurred.
            column: Current column when the failure occurred.
            details: Additional details.
        """
        details = details or {}
        details["text"] = text
        if row is not None:
            details["row"] = row
        if column is not None:
            details["column"] = column
        super().__init__(message, error_code, details)
        self.text = text


class IntegerParseError(ValueParseError):
    """Raised when text is not a valid integer."""

    def __init__(
        self,
        text: str,
        row: int | None = None,
        column: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=f"Invalid integer: {text!r}",
            error_code=ErrorCode.INTEGER_PARSE_FAILED,
            text=text,
            row=row,
            column=column,
            details=details,
        )


class FloatParseError(ValueParseError):
    """Raised when numeric cell text is neither an integer nor a float."""

    def __init__(
        self,
        text: str,
        row: int | None = None,
        column: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=f"Invalid float: {text!r}",
            error_code=ErrorCode.FLOAT_PARSE_FAILED,
            text=text,
            row=row,
            column=column,
            details=details,
        )
