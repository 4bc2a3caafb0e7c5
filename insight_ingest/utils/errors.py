"""
Custom Exception Classes
========================

Application-specific exceptions for proper error handling.

Messages are meant to be shown to users as-is
(e.g. "CSV parsing failed: ...").
"""

from typing import Any


class InsightIngestError(Exception):
    """Base exception for the ingestion pipeline."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class UnknownFileTypeError(InsightIngestError):
    """Raised when neither byte signature nor extension identify the file."""

    def __init__(self, filename: str) -> None:
        super().__init__(
            message=f"Unknown file type: {filename}",
            details={"filename": filename},
        )
        self.filename = filename


class UnsupportedFileTypeError(InsightIngestError):
    """Raised when no parsing adapter is registered for a detected type."""

    pass


class ParseError(InsightIngestError):
    """
    Raised when an adapter cannot make sense of well-signatured content.

    Attributes:
        format_name: Adapter label, e.g. "CSV", "Excel"
        cause: Underlying failure message
    """

    def __init__(
        self,
        format_name: str,
        cause: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=f"{format_name} parsing failed: {cause}",
            details={"format": format_name, **(details or {})},
        )
        self.format_name = format_name
        self.cause = cause


class SheetNotFoundError(ParseError):
    """Raised when the requested worksheet index does not exist."""

    def __init__(self, sheet_index: int, available_sheets: list[str]) -> None:
        super().__init__(
            format_name="Excel",
            cause=f"Sheet at index {sheet_index} not found",
            details={
                "sheet_index": sheet_index,
                "available_sheets": available_sheets,
            },
        )
        self.sheet_index = sheet_index


class ImageExtractionError(ParseError):
    """Raised when the external image extraction call fails or times out."""

    def __init__(self, cause: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(format_name="Screenshot", cause=cause, details=details)


class FileSizeError(InsightIngestError):
    """Raised when a file exceeds the maximum allowed size."""

    pass


class ConfigurationError(InsightIngestError):
    """Raised when configuration is invalid."""

    pass


class IngestionError(InsightIngestError):
    """
    Raised by the orchestrator when any stage fails.

    Wraps the first error of the failing stage; the original exception is
    kept on ``cause`` and the failing stage name on ``stage``.
    """

    def __init__(self, cause: Exception, stage: str, filename: str) -> None:
        original = cause.message if isinstance(cause, InsightIngestError) else str(cause)
        super().__init__(
            message=f"File ingestion failed: {original}",
            details={
                "filename": filename,
                "stage": stage,
                "error_type": type(cause).__name__,
            },
        )
        self.cause = cause
        self.stage = stage
