"""
Schemas Package
===============

Pydantic models shared by every pipeline stage.
"""

from insight_ingest.schemas.domain import (
    PREVIEW_SIZE,
    DataSourceType,
    IngestionMetadata,
    IngestionOptions,
    IngestionResult,
    ParsedData,
    ParsedStats,
    ValidationIssue,
    ValidationResult,
)

__all__ = [
    "PREVIEW_SIZE",
    "DataSourceType",
    "IngestionMetadata",
    "IngestionOptions",
    "IngestionResult",
    "ParsedData",
    "ParsedStats",
    "ValidationIssue",
    "ValidationResult",
]
