"""
Domain Models
=============

Canonical shapes produced and consumed by the ingestion pipeline.
All of them are created fresh per ingestion call.
"""

from datetime import datetime
from enum import Enum
from typing import Annotated, Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    computed_field,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

PREVIEW_SIZE = 5


class DataSourceType(str, Enum):
    """Which parsing adapter applies to a file. Decided once per file."""

    CSV = "CSV"
    EXCEL = "EXCEL"
    PDF = "PDF"
    SCREENSHOT = "SCREENSHOT"
    JSON = "JSON"


class ParsedStats(BaseModel):
    """Row/column counts captured when a ParsedData is built."""

    model_config = ConfigDict(frozen=True)

    row_count: Annotated[int, Field(ge=0, description="Number of rows")]
    column_count: Annotated[int, Field(ge=0, description="Number of columns")]


class ParsedData(BaseModel):
    """
    Canonical output of every parsing adapter.

    Immutable after construction. ``stats`` is a snapshot taken from
    ``rows`` and ``columns`` when none is supplied; ``preview`` is always
    derived from ``rows``.

    Attributes:
        columns: Ordered, unique column names (may be empty)
        rows: Records in original document order
        stats: Row and column counts
    """

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "columns": ["month", "revenue"],
                "rows": [{"month": "Jan", "revenue": "$1,200"}],
                "stats": {"row_count": 1, "column_count": 2},
            }
        },
    )

    columns: Annotated[
        list[str],
        Field(default_factory=list, description="Ordered column names"),
    ]
    rows: Annotated[
        list[dict[str, Any]],
        Field(default_factory=list, description="Records in document order"),
    ]
    stats: ParsedStats

    @model_validator(mode="before")
    @classmethod
    def _snapshot_stats(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("stats") is None:
            data = {
                **data,
                "stats": {
                    "row_count": len(data.get("rows") or []),
                    "column_count": len(data.get("columns") or []),
                },
            }
        return data

    @field_validator("columns")
    @classmethod
    def _columns_unique(cls, value: list[str]) -> list[str]:
        seen: set[str] = set()
        for column in value:
            if column in seen:
                raise ValueError(f"Duplicate column name: {column!r}")
            seen.add(column)
        return value

    @computed_field  # type: ignore[prop-decorator]
    @property
    def preview(self) -> list[dict[str, Any]]:
        """First PREVIEW_SIZE rows."""
        return self.rows[:PREVIEW_SIZE]

    @classmethod
    def empty(cls) -> "ParsedData":
        """ParsedData for input that holds no data."""
        return cls(columns=[], rows=[])


class ValidationIssue(BaseModel):
    """A required field missing from one row."""

    row: Annotated[int, Field(ge=0, description="1-based row index (0 = whole input)")]
    field: Annotated[str, Field(description="Field name")]
    message: Annotated[str, Field(description="Human-readable description")]


class ValidationResult(BaseModel):
    """
    Outcome of required-field validation.

    Warnings never affect ``is_valid``.
    """

    errors: list[ValidationIssue] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_valid(self) -> bool:
        """True iff there are no errors."""
        return not self.errors


class IngestionOptions(BaseModel):
    """
    Options accepted by the orchestrator.

    Attributes:
        required_fields: Field names every row must populate
        target_schema: Label passed through to normalization
        file_context: Overrides the call's context hint for screenshots
        parser_options: Keyword arguments for the selected adapter
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    required_fields: list[str] = Field(default_factory=list)
    target_schema: str = Field(default="standard")
    file_context: str | None = Field(default=None)
    parser_options: dict[str, Any] = Field(default_factory=dict)


class IngestionMetadata(BaseModel):
    """Descriptive metadata about one ingested file."""

    filename: str
    file_type: DataSourceType
    uploaded_at: datetime
    row_count: Annotated[int, Field(ge=0)]
    column_count: Annotated[int, Field(ge=0)]


class IngestionResult(BaseModel):
    """
    Complete result of one ingestion call.

    Only ever constructed with every field populated.
    """

    data: ParsedData
    file_type: DataSourceType
    validation: ValidationResult
    normalized: list[dict[str, Any]]
    metadata: IngestionMetadata

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-safe dictionary."""
        return self.model_dump(mode="json")
