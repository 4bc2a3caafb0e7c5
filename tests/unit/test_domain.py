"""
Unit Tests for Domain Models
============================
"""

import pytest
from pydantic import ValidationError

from insight_ingest.schemas.domain import (
    IngestionOptions,
    ParsedData,
    ParsedStats,
    ValidationIssue,
    ValidationResult,
)


class TestParsedData:
    """Canonical table shape."""

    def test_stats_snapshot(self) -> None:
        """Counts are taken from rows and columns."""
        data = ParsedData(columns=["a", "b"], rows=[{"a": 1, "b": 2}])

        assert data.stats == ParsedStats(row_count=1, column_count=2)

    def test_explicit_stats_kept(self) -> None:
        """Supplied stats are not recomputed."""
        data = ParsedData(columns=[], rows=[], stats=ParsedStats(row_count=7, column_count=0))

        assert data.stats.row_count == 7

    def test_preview_is_first_five_rows(self) -> None:
        """Preview is a prefix of rows."""
        rows = [{"n": i} for i in range(8)]
        data = ParsedData(columns=["n"], rows=rows)

        assert data.preview == rows[:5]
        assert len(ParsedData(columns=["n"], rows=rows[:2]).preview) == 2

    def test_duplicate_columns_rejected(self) -> None:
        """Column names are unique."""
        with pytest.raises(ValidationError, match="Duplicate column"):
            ParsedData(columns=["a", "a"], rows=[])

    def test_frozen(self) -> None:
        """Fields cannot be reassigned."""
        data = ParsedData.empty()

        with pytest.raises(ValidationError):
            data.rows = [{"a": 1}]

    def test_empty(self) -> None:
        """Empty data has zero counts and an empty preview."""
        data = ParsedData.empty()

        assert data.columns == []
        assert data.preview == []
        assert data.stats.column_count == 0

    def test_serialization_includes_preview(self) -> None:
        """Computed preview is part of the dump."""
        dumped = ParsedData(columns=["a"], rows=[{"a": 1}]).model_dump()

        assert dumped["preview"] == [{"a": 1}]
        assert dumped["stats"] == {"row_count": 1, "column_count": 1}


class TestValidationResult:
    """Validation outcome."""

    def test_is_valid_follows_errors(self) -> None:
        """Warnings never invalidate."""
        assert ValidationResult(warnings=["Data is empty"]).is_valid
        assert not ValidationResult(
            errors=[ValidationIssue(row=1, field="a", message="missing")]
        ).is_valid


class TestIngestionOptions:
    """Caller options."""

    def test_defaults(self) -> None:
        """Everything is optional."""
        options = IngestionOptions()

        assert options.required_fields == []
        assert options.target_schema == "standard"
        assert options.file_context is None
        assert options.parser_options == {}

    def test_camel_case_aliases(self) -> None:
        """JSON-style keys are accepted."""
        options = IngestionOptions.model_validate(
            {"requiredFields": ["date"], "targetSchema": "ads", "fileContext": "Meta"}
        )

        assert options.required_fields == ["date"]
        assert options.target_schema == "ads"
        assert options.file_context == "Meta"

    def test_snake_case_names(self) -> None:
        """Field names work too."""
        assert IngestionOptions(required_fields=["x"]).required_fields == ["x"]
