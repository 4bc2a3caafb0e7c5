"""
Unit Tests for DataNormalizer
=============================
"""

from typing import Any

import pytest

from insight_ingest.services.data_normalizer import (
    DataNormalizer,
    normalize_row,
    normalize_value,
)


class TestNormalizeValue:
    """Single-cell normalization."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("$1,234.50", 1234.5),
            ("42%", 42.0),
            ("  99  ", 99.0),
            ("1,000", 1000.0),
            ("0", 0.0),
            ("12.", 12.0),
            ("abc", "abc"),
            ("  padded text ", "padded text"),
            ("-5", "-5"),
            ("1.2.3", "1.2.3"),
            ("", None),
            (None, None),
        ],
    )
    def test_string_cells(self, raw: Any, expected: Any) -> None:
        """Currency, percent and thousands formatting is stripped."""
        assert normalize_value(raw) == expected

    def test_numeric_result_is_float(self) -> None:
        """Numbers come back as floats."""
        assert isinstance(normalize_value("7"), float)

    @pytest.mark.parametrize("raw", [3, 2.5, True, {"a": 1}, [1]])
    def test_non_strings_pass_through(self, raw: Any) -> None:
        """Only strings are touched."""
        assert normalize_value(raw) is raw

    def test_whitespace_only_stays_empty_string(self) -> None:
        """Whitespace is trimmed but not turned into None."""
        assert normalize_value("   ") == ""

    def test_symbols_only_fall_back_to_string(self) -> None:
        """A pattern match that is not a number stays text."""
        assert normalize_value(",") == ","


class TestDataNormalizer:
    """Row-set normalization."""

    def test_rows_normalized(self) -> None:
        """Every cell of every row is normalized."""
        rows = [{"month": "Jan", "revenue": "$1,200", "note": ""}]

        assert DataNormalizer().normalize(rows) == [
            {"month": "Jan", "revenue": 1200.0, "note": None}
        ]

    def test_input_not_mutated(self) -> None:
        """Normalization returns new records."""
        rows = [{"revenue": "$5"}]

        DataNormalizer().normalize(rows, target_schema="custom")

        assert rows == [{"revenue": "$5"}]

    def test_idempotent(self) -> None:
        """Normalizing twice changes nothing further."""
        rows = [{"a": "$1,200", "b": " x ", "c": "", "d": 3}]
        normalizer = DataNormalizer()

        once = normalizer.normalize(rows)

        assert normalizer.normalize(once) == once

    def test_non_record_rows_pass_through(self) -> None:
        """Rows that are not mappings are returned as-is."""
        assert normalize_row(["a"]) == ["a"]
