"""
Data Normalizer
===============

Best-effort typing of loosely formatted string cells.

Per cell:
    - None or "" -> None
    - non-strings pass through unchanged
    - strings are trimmed; if the trimmed value looks like
      "$1,234.50", "42%" or "1,000" the symbols are stripped and the
      rest is parsed as a float
    - anything else stays the trimmed string

This is not currency- or percentage-aware: "$5" and "5%" both become
5.0. Callers that care about the unit must interpret it themselves.

Examples:
    "$1,234.50" -> 1234.5
    "42%"       -> 42.0
    "  99  "    -> 99.0
    "abc"       -> "abc"
    ""          -> None
"""

import re
from collections.abc import Mapping, Sequence
from typing import Any, Final

from insight_ingest.utils.logger import get_logger

logger = get_logger(__name__)

NUMERIC_PATTERN: Final[re.Pattern[str]] = re.compile(r"^\$?[0-9,]+\.?[0-9]*%?$")
STRIP_PATTERN: Final[re.Pattern[str]] = re.compile(r"[$,% ]")


def normalize_value(value: Any) -> Any:
    """
    Normalize a single cell value.

    Never raises; unparseable numeric-looking strings fall back to the
    trimmed string.
    """
    if value is None or value == "":
        return None

    if not isinstance(value, str):
        return value

    trimmed = value.strip()
    if NUMERIC_PATTERN.match(trimmed):
        try:
            return float(STRIP_PATTERN.sub("", trimmed))
        except ValueError:
            return trimmed

    return trimmed


def normalize_row(row: Any) -> Any:
    """Normalize every cell of a record; non-record rows pass through."""
    if not isinstance(row, Mapping):
        return row
    return {key: normalize_value(value) for key, value in row.items()}


class DataNormalizer:
    """
    Row-set normalizer.

    Usage:
        normalizer = DataNormalizer()
        typed_rows = normalizer.normalize(parsed.rows)
    """

    def normalize(
        self,
        rows: Sequence[Any],
        target_schema: str = "standard",
    ) -> list[Any]:
        """
        Normalize a sequence of raw records into typed records.

        Args:
            rows: Raw records, usually ParsedData.rows
            target_schema: Schema label; accepted for forward compatibility,
                normalization does not branch on it

        Returns:
            New list of new records; the input is left untouched
        """
        normalized = [normalize_row(row) for row in rows]
        logger.debug(
            "Rows normalized",
            row_count=len(normalized),
            target_schema=target_schema,
        )
        return normalized
