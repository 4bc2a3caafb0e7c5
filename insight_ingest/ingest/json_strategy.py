"""
JSON Strategy
=============

Parses a JSON document into ParsedData.

- A top-level array supplies the rows; any other value is wrapped
  into a one-element array
- Columns are the keys of the first element
- Elements that are not objects are wrapped as {"value": element}

Follows Strategy Pattern: Implements TableNormalizer interface.
"""

import json
from typing import Any

from insight_ingest.ingest.table_normalizer import TableNormalizer
from insight_ingest.schemas.domain import ParsedData
from insight_ingest.utils.errors import ParseError
from insight_ingest.utils.logger import get_logger

logger = get_logger(__name__)

SCALAR_KEY = "value"


class JsonStrategy(TableNormalizer):
    """JSON document parsing strategy."""

    @property
    def format_name(self) -> str:
        return "JSON"

    @property
    def supported_extensions(self) -> list[str]:
        """Return supported file extensions."""
        return ["json"]

    async def parse(self, buffer: bytes) -> ParsedData:
        """
        Parse a JSON document.

        Args:
            buffer: UTF-8 encoded JSON

        Returns:
            ParsedData; empty for blank input or an empty array

        Raises:
            ParseError: If the document is not valid JSON
        """
        try:
            text = buffer.decode("utf-8-sig")
            if not text.strip():
                logger.info("Empty JSON content")
                return ParsedData.empty()
            content = json.loads(text)
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.error("JSON parsing failed", error=str(e))
            raise ParseError(self.format_name, str(e)) from e

        items = content if isinstance(content, list) else [content]
        rows = [self._as_record(item) for item in items]

        if not rows:
            return ParsedData.empty()

        data = ParsedData(columns=list(rows[0]), rows=rows)

        logger.info(
            "JSON parsing complete",
            row_count=data.stats.row_count,
            column_count=data.stats.column_count,
        )
        return data

    @staticmethod
    def _as_record(item: Any) -> dict[str, Any]:
        if isinstance(item, dict):
            return item
        return {SCALAR_KEY: item}
