"""
Unit Tests for JsonStrategy
===========================
"""

import pytest

from insight_ingest.ingest.json_strategy import JsonStrategy
from insight_ingest.utils.errors import ParseError


class TestJsonStrategy:
    """JSON parsing."""

    @pytest.mark.asyncio
    async def test_array_of_objects(self) -> None:
        """Columns are taken from the first element."""
        data = await JsonStrategy().parse(
            b'[{"month": "Jan", "revenue": "$1,200"}, {"month": "Feb", "extra": 1}]'
        )

        assert data.columns == ["month", "revenue"]
        assert data.stats.row_count == 2
        assert data.rows[1] == {"month": "Feb", "extra": 1}

    @pytest.mark.asyncio
    async def test_single_object_is_wrapped(self) -> None:
        """A top-level object becomes one row."""
        data = await JsonStrategy().parse(b'{"a": 1, "b": null}')

        assert data.rows == [{"a": 1, "b": None}]
        assert data.columns == ["a", "b"]

    @pytest.mark.asyncio
    async def test_scalars_are_wrapped(self) -> None:
        """Non-object elements become {"value": element}."""
        data = await JsonStrategy().parse(b"[1, \"two\", null]")

        assert data.columns == ["value"]
        assert data.rows == [{"value": 1}, {"value": "two"}, {"value": None}]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("content", [b"", b"  ", b"[]"])
    async def test_empty_inputs(self, content: bytes) -> None:
        """Blank input and empty arrays produce empty ParsedData."""
        data = await JsonStrategy().parse(content)

        assert data.rows == []
        assert data.columns == []

    @pytest.mark.asyncio
    async def test_invalid_json_raises(self) -> None:
        """Malformed JSON names the format."""
        with pytest.raises(ParseError) as exc_info:
            await JsonStrategy().parse(b"{not json")

        assert exc_info.value.message.startswith("JSON parsing failed:")
