"""
Unit Tests for ImageStrategy
============================

Screenshot parsing through an injected ImageExtractor.
"""

import base64
from typing import Any

import pytest

from insight_ingest.ingest.image_strategy import ImageStrategy
from insight_ingest.utils.errors import ImageExtractionError, ParseError


class FailingExtractor:
    """Extractor that always raises."""

    async def extract(self, image_base64: str, context: str) -> dict:
        raise RuntimeError("model unavailable")


class TestImageStrategy:
    """Screenshot adapter."""

    @pytest.mark.asyncio
    async def test_result_becomes_single_row(
        self, fake_extractor: Any, png_bytes: bytes
    ) -> None:
        """Returned keys become the columns of one row."""
        data = await ImageStrategy(fake_extractor, context="Meta Ads").parse(png_bytes)

        assert data.columns == ["spend", "clicks"]
        assert data.rows == [{"spend": "$1,200", "clicks": "340"}]
        assert data.stats.row_count == 1

    @pytest.mark.asyncio
    async def test_extractor_receives_base64_and_context(
        self, fake_extractor: Any, png_bytes: bytes
    ) -> None:
        """The image is sent base64 encoded with the context hint."""
        await ImageStrategy(fake_extractor, context="Q3 dashboard").parse(png_bytes)

        image_base64, context = fake_extractor.calls[0]
        assert base64.b64decode(image_base64) == png_bytes
        assert context == "Q3 dashboard"

    @pytest.mark.asyncio
    async def test_timeout_fails_parse(self, make_extractor: Any, png_bytes: bytes) -> None:
        """A slow extractor is cut off."""
        slow = make_extractor(delay=1.0)

        with pytest.raises(ImageExtractionError, match="timed out"):
            await ImageStrategy(slow, timeout=0.01).parse(png_bytes)

    @pytest.mark.asyncio
    async def test_extractor_error_is_wrapped(self, png_bytes: bytes) -> None:
        """Arbitrary extractor failures surface as parse errors."""
        with pytest.raises(ParseError) as exc_info:
            await ImageStrategy(FailingExtractor()).parse(png_bytes)

        assert exc_info.value.message == "Screenshot parsing failed: model unavailable"

    @pytest.mark.asyncio
    async def test_non_object_result_rejected(
        self, make_extractor: Any, png_bytes: bytes
    ) -> None:
        """A list is not a key/value object."""
        extractor = make_extractor(result=[1, 2])

        with pytest.raises(ImageExtractionError, match="expected an object"):
            await ImageStrategy(extractor).parse(png_bytes)

    @pytest.mark.asyncio
    async def test_empty_buffer_skips_extractor(
        self, fake_extractor: Any
    ) -> None:
        """No bytes, no extraction call."""
        data = await ImageStrategy(fake_extractor).parse(b"")

        assert data.rows == []
        assert fake_extractor.calls == []
