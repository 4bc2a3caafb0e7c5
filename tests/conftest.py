"""
Test Configuration and Fixtures
================================

Shared pytest fixtures for insight-ingest tests.
"""

import asyncio
import io
from typing import Any

import pytest

from insight_ingest.config.settings import Settings
from insight_ingest.services.ingestion_service import IngestionService

PNG_HEADER = b"\x89PNG\r\n\x1a\n"
JPEG_HEADER = b"\xff\xd8\xff\xe0"


class FakeImageExtractor:
    """In-memory ImageExtractor recording every call."""

    def __init__(self, result: Any = None, delay: float = 0.0) -> None:
        self.result = {"spend": "$1,200", "clicks": "340"} if result is None else result
        self.delay = delay
        self.calls: list[tuple[str, str]] = []

    async def extract(self, image_base64: str, context: str) -> Any:
        self.calls.append((image_base64, context))
        if self.delay:
            await asyncio.sleep(self.delay)
        return self.result


@pytest.fixture
def settings() -> Settings:
    """Settings independent of the process environment cache."""
    return Settings(environment="development", log_level="DEBUG")


@pytest.fixture
def fake_extractor() -> FakeImageExtractor:
    """Image extractor returning a fixed key/value object."""
    return FakeImageExtractor()


@pytest.fixture
def ingestion_service(settings: Settings, fake_extractor: FakeImageExtractor) -> IngestionService:
    """IngestionService wired to the fake image extractor."""
    return IngestionService(settings=settings, image_extractor=fake_extractor)


@pytest.fixture
def csv_bytes() -> bytes:
    """Small two-column CSV."""
    return b"header_a,header_b\n1,2\n3,4\n"


@pytest.fixture
def xlsx_bytes() -> bytes:
    """Workbook with a report sheet and a notes sheet."""
    from openpyxl import Workbook

    wb = Workbook()
    ws = wb.active
    ws.title = "Report"
    ws.append(["month", "revenue", "region"])
    ws.append(["Jan", 1200, "North"])
    ws.append(["Feb", 1350.5, "South"])

    notes = wb.create_sheet("Notes")
    notes.append(["note"])
    notes.append(["internal only"])

    out = io.BytesIO()
    wb.save(out)
    wb.close()
    return out.getvalue()


@pytest.fixture
def pdf_bytes() -> bytes:
    """One-page PDF with two text lines."""
    import pymupdf

    doc = pymupdf.open()
    page = doc.new_page()
    page.insert_text((72, 72), "Quarterly Report")
    page.insert_text((72, 100), "Revenue grew 12%")
    data = doc.tobytes()
    doc.close()
    return data


@pytest.fixture
def png_bytes() -> bytes:
    """Bytes carrying a PNG signature."""
    return PNG_HEADER + b"\x00" * 32


@pytest.fixture
def make_extractor() -> type[FakeImageExtractor]:
    """Factory for extractors with a custom result or delay."""
    return FakeImageExtractor
