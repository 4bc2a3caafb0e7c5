"""
PDF Strategy - Text Linearizer
==============================

Extracts the text layer of a PDF with PyMuPDF and emits one row per
non-blank line under the fixed schema {page, line, text}.

No table reconstruction is attempted; the output is meant for
free-text consumers downstream.

Page numbers:
    By default ``page`` is an estimate, floor(line_index / 50) + 1, and
    does not follow real page breaks. ``use_page_boundaries=True``
    reports the page each line was actually extracted from.

Follows Strategy Pattern: Implements TableNormalizer interface.
"""

from typing import Any

import pymupdf

from insight_ingest.ingest.table_normalizer import TableNormalizer
from insight_ingest.schemas.domain import ParsedData
from insight_ingest.utils.errors import ParseError
from insight_ingest.utils.logger import get_logger

logger = get_logger(__name__)

PDF_COLUMNS = ["page", "line", "text"]
LINES_PER_PAGE_ESTIMATE = 50


class PdfStrategy(TableNormalizer):
    """
    PDF text extraction strategy using PyMuPDF.

    Extraction Flow:
        1. PDF bytes -> per-page plain text (pymupdf.Page.get_text)
        2. Text -> lines, blank lines dropped
        3. Lines -> {page, line, text} rows (line is 1-based)
    """

    def __init__(self, use_page_boundaries: bool = False) -> None:
        """
        Initialize PDF strategy.

        Args:
            use_page_boundaries: Report real page numbers instead of the
                50-lines-per-page estimate
        """
        self._use_page_boundaries = use_page_boundaries

    @property
    def format_name(self) -> str:
        return "PDF"

    @property
    def supported_extensions(self) -> list[str]:
        """Return supported file extensions."""
        return ["pdf"]

    async def parse(self, buffer: bytes) -> ParsedData:
        """
        Linearize the PDF text layer into ParsedData.

        Args:
            buffer: PDF file contents

        Returns:
            ParsedData with columns page/line/text; empty when the
            document has no extractable text

        Raises:
            ParseError: If the document cannot be opened
        """
        if not buffer:
            logger.info("Empty PDF content")
            return ParsedData.empty()

        try:
            pages = self._extract_pages(buffer)
        except Exception as e:
            logger.error("PDF parsing failed", error=str(e))
            raise ParseError(self.format_name, str(e)) from e

        lines = [
            (page_number, line)
            for page_number, text in pages
            for line in text.split("\n")
            if line.strip()
        ]

        if not lines:
            logger.warning("No text found in PDF", page_count=len(pages))
            return ParsedData.empty()

        rows = self._build_rows(lines)

        logger.info(
            "PDF parsing complete",
            page_count=len(pages),
            line_count=len(rows),
            page_boundaries=self._use_page_boundaries,
        )
        return ParsedData(columns=list(PDF_COLUMNS), rows=rows)

    def _extract_pages(self, buffer: bytes) -> list[tuple[int, str]]:
        """Return (1-based page number, text) for every page."""
        with pymupdf.open(stream=buffer, filetype="pdf") as doc:
            return [(page.number + 1, page.get_text("text")) for page in doc]

    def _build_rows(self, lines: list[tuple[int, str]]) -> list[dict[str, Any]]:
        """Number the lines and assign page numbers."""
        rows: list[dict[str, Any]] = []
        for index, (page_number, text) in enumerate(lines):
            if self._use_page_boundaries:
                page = page_number
            else:
                page = index // LINES_PER_PAGE_ESTIMATE + 1
            rows.append({"page": page, "line": index + 1, "text": text})
        return rows
