"""
CSV Strategy - Delimited Text Parser
====================================

Parses delimited text (CSV/TSV/semicolon files) with pandas.

Every cell is kept as the raw string found in the file; typing is the
normalizer's job. With headers enabled the first record names the
columns, otherwise rows are keyed by position ("0", "1", ...) and the
column list stays empty.

Follows Strategy Pattern: Implements TableNormalizer interface.
"""

import io
import re
import warnings

import pandas as pd

from insight_ingest.ingest.table_normalizer import TableNormalizer, frame_to_records
from insight_ingest.schemas.domain import ParsedData
from insight_ingest.utils.errors import ParseError
from insight_ingest.utils.logger import get_logger

logger = get_logger(__name__)


class CsvStrategy(TableNormalizer):
    """
    Delimited-text parsing strategy.

    Options:
        delimiter: Field separator (default ",")
        headers: Treat the first record as the header row (default True)
        skip_empty_lines: Drop fully empty lines (default True)
    """

    def __init__(
        self,
        delimiter: str = ",",
        headers: bool = True,
        skip_empty_lines: bool = True,
    ) -> None:
        if not delimiter:
            raise ValueError("delimiter must be a non-empty string")
        self._delimiter = delimiter
        self._headers = headers
        self._skip_empty_lines = skip_empty_lines
        logger.debug(
            "CsvStrategy initialized",
            delimiter=delimiter,
            headers=headers,
            skip_empty_lines=skip_empty_lines,
        )

    @property
    def format_name(self) -> str:
        return "CSV"

    @property
    def supported_extensions(self) -> list[str]:
        """Return supported file extensions."""
        return ["csv", "tsv", "txt"]

    async def parse(self, buffer: bytes) -> ParsedData:
        """
        Parse delimited text into ParsedData.

        Args:
            buffer: UTF-8 encoded file contents

        Returns:
            ParsedData; empty for blank input or a header without data rows

        Raises:
            ParseError: If the records cannot be split consistently
        """
        text = self._decode(buffer)
        if not text.strip():
            logger.info("Empty CSV content")
            return ParsedData.empty()

        try:
            with warnings.catch_warnings():
                # Rows wider than the header only warn in pandas and lose cells
                warnings.simplefilter("error", pd.errors.ParserWarning)
                df = pd.read_csv(
                    io.StringIO(text),
                    sep=self._separator(),
                    header=0 if self._headers else None,
                    dtype=str,
                    keep_default_na=False,
                    skip_blank_lines=self._skip_empty_lines,
                    index_col=False,
                    engine="c" if len(self._delimiter) == 1 else "python",
                )

            if df.empty:
                logger.info("CSV has no data rows", header_columns=len(df.columns))
                return ParsedData.empty()

            rows = frame_to_records(df)
            columns = [str(c) for c in df.columns] if self._headers else []
            data = ParsedData(columns=columns, rows=rows)

        except pd.errors.EmptyDataError:
            logger.info("Empty CSV content")
            return ParsedData.empty()
        except Exception as e:
            logger.error("CSV parsing failed", error=str(e))
            raise ParseError(self.format_name, str(e)) from e

        logger.info(
            "CSV parsing complete",
            row_count=data.stats.row_count,
            column_count=data.stats.column_count,
        )
        return data

    def _separator(self) -> str:
        """Delimiter as pandas expects it; longer separators are regexes there."""
        if len(self._delimiter) == 1:
            return self._delimiter
        return re.escape(self._delimiter)

    def _decode(self, buffer: bytes) -> str:
        """Decode as UTF-8 (BOM tolerated), replacing undecodable bytes."""
        try:
            return buffer.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            logger.warning("Invalid UTF-8 in CSV, replacing bad bytes", error=str(e))
            return buffer.decode("utf-8-sig", errors="replace")
