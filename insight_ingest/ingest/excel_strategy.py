"""
Excel Strategy - Spreadsheet Parser
===================================

Parses .xlsx (openpyxl) and legacy .xls (xlrd) workbooks with pandas.

- One worksheet per call, chosen by 0-based index
- First row becomes the column names unless disabled
- Optional header-row detection for exports that put a title,
  company name and date range above the real header
- Fully empty rows are dropped; row order follows the sheet

Follows Strategy Pattern: Implements TableNormalizer interface.
"""

import io
from typing import Any

import pandas as pd

from insight_ingest.ingest.table_normalizer import TableNormalizer, frame_to_records
from insight_ingest.schemas.domain import ParsedData
from insight_ingest.utils.errors import ParseError, SheetNotFoundError
from insight_ingest.utils.logger import get_logger

logger = get_logger(__name__)


class ExcelStrategy(TableNormalizer):
    """
    Spreadsheet parsing strategy.

    Header Detection:
        With ``detect_header=True`` the header is the first of the first
        HEADER_SCAN_ROWS rows holding at least HEADER_MIN_CELLS non-empty
        cells; everything above it is treated as preamble and dropped.

    Example:
        Input sheet:
        | Acme Ltd - Profit and Loss |         |         |
        | Jan 2026 - Mar 2026        |         |         |
        | Account                    | Jan     | Feb     |
        | Sales                      | 1000    | 1200    |

        Output (detect_header=True):
        columns = ["Account", "Jan", "Feb"]
        rows    = [{"Account": "Sales", "Jan": 1000, "Feb": 1200}]
    """

    HEADER_SCAN_ROWS = 15
    HEADER_MIN_CELLS = 3

    def __init__(
        self,
        sheet_index: int = 0,
        has_header: bool = True,
        detect_header: bool = False,
    ) -> None:
        """
        Initialize Excel strategy.

        Args:
            sheet_index: Worksheet index (0-based)
            has_header: Use a row as column names; otherwise columns are "0", "1", ...
            detect_header: Search for the header row instead of using the first row
        """
        self._sheet_index = sheet_index
        self._has_header = has_header
        self._detect_header = detect_header
        logger.debug(
            "ExcelStrategy initialized",
            sheet_index=sheet_index,
            has_header=has_header,
            detect_header=detect_header,
        )

    @property
    def format_name(self) -> str:
        return "Excel"

    @property
    def supported_extensions(self) -> list[str]:
        """Return supported file extensions."""
        return ["xlsx", "xls"]

    async def parse(self, buffer: bytes) -> ParsedData:
        """
        Parse one worksheet into ParsedData.

        Args:
            buffer: Workbook contents

        Returns:
            ParsedData for the selected sheet

        Raises:
            SheetNotFoundError: If sheet_index does not exist
            ParseError: If the workbook cannot be read
        """
        if not buffer:
            logger.info("Empty Excel content")
            return ParsedData.empty()

        try:
            with pd.ExcelFile(io.BytesIO(buffer)) as workbook:
                sheet_name = self._select_sheet(workbook.sheet_names)
                raw = workbook.parse(sheet_name=sheet_name, header=None)

            data = self._build(raw)

        except ParseError:
            raise
        except Exception as e:
            logger.error("Excel parsing failed", error=str(e))
            raise ParseError(self.format_name, str(e)) from e

        logger.info(
            "Excel parsing complete",
            sheet_index=self._sheet_index,
            row_count=data.stats.row_count,
            column_count=data.stats.column_count,
        )
        return data

    def _select_sheet(self, sheet_names: list[Any]) -> Any:
        """Select worksheet name by configured index."""
        if not 0 <= self._sheet_index < len(sheet_names):
            logger.warning(
                "Sheet index out of range",
                sheet_index=self._sheet_index,
                sheet_count=len(sheet_names),
            )
            raise SheetNotFoundError(self._sheet_index, [str(s) for s in sheet_names])
        return sheet_names[self._sheet_index]

    def _build(self, raw: pd.DataFrame) -> ParsedData:
        """Apply header handling to the raw grid and convert to ParsedData."""
        raw = raw.dropna(how="all").reset_index(drop=True)
        if raw.empty:
            return ParsedData.empty()

        if not self._has_header:
            df = raw
            df.columns = [str(i) for i in range(len(df.columns))]
        else:
            header_idx = self._find_header_row(raw) if self._detect_header else 0
            df = raw.iloc[header_idx + 1:].reset_index(drop=True)
            df.columns = self._header_names(raw.iloc[header_idx].tolist())

        df = df.dropna(how="all")
        if df.empty:
            return ParsedData.empty()

        columns = [str(c) for c in df.columns]
        return ParsedData(columns=columns, rows=frame_to_records(df))

    def _find_header_row(self, raw: pd.DataFrame) -> int:
        """First row with enough non-empty cells, else row 0."""
        for idx in range(min(len(raw), self.HEADER_SCAN_ROWS)):
            cells = raw.iloc[idx].tolist()
            filled = [c for c in cells if not pd.isna(c) and str(c).strip() != ""]
            if len(filled) >= self.HEADER_MIN_CELLS:
                if idx:
                    logger.debug("Header row detected below preamble", header_row=idx)
                return idx
        return 0

    @staticmethod
    def _header_names(cells: list[Any]) -> list[str]:
        """
        Turn header cells into unique column names.

        Blank cells become "column_<n>" (1-based position); repeated names
        get the next numeric suffix not already taken by another header.
        """
        names: list[str] = []
        seen: dict[str, int] = {}
        for position, cell in enumerate(cells, start=1):
            if cell is None or pd.isna(cell) or str(cell).strip() == "":
                name = f"column_{position}"
            elif isinstance(cell, float) and cell.is_integer():
                name = str(int(cell))
            else:
                name = str(cell).strip()

            base = name
            while name in seen:
                seen[base] += 1
                name = f"{base}_{seen[base]}"
            seen.setdefault(name, 0)
            names.append(name)
        return names
