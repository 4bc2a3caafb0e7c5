"""
Table Normalizer Abstract Base Class
====================================

Defines the interface for format parsing adapters.
All adapters (CSV, Excel, PDF, screenshot, JSON) implement this interface
and return the same ParsedData shape.

Follows Open/Closed Principle (SOLID-O):
- Open for extension: New file types can be added by creating new strategies
- Closed for modification: Existing strategies don't need to change
"""

import math
from abc import ABC, abstractmethod
from datetime import date, datetime, time
from typing import Any

import numpy as np
import pandas as pd

from insight_ingest.schemas.domain import ParsedData
from insight_ingest.utils.file_reader import get_file_extension


class TableNormalizer(ABC):
    """
    Abstract base class for format parsing strategies.

    Contract:
        - Input: Complete file contents as bytes
        - Output: ParsedData
        - Empty input: ParsedData.empty(), never an exception
        - Malformed input: ParseError naming the format and the cause

    Usage:
        parser = CsvStrategy(delimiter=";")
        data = await parser.parse(buffer)
    """

    @property
    @abstractmethod
    def format_name(self) -> str:
        """Human-readable format label used in error messages."""
        ...

    @property
    @abstractmethod
    def supported_extensions(self) -> list[str]:
        """
        Return list of supported file extensions.

        Returns:
            List of extensions (lowercase, without dot)
            e.g., ['xlsx', 'xls']
        """
        ...

    @abstractmethod
    async def parse(self, buffer: bytes) -> ParsedData:
        """
        Parse file contents into the canonical table shape.

        Args:
            buffer: Complete file contents

        Returns:
            ParsedData with columns, rows and stats

        Raises:
            ParseError: If the content is structurally malformed
        """
        ...

    def can_handle(self, filename: str) -> bool:
        """Check whether the filename's extension is supported."""
        return get_file_extension(filename) in self.supported_extensions


def to_native(value: Any) -> Any:
    """
    Convert a pandas/numpy cell value into a plain JSON-friendly value.

    Missing values (NaN, NaT, None) become None, numpy scalars become
    Python scalars and timestamps become ISO strings.
    """
    if value is None:
        return None
    if isinstance(value, float) and math.isnan(value):
        return None
    if value is pd.NaT:
        return None
    if isinstance(value, np.datetime64):
        return None if np.isnat(value) else pd.Timestamp(value).isoformat()
    if isinstance(value, np.generic):
        value = value.item()
        if isinstance(value, float) and math.isnan(value):
            return None
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    return value


def frame_to_records(df: pd.DataFrame) -> list[dict[str, Any]]:
    """Convert a DataFrame to records with string keys and native values."""
    columns = [str(c) for c in df.columns]
    return [
        {column: to_native(value) for column, value in zip(columns, row)}
        for row in df.itertuples(index=False, name=None)
    ]
