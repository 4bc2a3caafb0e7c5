"""
Input Materialization
=====================

Turns whatever the caller handed to the pipeline into one in-memory
byte buffer. Every format is loaded fully before parsing; nothing is
streamed or chunked.

Accepted inputs:
- bytes, bytearray, memoryview
- filesystem paths (str or os.PathLike)
- file-like objects whose read() returns bytes, or a coroutine
  resolving to bytes (e.g. an uploaded multipart file)
"""

import inspect
import os
from pathlib import Path
from typing import Any

from insight_ingest.utils.errors import FileSizeError, InsightIngestError
from insight_ingest.utils.logger import get_logger

logger = get_logger(__name__)


async def read_input(source: Any) -> bytes:
    """
    Read an ingestion input fully into memory.

    Args:
        source: Raw bytes, a path, or a sync/async file-like object

    Returns:
        bytes: Complete file contents

    Raises:
        InsightIngestError: If the input type is not supported
        OSError: If a path cannot be read
    """
    if isinstance(source, bytes):
        return source

    if isinstance(source, (bytearray, memoryview)):
        return bytes(source)

    if isinstance(source, (str, os.PathLike)):
        path = Path(source)
        logger.debug("Reading file from disk", file_path=str(path))
        return path.read_bytes()

    read = getattr(source, "read", None)
    if callable(read):
        content = read()
        if inspect.isawaitable(content):
            content = await content
        if isinstance(content, str):
            return content.encode("utf-8")
        return bytes(content)

    raise InsightIngestError(
        message=f"Unsupported input type: {type(source).__name__}",
        details={"input_type": type(source).__name__},
    )


def validate_file_size(buffer: bytes, max_bytes: int, filename: str) -> int:
    """
    Validate buffer size is within allowed limits.

    Args:
        buffer: Materialized file contents
        max_bytes: Maximum allowed size in bytes
        filename: Original filename, for error context

    Returns:
        int: Buffer size in bytes

    Raises:
        FileSizeError: If buffer exceeds maximum size
    """
    size = len(buffer)

    if size > max_bytes:
        logger.warning(
            "File exceeds maximum size",
            filename=filename,
            file_size_bytes=size,
            max_size_bytes=max_bytes,
        )
        raise FileSizeError(
            message=f"File exceeds maximum size of {max_bytes // (1024 * 1024)}MB",
            details={
                "filename": filename,
                "file_size_mb": round(size / (1024 * 1024), 2),
                "max_size_bytes": max_bytes,
            },
        )

    return size


def get_file_extension(filename: str) -> str:
    """
    Get lowercase file extension without the leading dot.

    Dotfiles such as ".csv" count as having the extension.

    Example:
        >>> get_file_extension("Q3-Report.XLSX")
        'xlsx'
    """
    name = Path(filename).name.lower()
    if "." not in name:
        return ""
    return name.rsplit(".", 1)[1]
