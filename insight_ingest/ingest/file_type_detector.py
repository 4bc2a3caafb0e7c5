"""
File Type Detector
==================

Decides which parsing adapter applies to an uploaded file by sniffing
leading bytes first and falling back to the filename extension.

Buffers shorter than four bytes skip signature sniffing entirely.

Order (first match wins):
    1. %PDF                              -> PDF
    2. ZIP (PK) or OLE (D0 CF) signature
       AND a .xlsx/.xls extension        -> EXCEL
    3. PNG signature                     -> SCREENSHOT
    4. JPEG signature                    -> SCREENSHOT
    5. Extension table                   -> CSV / PDF / EXCEL / SCREENSHOT / JSON

The ZIP signature is shared by many container formats (docx, pptx, jar,
...), so the spreadsheet branch requires the extension as a second factor.
"""

from typing import Final

from insight_ingest.schemas.domain import DataSourceType
from insight_ingest.utils.errors import UnknownFileTypeError
from insight_ingest.utils.file_reader import get_file_extension
from insight_ingest.utils.logger import get_logger

logger = get_logger(__name__)

PDF_SIGNATURE: Final[bytes] = b"%PDF"
ZIP_SIGNATURE: Final[bytes] = b"PK"
OLE_SIGNATURE: Final[bytes] = b"\xd0\xcf"
PNG_SIGNATURE: Final[bytes] = b"\x89PNG"
JPEG_SIGNATURE: Final[bytes] = b"\xff\xd8\xff"

MIN_SIGNATURE_LENGTH: Final[int] = 4

SPREADSHEET_EXTENSIONS: Final[frozenset[str]] = frozenset({"xlsx", "xls"})

EXTENSION_MAP: Final[dict[str, DataSourceType]] = {
    "csv": DataSourceType.CSV,
    "pdf": DataSourceType.PDF,
    "xlsx": DataSourceType.EXCEL,
    "xls": DataSourceType.EXCEL,
    "png": DataSourceType.SCREENSHOT,
    "jpg": DataSourceType.SCREENSHOT,
    "jpeg": DataSourceType.SCREENSHOT,
    "json": DataSourceType.JSON,
}


def detect_file_type(buffer: bytes, filename: str) -> DataSourceType:
    """
    Detect file type from magic bytes and filename.

    Args:
        buffer: File contents (only the leading bytes are inspected)
        filename: Original filename; its extension is load-bearing

    Returns:
        DataSourceType for the matching adapter

    Raises:
        UnknownFileTypeError: If neither signature nor extension match

    Example:
        >>> detect_file_type(b"%PDF-1.7 ...", "report.bin")
        <DataSourceType.PDF: 'PDF'>
    """
    extension = get_file_extension(filename)
    file_type = _detect_by_signature(buffer, extension)
    source = "signature"

    if file_type is None:
        file_type = EXTENSION_MAP.get(extension)
        source = "extension"

    if file_type is None:
        logger.warning(
            "File type not recognized",
            filename=filename,
            leading_bytes=buffer[:8].hex(),
        )
        raise UnknownFileTypeError(filename)

    logger.debug(
        "File type detected",
        filename=filename,
        file_type=file_type.value,
        detected_by=source,
    )
    return file_type


def _detect_by_signature(buffer: bytes, extension: str) -> DataSourceType | None:
    """Match leading bytes against known signatures."""
    if len(buffer) < MIN_SIGNATURE_LENGTH:
        return None

    if buffer.startswith(PDF_SIGNATURE):
        return DataSourceType.PDF

    if buffer.startswith((ZIP_SIGNATURE, OLE_SIGNATURE)) and extension in SPREADSHEET_EXTENSIONS:
        return DataSourceType.EXCEL

    if buffer.startswith((PNG_SIGNATURE, JPEG_SIGNATURE)):
        return DataSourceType.SCREENSHOT

    return None


class FileTypeDetector:
    """Object wrapper around detect_file_type for injection into services."""

    def detect(self, buffer: bytes, filename: str) -> DataSourceType:
        """Detect file type; see detect_file_type."""
        return detect_file_type(buffer, filename)
