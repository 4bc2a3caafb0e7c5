"""
Image Strategy - Screenshot Adapter
===================================

Hands the screenshot to an ImageExtractor and wraps the single
key/value object it returns as a one-row ParsedData.

This is the only adapter that waits on I/O, so it is where the
extraction timeout applies. Any failure, including a timeout, fails the
whole parse; no partial result is returned.

Follows Strategy Pattern: Implements TableNormalizer interface.
"""

import asyncio
import base64
from collections.abc import Mapping

from insight_ingest.ingest.image_extractor import ImageExtractor
from insight_ingest.ingest.table_normalizer import TableNormalizer
from insight_ingest.schemas.domain import ParsedData
from insight_ingest.utils.errors import ImageExtractionError
from insight_ingest.utils.logger import get_logger

logger = get_logger(__name__)


class ImageStrategy(TableNormalizer):
    """Screenshot parsing strategy delegating to an external extractor."""

    def __init__(
        self,
        extractor: ImageExtractor,
        context: str = "",
        timeout: float | None = None,
    ) -> None:
        """
        Initialize image strategy.

        Args:
            extractor: Capability that turns an image into a key/value object
            context: Free-text hint forwarded to the extractor
            timeout: Seconds to wait for the extractor (None = no limit)
        """
        self._extractor = extractor
        self._context = context
        self._timeout = timeout

    @property
    def format_name(self) -> str:
        return "Screenshot"

    @property
    def supported_extensions(self) -> list[str]:
        """Return supported file extensions."""
        return ["png", "jpg", "jpeg"]

    async def parse(self, buffer: bytes) -> ParsedData:
        """
        Extract one record from an image.

        Args:
            buffer: PNG/JPEG file contents

        Returns:
            ParsedData with exactly one row whose keys are the columns

        Raises:
            ImageExtractionError: If the extractor fails, times out or
                returns something other than an object
        """
        if not buffer:
            logger.info("Empty image content")
            return ParsedData.empty()

        image_base64 = base64.b64encode(buffer).decode("ascii")

        try:
            result = await asyncio.wait_for(
                self._extractor.extract(image_base64, self._context),
                timeout=self._timeout,
            )
        except asyncio.TimeoutError as e:
            logger.error("Image extraction timed out", timeout=self._timeout)
            raise ImageExtractionError(
                f"Image extraction timed out after {self._timeout}s",
                details={"timeout": self._timeout},
            ) from e
        except ImageExtractionError:
            raise
        except Exception as e:
            logger.error("Image extraction failed", error=str(e))
            raise ImageExtractionError(str(e)) from e

        if not isinstance(result, Mapping):
            raise ImageExtractionError(
                f"Image extractor returned {type(result).__name__}, expected an object"
            )

        record = {str(key): value for key, value in result.items()}
        data = ParsedData(columns=list(record), rows=[record])

        logger.info("Screenshot parsed", column_count=data.stats.column_count)
        return data
