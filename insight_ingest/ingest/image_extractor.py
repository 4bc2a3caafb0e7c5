"""
Image Extractor Client
======================

Boundary to the external capability that turns a screenshot into a
key/value object. How the remote side does it (vision model prompting)
is out of scope; this module only defines the call shape and an HTTP
client for it.

Request (POST JSON):
    {"image_base64": "<base64>", "context": "<hint>"}

Response:
    JSON object, returned to the caller unchanged.
"""

from typing import Any, Protocol, runtime_checkable

import httpx
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from insight_ingest import __version__
from insight_ingest.config.settings import Settings
from insight_ingest.utils.errors import ImageExtractionError
from insight_ingest.utils.logger import get_logger
from insight_ingest.utils.metrics import record_image_extraction

logger = get_logger(__name__)


@runtime_checkable
class ImageExtractor(Protocol):
    """Anything that can extract structured data from a base64 image."""

    async def extract(self, image_base64: str, context: str) -> dict[str, Any]:
        """Return the key/value data found in the image."""
        ...


class HttpImageExtractor:
    """
    Async HTTP client for the image extraction service.

    Features:
    - Per-call httpx.AsyncClient with read timeout from settings
    - Exponential backoff on connection errors only
    - Non-2xx responses and non-object bodies fail with ImageExtractionError

    Usage:
        extractor = HttpImageExtractor(settings)
        data = await extractor.extract(image_base64, "Q3 ad spend dashboard")
    """

    def __init__(
        self,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize image extractor client.

        Args:
            settings: Application settings (URL, API key, timeout, retries)
            transport: Optional httpx transport, e.g. a MockTransport in tests
        """
        self.url = settings.image_extractor_url
        self.timeout = httpx.Timeout(
            connect=5.0,
            read=settings.image_extractor_timeout,
            write=10.0,
            pool=5.0,
        )
        self.max_retries = settings.image_extractor_max_retries
        self._api_key = settings.image_extractor_api_key
        self._transport = transport
        self._log = logger.bind(service="image-extractor", url=self.url)

    def _headers(self) -> dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "User-Agent": f"insight-ingest/{__version__}",
        }
        if self._api_key:
            headers["Authorization"] = f"Bearer {self._api_key}"
        return headers

    async def extract(self, image_base64: str, context: str) -> dict[str, Any]:
        """
        Send one image to the extraction service.

        Args:
            image_base64: Image bytes, base64 encoded
            context: Free-text hint for the extractor

        Returns:
            Key/value object produced by the service

        Raises:
            ImageExtractionError: On HTTP errors, timeouts or a non-object body
        """
        self._log.info(
            "Image extraction requested",
            image_size=len(image_base64),
            has_context=bool(context),
        )

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                transport=self._transport,
                headers=self._headers(),
            ) as client:
                async for attempt in AsyncRetrying(
                    stop=stop_after_attempt(self.max_retries),
                    wait=wait_exponential(multiplier=1, min=1, max=10),
                    retry=retry_if_exception_type((httpx.ConnectError, httpx.ConnectTimeout)),
                    reraise=True,
                ):
                    with attempt:
                        response = await client.post(
                            self.url,
                            json={"image_base64": image_base64, "context": context},
                        )
        except httpx.TimeoutException as e:
            self._log.error("Image extraction timed out", error=str(e))
            record_image_extraction("timeout")
            raise ImageExtractionError(
                f"Image extraction timed out: {e}", details={"url": self.url}
            ) from e
        except httpx.HTTPError as e:
            self._log.error("Image extraction request failed", error=str(e))
            record_image_extraction("failed")
            raise ImageExtractionError(
                f"Image extraction request failed: {e}", details={"url": self.url}
            ) from e

        if response.status_code >= 400:
            record_image_extraction("failed")
            self._log.error(
                "Image extraction service returned an error",
                status_code=response.status_code,
                body=response.text[:200],
            )
            raise ImageExtractionError(
                f"Image extraction service returned HTTP {response.status_code}",
                details={"url": self.url, "status_code": response.status_code},
            )

        try:
            payload = response.json()
        except ValueError as e:
            record_image_extraction("failed")
            raise ImageExtractionError(
                "Image extraction service returned invalid JSON",
                details={"url": self.url},
            ) from e

        if not isinstance(payload, dict):
            record_image_extraction("failed")
            raise ImageExtractionError(
                f"Image extraction service returned {type(payload).__name__}, expected an object",
                details={"url": self.url},
            )

        record_image_extraction("success")
        self._log.info("Image extraction completed", key_count=len(payload))
        return payload
