"""
Ingestion Service
==================

Orchestrates the file ingestion pipeline:
1. Materialize the input into one in-memory buffer
2. Detect the file type (signature, then extension)
3. Parse with exactly one adapter
4. Normalize cell values
5. Validate required fields
6. Assemble the IngestionResult

No stage is retried. The first failure aborts the call and surfaces as a
single IngestionError; a partially filled result is never returned.
Calls share no mutable state, so concurrent ingestions need no locking.
"""

import time
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

from insight_ingest.config.settings import Settings, get_settings
from insight_ingest.ingest.file_type_detector import FileTypeDetector
from insight_ingest.ingest.image_extractor import HttpImageExtractor, ImageExtractor
from insight_ingest.ingest.parser_factory import ParserFactory
from insight_ingest.ingest.table_normalizer import TableNormalizer
from insight_ingest.schemas.domain import (
    DataSourceType,
    IngestionMetadata,
    IngestionOptions,
    IngestionResult,
)
from insight_ingest.services.data_normalizer import DataNormalizer
from insight_ingest.services.field_validator import FieldValidator
from insight_ingest.utils.errors import IngestionError
from insight_ingest.utils.file_reader import read_input, validate_file_size
from insight_ingest.utils.logger import get_logger
from insight_ingest.utils.metrics import (
    INGESTIONS_IN_PROGRESS,
    record_error,
    record_ingestion,
    record_stage_duration,
)

logger = get_logger(__name__)


class IngestionService:
    """
    Service for orchestrating file ingestion.

    Collaborators are injected so callers control configuration
    explicitly; only missing ones fall back to defaults built from
    ``settings``.

    Usage:
        service = IngestionService(settings=Settings())
        result = await service.ingest(
            upload_bytes,
            "q3_revenue.xlsx",
            options=IngestionOptions(required_fields=["month", "revenue"]),
        )

        if not result.validation.is_valid:
            for issue in result.validation.errors:
                ...
    """

    def __init__(
        self,
        settings: Settings | None = None,
        image_extractor: ImageExtractor | None = None,
        detector: FileTypeDetector | None = None,
        normalizer: DataNormalizer | None = None,
        validator: FieldValidator | None = None,
    ) -> None:
        """
        Initialize ingestion service.

        Args:
            settings: Application settings (defaults to get_settings())
            image_extractor: Screenshot extraction capability
                (defaults to HttpImageExtractor(settings))
            detector: File type detector
            normalizer: Cell value normalizer
            validator: Required-field validator
        """
        self._settings = settings or get_settings()
        self._image_extractor = image_extractor or HttpImageExtractor(self._settings)
        self._detector = detector or FileTypeDetector()
        self._normalizer = normalizer or DataNormalizer()
        self._validator = validator or FieldValidator()
        logger.debug("IngestionService initialized")

    async def ingest(
        self,
        file: Any,
        filename: str,
        context: str | None = None,
        options: IngestionOptions | Mapping[str, Any] | None = None,
    ) -> IngestionResult:
        """
        Run the complete pipeline for one file.

        Args:
            file: Bytes, a path, or a sync/async file-like object
            filename: Original filename (its extension is load-bearing)
            context: Free-text hint for the screenshot extractor
            options: IngestionOptions or an equivalent mapping

        Returns:
            Fully populated IngestionResult

        Raises:
            IngestionError: Wrapping the first failure of any stage
        """
        log = logger.bind(filename=filename)
        stage = "read"
        file_type: DataSourceType | None = None
        started = time.perf_counter()
        INGESTIONS_IN_PROGRESS.inc()

        try:
            opts = (
                options
                if isinstance(options, IngestionOptions)
                else IngestionOptions.model_validate(options or {})
            )

            buffer = await read_input(file)
            validate_file_size(buffer, self._settings.max_file_size_bytes, filename)

            stage = "detect"
            file_type = self._detector.detect(buffer, filename)
            log = log.bind(file_type=file_type.value)
            log.info("Ingestion started", file_size_bytes=len(buffer))

            stage = "parse"
            parser = self._create_parser(file_type, context, opts)
            parse_started = time.perf_counter()
            parsed = await parser.parse(buffer)
            record_stage_duration("parse", time.perf_counter() - parse_started)

            stage = "normalize"
            normalized = self._normalizer.normalize(parsed.rows, opts.target_schema)

            stage = "validate"
            validation = self._validator.validate(normalized, opts.required_fields)

            stage = "assemble"
            result = IngestionResult(
                data=parsed,
                file_type=file_type,
                validation=validation,
                normalized=normalized,
                metadata=IngestionMetadata(
                    filename=filename,
                    file_type=file_type,
                    uploaded_at=datetime.now(timezone.utc),
                    row_count=parsed.stats.row_count,
                    column_count=parsed.stats.column_count,
                ),
            )

        except Exception as e:
            log.error(
                "Ingestion failed",
                stage=stage,
                error_type=type(e).__name__,
                error=getattr(e, "message", str(e)),
            )
            record_error(type(e).__name__, stage)
            record_ingestion(
                file_type=file_type.value if file_type else "unknown",
                status="failed",
                rows=0,
                validation_errors=0,
                duration_seconds=time.perf_counter() - started,
            )
            raise IngestionError(e, stage=stage, filename=filename) from e
        finally:
            INGESTIONS_IN_PROGRESS.dec()

        record_ingestion(
            file_type=file_type.value,
            status="success",
            rows=parsed.stats.row_count,
            validation_errors=len(validation.errors),
            duration_seconds=time.perf_counter() - started,
        )
        log.info(
            "Ingestion complete",
            row_count=parsed.stats.row_count,
            column_count=parsed.stats.column_count,
            is_valid=validation.is_valid,
            error_count=len(validation.errors),
            warnings=validation.warnings,
        )
        return result

    def _create_parser(
        self,
        file_type: DataSourceType,
        context: str | None,
        options: IngestionOptions,
    ) -> TableNormalizer:
        """Build the adapter for file_type with caller-supplied options."""
        kwargs = dict(options.parser_options)

        if file_type is DataSourceType.SCREENSHOT:
            hint = options.file_context if options.file_context is not None else context
            kwargs.setdefault("extractor", self._image_extractor)
            kwargs.setdefault("context", hint or "")
            kwargs.setdefault("timeout", self._settings.image_extractor_timeout)

        return ParserFactory.create(file_type, **kwargs)


async def ingest_file(
    file: Any,
    filename: str,
    context: str | None = None,
    options: IngestionOptions | Mapping[str, Any] | None = None,
    settings: Settings | None = None,
) -> IngestionResult:
    """
    Convenience function running one ingestion with a fresh service.

    Args:
        file: Bytes, a path, or a sync/async file-like object
        filename: Original filename
        context: Free-text hint for the screenshot extractor
        options: IngestionOptions or an equivalent mapping
        settings: Optional explicit settings

    Returns:
        IngestionResult
    """
    service = IngestionService(settings=settings)
    return await service.ingest(file, filename, context=context, options=options)
