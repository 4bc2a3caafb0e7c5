"""
Prometheus Metrics
==================

Counters and histograms for the ingestion pipeline, exposed through the
/metrics endpoint of the HTTP API for Prometheus scraping.

Usage:
    from insight_ingest.utils.metrics import record_ingestion, record_error

    record_ingestion(file_type="CSV", status="success", rows=120,
                     validation_errors=3, duration_seconds=0.42)
    record_error(error_type="ParseError", stage="parse")
"""

from prometheus_client import Counter, Gauge, Histogram

# =============================================================================
# Metric Definitions
# =============================================================================

FILES_PROCESSED = Counter(
    "insight_ingest_files_processed_total",
    "Total files ingested",
    ["file_type", "status"],  # status: success, failed
)

ROWS_PROCESSED = Counter(
    "insight_ingest_rows_processed_total",
    "Total rows produced by parsing adapters",
    ["file_type"],
)

VALIDATION_ERRORS = Counter(
    "insight_ingest_validation_errors_total",
    "Total required-field violations reported",
    ["file_type"],
)

ERRORS_TOTAL = Counter(
    "insight_ingest_errors_total",
    "Total ingestion failures by error type and stage",
    ["error_type", "stage"],
)

PROCESSING_TIME = Histogram(
    "insight_ingest_processing_seconds",
    "Processing time in seconds per stage",
    ["stage"],  # stage: parse, total
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0, float("inf")],
)

INGESTIONS_IN_PROGRESS = Gauge(
    "insight_ingest_in_progress",
    "Number of ingestions currently running",
)

IMAGE_EXTRACTION_REQUESTS = Counter(
    "insight_ingest_image_extraction_requests_total",
    "Requests made to the image extraction service",
    ["status"],  # status: success, failed, timeout
)


# =============================================================================
# Helper Functions
# =============================================================================

def record_ingestion(
    file_type: str,
    status: str,
    rows: int,
    validation_errors: int,
    duration_seconds: float,
) -> None:
    """
    Record the outcome of one ingestion call.

    Args:
        file_type: DataSourceType value, or "unknown" if detection failed
        status: success or failed
        rows: Rows produced by the adapter
        validation_errors: Required-field violations reported
        duration_seconds: Wall time of the whole call
    """
    FILES_PROCESSED.labels(file_type=file_type, status=status).inc()
    if rows:
        ROWS_PROCESSED.labels(file_type=file_type).inc(rows)
    if validation_errors:
        VALIDATION_ERRORS.labels(file_type=file_type).inc(validation_errors)
    PROCESSING_TIME.labels(stage="total").observe(duration_seconds)


def record_stage_duration(stage: str, duration_seconds: float) -> None:
    """Record duration for a single pipeline stage."""
    PROCESSING_TIME.labels(stage=stage).observe(duration_seconds)


def record_error(error_type: str, stage: str) -> None:
    """
    Record an ingestion failure.

    Args:
        error_type: Exception class name of the original failure
        stage: Pipeline stage that failed
    """
    ERRORS_TOTAL.labels(error_type=error_type, stage=stage).inc()


def record_image_extraction(status: str) -> None:
    """Record one image extraction request (success, failed, timeout)."""
    IMAGE_EXTRACTION_REQUESTS.labels(status=status).inc()


# =============================================================================
# Metric Endpoint Setup
# =============================================================================

def get_metrics_app():
    """
    Get ASGI app for /metrics endpoint.

    Returns:
        ASGI application that serves Prometheus metrics
    """
    from prometheus_client import make_asgi_app

    return make_asgi_app()
