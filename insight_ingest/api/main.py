"""
FastAPI Application Entry Point
===============================

Main FastAPI application with health check, request logging,
Prometheus metrics and error handling.
"""

import time
from typing import Any
from uuid import uuid4

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from insight_ingest import __version__
from insight_ingest.config.settings import Settings, get_settings
from insight_ingest.services.ingestion_service import IngestionService
from insight_ingest.utils.errors import InsightIngestError
from insight_ingest.utils.logger import configure_logging, get_logger
from insight_ingest.utils.metrics import get_metrics_app

logger = get_logger(__name__)


def create_app(
    settings: Settings | None = None,
    service: IngestionService | None = None,
) -> FastAPI:
    """
    FastAPI application factory.

    Args:
        settings: Explicit settings (defaults to get_settings())
        service: Pre-built IngestionService (defaults to one built from settings)

    Returns:
        Configured FastAPI application instance
    """
    settings = settings or get_settings()
    configure_logging(settings=settings)

    app = FastAPI(
        title="Insight Ingest API",
        description=(
            "Turns uploaded business documents (spreadsheets, PDFs, screenshots, "
            "JSON) into a canonical table with typed values and "
            "required-field diagnostics."
        ),
        version=__version__,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        openapi_url="/openapi.json" if settings.is_development else None,
    )
    app.state.ingestion_service = service or IngestionService(settings=settings)

    # -------------------------------------------------------------------------
    # Request Logging Middleware
    # -------------------------------------------------------------------------
    @app.middleware("http")
    async def log_requests(request: Request, call_next: Any) -> Any:
        """
        Log all incoming requests with timing and correlation ID.

        Adds X-Request-ID header for tracing and X-Process-Time header
        with request duration in seconds.
        """
        request_id = str(uuid4())
        start_time = time.perf_counter()

        logger.info(
            "Request received",
            request_id=request_id,
            method=request.method,
            path=str(request.url.path),
        )

        response = await call_next(request)

        process_time = time.perf_counter() - start_time
        response.headers["X-Request-ID"] = request_id
        response.headers["X-Process-Time"] = f"{process_time:.4f}"

        logger.info(
            "Request completed",
            request_id=request_id,
            method=request.method,
            path=str(request.url.path),
            status_code=response.status_code,
            duration_ms=round(process_time * 1000, 2),
        )

        return response

    # -------------------------------------------------------------------------
    # Exception Handlers
    # -------------------------------------------------------------------------
    @app.exception_handler(InsightIngestError)
    async def insight_ingest_error_handler(
        request: Request, exc: InsightIngestError
    ) -> JSONResponse:
        """Handle pipeline errors; the message is user-facing as-is."""
        logger.error(
            "Application error",
            error_type=type(exc).__name__,
            message=exc.message,
            details=exc.details,
            path=str(request.url),
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "error": type(exc).__name__,
                "message": exc.message,
                "details": exc.details,
            },
        )

    # -------------------------------------------------------------------------
    # Health Check Endpoint
    # -------------------------------------------------------------------------
    @app.get(
        "/health",
        tags=["Health"],
        summary="Health check endpoint",
        response_model=dict[str, Any],
    )
    async def health_check() -> dict[str, Any]:
        """Report service liveness and version."""
        return {
            "status": "healthy",
            "version": __version__,
            "service": "insight-ingest",
        }

    @app.get(
        "/",
        tags=["Info"],
        summary="API information",
    )
    async def api_info() -> dict[str, str]:
        """Return basic API information."""
        return {
            "service": "insight-ingest",
            "version": __version__,
            "description": "Document ingestion and normalization pipeline",
            "docs": "/docs",
        }

    # -------------------------------------------------------------------------
    # Register Routers
    # -------------------------------------------------------------------------
    from insight_ingest.api.routes import ingest_router

    app.include_router(ingest_router, prefix="/ingest", tags=["Ingest"])

    # Prometheus scrape endpoint
    app.mount("/metrics", get_metrics_app())

    return app


def run() -> None:
    """Serve the API with uvicorn using configured host/port."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(create_app(settings), host=settings.api_host, port=settings.api_port)
