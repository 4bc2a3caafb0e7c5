"""
API Dependencies
================

FastAPI dependency providers. Override in tests via
``app.dependency_overrides``.
"""

from fastapi import Request

from insight_ingest.services.ingestion_service import IngestionService


def get_ingestion_service(request: Request) -> IngestionService:
    """Return the service created for this application instance."""
    return request.app.state.ingestion_service
