"""
API Routes
==========

Route modules for the insight-ingest service.
"""

from insight_ingest.api.routes.ingest import router as ingest_router

__all__ = ["ingest_router"]
