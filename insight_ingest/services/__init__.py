"""
Services Package
================

Pipeline stages after parsing, and the orchestrator that sequences them.
"""

from insight_ingest.services.data_normalizer import DataNormalizer, normalize_value
from insight_ingest.services.field_validator import FieldValidator
from insight_ingest.services.ingestion_service import IngestionService, ingest_file

__all__ = [
    "DataNormalizer",
    "FieldValidator",
    "IngestionService",
    "ingest_file",
    "normalize_value",
]
