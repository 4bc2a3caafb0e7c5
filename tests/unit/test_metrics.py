"""
Unit Tests for Ingestion Metrics
================================
"""

import pytest
from prometheus_client import REGISTRY

from insight_ingest.services.ingestion_service import IngestionService
from insight_ingest.utils.errors import IngestionError


def _sample(name: str, labels: dict[str, str]) -> float:
    return REGISTRY.get_sample_value(name, labels) or 0.0


class TestIngestionMetrics:
    """Counters updated by the orchestrator."""

    @pytest.mark.asyncio
    async def test_success_counted(self, ingestion_service: IngestionService) -> None:
        """Files and rows are counted per type."""
        files_before = _sample(
            "insight_ingest_files_processed_total", {"file_type": "JSON", "status": "success"}
        )
        rows_before = _sample("insight_ingest_rows_processed_total", {"file_type": "JSON"})

        await ingestion_service.ingest(b'[{"a": 1}, {"a": 2}]', "rows.json")

        assert _sample(
            "insight_ingest_files_processed_total", {"file_type": "JSON", "status": "success"}
        ) == files_before + 1
        assert _sample("insight_ingest_rows_processed_total", {"file_type": "JSON"}) == rows_before + 2

    @pytest.mark.asyncio
    async def test_failure_counted(self, ingestion_service: IngestionService) -> None:
        """Failures are counted by error type and stage."""
        labels = {"error_type": "UnknownFileTypeError", "stage": "detect"}
        before = _sample("insight_ingest_errors_total", labels)

        with pytest.raises(IngestionError):
            await ingestion_service.ingest(b"hello", "notes.txt")

        assert _sample("insight_ingest_errors_total", labels) == before + 1
        assert _sample("insight_ingest_in_progress", {}) == 0
