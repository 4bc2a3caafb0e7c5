"""
Ingest Routes Integration Tests
===============================

Tests for POST /ingest/file and the service endpoints, using a
service wired to a fake image extractor.
"""

from typing import Any

import pytest
from fastapi import FastAPI, status
from fastapi.testclient import TestClient

from insight_ingest.api.main import create_app
from insight_ingest.config.settings import Settings
from insight_ingest.services.ingestion_service import IngestionService


@pytest.fixture
def app(settings: Settings, ingestion_service: IngestionService) -> FastAPI:
    """Create FastAPI app instance."""
    return create_app(settings=settings, service=ingestion_service)


@pytest.fixture
def client(app: FastAPI):
    """Create FastAPI test client."""
    with TestClient(app) as client:
        yield client


class TestServiceEndpoints:
    """Health and info."""

    def test_health(self, client: TestClient) -> None:
        """Liveness probe."""
        response = client.get("/health")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["status"] == "healthy"
        assert response.json()["service"] == "insight-ingest"

    def test_info(self, client: TestClient) -> None:
        """Root describes the service."""
        response = client.get("/")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["docs"] == "/docs"

    def test_request_headers(self, client: TestClient) -> None:
        """Middleware adds tracing headers."""
        response = client.get("/health")

        assert response.headers["X-Request-ID"]
        assert float(response.headers["X-Process-Time"]) >= 0


class TestIngestFile:
    """POST /ingest/file."""

    def test_csv_upload(self, client: TestClient, csv_bytes: bytes) -> None:
        """Uploaded CSV returns the full result."""
        response = client.post(
            "/ingest/file",
            files={"file": ("sales.csv", csv_bytes, "text/csv")},
        )

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["file_type"] == "CSV"
        assert body["data"]["columns"] == ["header_a", "header_b"]
        assert body["normalized"][0] == {"header_a": 1.0, "header_b": 2.0}
        assert body["metadata"]["filename"] == "sales.csv"
        assert body["validation"]["is_valid"] is True

    def test_required_fields_form(self, client: TestClient, csv_bytes: bytes) -> None:
        """Comma-separated required fields are validated."""
        response = client.post(
            "/ingest/file",
            files={"file": ("sales.csv", csv_bytes, "text/csv")},
            data={"required_fields": "header_a, total"},
        )

        body = response.json()
        assert response.status_code == status.HTTP_200_OK
        assert body["validation"]["is_valid"] is False
        assert {e["field"] for e in body["validation"]["errors"]} == {"total"}

    def test_screenshot_context(
        self, client: TestClient, fake_extractor: Any, png_bytes: bytes
    ) -> None:
        """file_context is forwarded to the extractor."""
        response = client.post(
            "/ingest/file",
            files={"file": ("shot.png", png_bytes, "image/png")},
            data={"context": "generic", "file_context": "Meta Ads"},
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["file_type"] == "SCREENSHOT"
        assert fake_extractor.calls[0][1] == "Meta Ads"

    def test_unknown_type_is_400(self, client: TestClient) -> None:
        """Pipeline failures render as a JSON error body."""
        response = client.post(
            "/ingest/file",
            files={"file": ("notes.txt", b"hello", "text/plain")},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        body = response.json()
        assert body["error"] == "IngestionError"
        assert body["message"] == "File ingestion failed: Unknown file type: notes.txt"
        assert body["details"]["stage"] == "detect"

    def test_missing_file_is_422(self, client: TestClient) -> None:
        """The file part is mandatory."""
        response = client.post("/ingest/file", data={"context": "x"})

        assert response.status_code == 422


class TestMetrics:
    """Prometheus endpoint."""

    def test_metrics_exposed(self, client: TestClient, csv_bytes: bytes) -> None:
        """Ingestion counters appear after an upload."""
        client.post("/ingest/file", files={"file": ("sales.csv", csv_bytes, "text/csv")})

        response = client.get("/metrics/")

        assert response.status_code == status.HTTP_200_OK
        assert "insight_ingest_files_processed_total" in response.text
        assert 'file_type="CSV"' in response.text
