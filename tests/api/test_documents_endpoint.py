"""
Test suite for per-document API endpoints.

Tests GET /doc/{id}/status, /doc/{id}/file and /doc/{id}/suggestions with
FastAPI TestClient and mocked services.

System role: Verification of document HTTP API endpoints
"""

from datetime import datetime, timezone
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from pdfchat.api.deps import get_document_service, get_suggestion_service
from pdfchat.api.routers.documents import router
from pdfchat.boundary.db.models.document_model import DocumentStatus
from pdfchat.core.exceptions import DocumentNotFoundError, ErrorKind, GenerationError


@pytest.fixture
def document() -> SimpleNamespace:
    return SimpleNamespace(
        id="doc-1",
        original_name="report.pdf",
        uploaded_at=datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc),
        status=DocumentStatus.PROCESSING,
        processed_pages=0,
        total_pages=12,
        error=None,
    )


@pytest.fixture
def document_service(document) -> MagicMock:
    service = MagicMock()
    service.get_document = AsyncMock(return_value=document)
    service.get_file_url = AsyncMock(return_value="https://signed.example/pdfs/doc-1.pdf?sig=abc")
    return service


@pytest.fixture
def suggestion_service() -> MagicMock:
    service = MagicMock()
    service.generate = AsyncMock(return_value=["What is A?", "What is B?", "What is C?"])
    return service


@pytest.fixture
def client(document_service, suggestion_service) -> TestClient:
    app = FastAPI()
    app.include_router(router)
    app.dependency_overrides[get_document_service] = lambda: document_service
    app.dependency_overrides[get_suggestion_service] = lambda: suggestion_service
    return TestClient(app)


class TestDocumentStatusEndpoint:
    """Test suite for GET /doc/{id}/status."""

    def test_status_should_report_progress_and_meta(self, client: TestClient) -> None:
        """Test status body uses camelCase fields."""
        response = client.get("/doc/doc-1/status")

        assert response.status_code == 200
        assert response.json() == {
            "status": "processing",
            "progress": {"processedPages": 0, "totalPages": 12},
            "error": None,
            "meta": {"originalName": "report.pdf", "uploadedAt": "2024-05-01T12:00:00Z"},
        }

    def test_status_should_include_error_message(self, client: TestClient, document) -> None:
        """Test failed documents expose their error."""
        document.status = DocumentStatus.ERROR
        document.error = "Failed to parse PDF"

        body = client.get("/doc/doc-1/status").json()

        assert body["status"] == "error"
        assert body["error"] == "Failed to parse PDF"

    def test_status_should_return_404_for_unknown_document(
        self, client: TestClient, document_service
    ) -> None:
        """Test unknown IDs return 404."""
        document_service.get_document.side_effect = DocumentNotFoundError("missing")

        response = client.get("/doc/missing/status")

        assert response.status_code == 404
        assert response.json()["kind"] == "not_found"


class TestDocumentFileEndpoint:
    """Test suite for GET /doc/{id}/file."""

    def test_file_should_redirect_to_presigned_url(self, client: TestClient) -> None:
        """Test the endpoint answers with a 302 to the signed URL."""
        response = client.get("/doc/doc-1/file", follow_redirects=False)

        assert response.status_code == 302
        assert response.headers["location"] == "https://signed.example/pdfs/doc-1.pdf?sig=abc"

    def test_file_should_return_404_for_unknown_document(
        self, client: TestClient, document_service
    ) -> None:
        """Test unknown IDs return 404 instead of redirecting."""
        document_service.get_file_url.side_effect = DocumentNotFoundError("missing")

        response = client.get("/doc/missing/file", follow_redirects=False)

        assert response.status_code == 404


class TestDocumentSuggestionsEndpoint:
    """Test suite for GET /doc/{id}/suggestions."""

    def test_suggestions_should_return_three_questions(
        self, client: TestClient, suggestion_service
    ) -> None:
        """Test suggestions are returned for a known document."""
        response = client.get("/doc/doc-1/suggestions")

        assert response.status_code == 200
        assert response.json() == {"suggestions": ["What is A?", "What is B?", "What is C?"]}
        suggestion_service.generate.assert_awaited_once_with("doc-1")

    def test_suggestions_should_return_404_for_unknown_document(
        self, client: TestClient, document_service, suggestion_service
    ) -> None:
        """Test the model is never called for unknown IDs."""
        document_service.get_document.side_effect = DocumentNotFoundError("missing")

        response = client.get("/doc/missing/suggestions")

        assert response.status_code == 404
        suggestion_service.generate.assert_not_awaited()

    def test_suggestions_should_return_500_when_generation_fails(
        self, client: TestClient, suggestion_service
    ) -> None:
        """Test generation failures map to 500 with their kind."""
        suggestion_service.generate.side_effect = GenerationError(
            "Model overloaded", kind=ErrorKind.OVERLOADED
        )

        response = client.get("/doc/doc-1/suggestions")

        assert response.status_code == 500
        assert response.json() == {
            "error": "SUGGESTIONS_FAILED",
            "message": "Model overloaded",
            "kind": "overloaded",
        }
