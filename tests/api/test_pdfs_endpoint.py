"""
Test suite for PDF collection API endpoints.

Tests GET /pdfs and DELETE /pdfs/{id} with FastAPI TestClient.

System role: Verification of PDF library HTTP API endpoints
"""

from datetime import datetime, timezone
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from pdfchat.api.deps import get_document_service
from pdfchat.api.routers.pdfs import router
from pdfchat.application.services.document_service import DeletionReport
from pdfchat.boundary.db.models.document_model import DocumentStatus
from pdfchat.core.exceptions import DocumentNotFoundError


@pytest.fixture
def document_service() -> MagicMock:
    service = MagicMock()
    service.list_documents = AsyncMock(return_value=[
        SimpleNamespace(
            id="doc-2",
            original_name="new.pdf",
            file_size=2048,
            uploaded_at=datetime(2024, 5, 2, tzinfo=timezone.utc),
            status=DocumentStatus.READY,
            processed_pages=3,
            total_pages=3,
        ),
        SimpleNamespace(
            id="doc-1",
            original_name="old.pdf",
            file_size=1024,
            uploaded_at=datetime(2024, 5, 1, tzinfo=timezone.utc),
            status=DocumentStatus.PROCESSING,
            processed_pages=0,
            total_pages=None,
        ),
    ])
    service.delete_document = AsyncMock(return_value=DeletionReport(True, True, True))
    return service


@pytest.fixture
def client(document_service) -> TestClient:
    app = FastAPI()
    app.include_router(router)
    app.dependency_overrides[get_document_service] = lambda: document_service
    return TestClient(app)


class TestListPdfsEndpoint:
    """Test suite for GET /pdfs."""

    def test_list_should_return_summaries_in_service_order(self, client: TestClient) -> None:
        """Test the listing keeps the newest-first order of the service."""
        response = client.get("/pdfs")

        assert response.status_code == 200
        pdfs = response.json()["pdfs"]
        assert [p["docId"] for p in pdfs] == ["doc-2", "doc-1"]
        assert pdfs[0] == {
            "docId": "doc-2",
            "fileName": "new.pdf",
            "fileSize": 2048,
            "uploadedAt": "2024-05-02T00:00:00Z",
            "status": "ready",
            "progress": {"processedPages": 3, "totalPages": 3},
        }
        assert pdfs[1]["progress"] == {"processedPages": 0, "totalPages": None}

    def test_list_should_return_empty_collection(self, client: TestClient, document_service) -> None:
        """Test an empty library returns an empty list."""
        document_service.list_documents.return_value = []

        assert client.get("/pdfs").json() == {"pdfs": []}


class TestDeletePdfEndpoint:
    """Test suite for DELETE /pdfs/{id}."""

    def test_delete_should_return_success(self, client: TestClient, document_service) -> None:
        """Test a complete delete returns success."""
        response = client.delete("/pdfs/doc-1")

        assert response.status_code == 200
        assert response.json() == {"success": True}
        document_service.delete_document.assert_awaited_once_with("doc-1")

    def test_delete_should_return_500_when_any_step_fails(
        self, client: TestClient, document_service
    ) -> None:
        """Test a partial delete is reported as a failure."""
        document_service.delete_document.return_value = DeletionReport(
            blob_deleted=True,
            record_deleted=True,
            vectors_deleted=False,
            errors=["vectors: Vector delete failed"],
        )

        response = client.delete("/pdfs/doc-1")

        assert response.status_code == 500
        assert response.json()["error"] == "DELETE_FAILED"
        assert response.json()["message"] == "vectors: Vector delete failed"

    def test_delete_should_return_404_for_unknown_document(
        self, client: TestClient, document_service
    ) -> None:
        """Test unknown IDs return 404."""
        document_service.delete_document.side_effect = DocumentNotFoundError("missing")

        response = client.delete("/pdfs/missing")

        assert response.status_code == 404
