"""API integration tests for the Cloud Inference service."""

import gzip
import json
from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

from src.api.errors import LLMClientError, LLMServerError
from src.api.models.responses import (
    ClassificationLabel,
    ClassificationResult,
    ClassifyResponse,
    DraftResult,
    SummaryResult,
)
from src.main import app


@pytest.fixture
def client():
    """Create test client."""
    return TestClient(app)


class TestHealthEndpoint:
    """Tests for health check endpoint."""

    def test_health_check(self, client):
        """Test health endpoint reports provider without calling it."""
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["provider"] in ["deepseek", "openai"]
        assert "model" in data
        assert "uptime_seconds" in data

    def test_request_id_is_echoed(self, client):
        response = client.get("/health", headers={"X-Request-ID": "trace-123"})

        assert response.headers["X-Request-ID"] == "trace-123"

    def test_request_id_is_generated(self, client):
        response = client.get("/health")

        assert response.headers["X-Request-ID"]


class TestSummarizeEndpoint:
    """Tests for /summarize endpoint."""

    @patch("src.api.routes.summarize.summarizer")
    def test_summarize_success(self, mock_summarizer, client):
        mock_summarizer.summarize = AsyncMock(
            return_value=SummaryResult(summary="Release moved to Monday.")
        )

        response = client.post("/summarize", content="<p>The release is moving to Monday.</p>")

        assert response.status_code == 200
        assert response.json() == {"summary": "Release moved to Monday."}
        mock_summarizer.summarize.assert_awaited_once_with(
            "<p>The release is moving to Monday.</p>"
        )

    @patch("src.api.routes.summarize.summarizer")
    def test_summarize_gzip_body(self, mock_summarizer, client):
        mock_summarizer.summarize = AsyncMock(return_value=SummaryResult(summary="ok"))

        response = client.post(
            "/summarize",
            content=gzip.compress("Compressed email body".encode("utf-8")),
            headers={"Content-Encoding": "gzip"},
        )

        assert response.status_code == 200
        mock_summarizer.summarize.assert_awaited_once_with("Compressed email body")

    def test_summarize_rejects_blank_body(self, client):
        response = client.post("/summarize", content="   \n")

        assert response.status_code == 400
        data = response.json()
        assert data["error_code"] == "VALIDATION_ERROR"
        assert data["error"] == "Email content is required"

    def test_summarize_rejects_corrupt_gzip(self, client):
        response = client.post(
            "/summarize", content=b"definitely not gzip", headers={"Content-Encoding": "gzip"}
        )

        assert response.status_code == 400
        assert response.json()["error_code"] == "INVALID_REQUEST"

    @patch("src.api.routes.summarize.summarizer")
    def test_summarize_upstream_failure(self, mock_summarizer, client):
        """Test exhausted upstream retries render as a structured 503."""
        mock_summarizer.summarize = AsyncMock(side_effect=LLMServerError(503, "overloaded"))

        response = client.post("/summarize", content="Hello", headers={"X-Request-ID": "req-9"})

        assert response.status_code == 503
        data = response.json()
        assert data["error_code"] == "LLM_PROVIDER_ERROR"
        assert data["request_id"] == "req-9"


class TestDraftEndpoint:
    """Tests for /draft endpoint."""

    @patch("src.api.routes.draft.generator")
    def test_draft_success(self, mock_generator, client):
        mock_generator.generate = AsyncMock(
            return_value=DraftResult(draft="Hi Sam,\n\nMonday works for us.")
        )

        response = client.post("/draft", content="Can we ship on Monday?")

        assert response.status_code == 200
        assert response.json() == {"draft": "Hi Sam,\n\nMonday works for us."}

    @patch("src.api.routes.draft.generator")
    def test_draft_upstream_client_error(self, mock_generator, client):
        mock_generator.generate = AsyncMock(
            side_effect=LLMClientError(
                401, '{"message": "bad key", "code": 401}', api_message="bad key", api_code=401
            )
        )

        response = client.post("/draft", content="Hello")

        assert response.status_code == 502
        assert response.json()["error_code"] == "LLM_CLIENT_ERROR"

    def test_draft_rejects_empty_body(self, client):
        response = client.post("/draft", content="")

        assert response.status_code == 400


class TestClassifyEndpoint:
    """Tests for /classify and /classify/email endpoints."""

    def test_classify_requires_emails(self, client):
        response = client.post("/classify", json={})

        assert response.status_code == 422

    def test_classify_rejects_empty_batch(self, client):
        response = client.post("/classify", json={"emails": []})

        assert response.status_code == 422

    def test_classify_rejects_oversized_batch(self, client):
        emails = [{"id": f"e-{i}", "content": "hello"} for i in range(101)]

        response = client.post("/classify", json={"emails": emails})

        assert response.status_code == 422

    @pytest.mark.parametrize(
        "email",
        [
            {"id": "", "content": "hello"},
            {"id": "   ", "content": "hello"},
            {"id": "e-1", "content": ""},
            {"id": "e-1", "content": " \t"},
            {"id": "e-1"},
        ],
    )
    def test_classify_rejects_invalid_email(self, client, email):
        response = client.post("/classify", json={"emails": [email]})

        assert response.status_code == 422

    @patch("src.api.routes.classify.classifier")
    def test_classify_batch_success(self, mock_classifier, client, sample_emails):
        mock_classifier.classify_batch = AsyncMock(
            return_value=[
                ClassificationResult(
                    id="email-1", labels=[ClassificationLabel(label="finance", score=0.9)]
                ),
                ClassificationResult(id="email-2", labels=[]),
                ClassificationResult(
                    id="email-3", labels=[ClassificationLabel(label="scheduling", score=0.7)]
                ),
            ]
        )

        response = client.post(
            "/classify", json={"emails": [e.model_dump() for e in sample_emails]}
        )

        assert response.status_code == 200
        results = response.json()["results"]
        assert [r["id"] for r in results] == ["email-1", "email-2", "email-3"]
        assert results[1]["labels"] == []
        # Only ids and labels come back, never the email content
        assert all(set(r) == {"id", "labels"} for r in results)

    @patch("src.api.routes.classify.classifier")
    def test_classify_single_email(self, mock_classifier, client):
        mock_classifier.classify = AsyncMock(
            return_value=ClassifyResponse(labels=[ClassificationLabel(label="spam", score=0.97)])
        )

        response = client.post("/classify/email", content="You won a free cruise!")

        assert response.status_code == 200
        assert response.json() == {"labels": [{"label": "spam", "score": 0.97}]}

    @patch("src.api.routes.classify.classifier")
    def test_classify_batch_gzip_body(self, mock_classifier, client):
        mock_classifier.classify_batch = AsyncMock(
            return_value=[ClassificationResult(id="e1", labels=[])]
        )
        payload = json.dumps({"emails": [{"id": "e1", "content": "hello"}]})

        response = client.post(
            "/classify",
            content=gzip.compress(payload.encode("utf-8")),
            headers={"Content-Type": "application/json", "Content-Encoding": "gzip"},
        )

        assert response.status_code == 200
        assert response.json() == {"results": [{"id": "e1", "labels": []}]}
        (emails,), _ = mock_classifier.classify_batch.call_args
        assert [(e.id, e.content) for e in emails] == [("e1", "hello")]

    def test_classify_batch_rejects_corrupt_gzip(self, client):
        response = client.post(
            "/classify",
            content=b"definitely not gzip",
            headers={"Content-Type": "application/json", "Content-Encoding": "gzip"},
        )

        assert response.status_code == 400
        assert response.json()["error_code"] == "INVALID_REQUEST"

    def test_classify_rejects_malformed_json(self, client):
        response = client.post(
            "/classify", content=b"{not json", headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 422
