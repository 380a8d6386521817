"""Unit tests for the receipt verification API.

Tests cover:
- Health check endpoints
- Receipt extraction endpoint
- Receipt verification from HTML, receipt number and URL
- Error mapping for missing sources, retrieval and markup failures
- Prometheus metrics endpoint
"""

from decimal import Decimal
from unittest.mock import patch

import pytest
from fastapi import status
from fastapi.testclient import TestClient

from receipt_verifier.api.main import app
from receipt_verifier.loader.client import ReceiptRetrievalError


@pytest.fixture
def client() -> TestClient:
    """Create test client."""
    return TestClient(app)


def test_health_check(client: TestClient) -> None:
    """Test health check endpoint."""
    response = client.get("/health")

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["status"] == "healthy"
    assert "version" in data
    assert "service" in data


def test_readiness_check(client: TestClient) -> None:
    """Test readiness check endpoint."""
    response = client.get("/ready")

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["ready"] is True


def test_extract_receipt(client: TestClient, slash_receipt_html: str) -> None:
    """Test extracting fields from submitted HTML."""
    response = client.post("/api/v1/receipts/extract", json={"html": slash_receipt_html})

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["strategy"] == "fallback"
    assert data["fields"]["receiptNo"] == "FT25ABC123"
    assert data["fields"]["payer_name"] == "Abebe Kebede Tesfaye"
    assert Decimal(data["fields"]["total_amount"]) == Decimal("1234.5")
    assert data["fields"]["bank_acc_no"] is None


def test_extract_unrecognized_document(client: TestClient) -> None:
    """Test that an unrecognized document is not an error."""
    response = client.post("/api/v1/receipts/extract", json={"html": "<p>hello</p>"})

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["fields"]["receiptNo"] is None


def test_extract_requires_html(client: TestClient) -> None:
    """Test that the html field is required."""
    response = client.post("/api/v1/receipts/extract", json={})

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_verify_from_html(client: TestClient, slash_receipt_html: str) -> None:
    """Test verifying submitted HTML against expected values."""
    response = client.post(
        "/api/v1/receipts/verify",
        json={
            "html": slash_receipt_html,
            "expected": {"receiptNo": "FT25ABC123", "total_amount": 1234.5, "payer_name": "x"},
            "exclude": ["payer_name"],
        },
    )

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["verified"] is True
    assert data["fields"]["receiptNo"] == "FT25ABC123"


def test_verify_rejects_mismatch(client: TestClient, slash_receipt_html: str) -> None:
    """Test that an amount sent as a string does not match a parsed number."""
    response = client.post(
        "/api/v1/receipts/verify",
        json={"html": slash_receipt_html, "expected": {"total_amount": "1234.5"}},
    )

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["verified"] is False


def test_verify_only_selected_fields(client: TestClient, combined_receipt_html: str) -> None:
    """Test verify with an explicit field selection."""
    response = client.post(
        "/api/v1/receipts/verify",
        json={
            "html": combined_receipt_html,
            "expected": {"to": "John Doe", "bank_acc_no": "1000123456", "date": "wrong"},
            "only": ["to", "bank_acc_no"],
        },
    )

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["verified"] is True


def test_verify_fetches_by_receipt_number(client: TestClient, slash_receipt_html: str) -> None:
    """Test that a receipt number is fetched through the loader."""
    with patch("receipt_verifier.api.main.receipt_loader.load") as mock_load:
        mock_load.return_value = slash_receipt_html

        response = client.post(
            "/api/v1/receipts/verify",
            json={"receipt_no": "FT25ABC123", "expected": {"receiptNo": "FT25ABC123"}},
        )

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["verified"] is True
    mock_load.assert_called_once_with(receipt_no="FT25ABC123", url=None)


def test_verify_retrieval_failure(client: TestClient) -> None:
    """Test that retrieval failures map to 502."""
    with patch("receipt_verifier.api.main.receipt_loader.load") as mock_load:
        mock_load.side_effect = ReceiptRetrievalError(
            "failed to fetch receipt: status code 404", status_code=404
        )

        response = client.post(
            "/api/v1/receipts/verify",
            json={"url": "https://example.com/receipt/x", "expected": {}},
        )

    assert response.status_code == status.HTTP_502_BAD_GATEWAY
    assert "status code 404" in response.json()["detail"]


def test_verify_without_source(client: TestClient) -> None:
    """Test that a request without html, receipt_no or url is rejected."""
    response = client.post("/api/v1/receipts/verify", json={"expected": {"to": "John Doe"}})

    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_verify_empty_receipt_fails(client: TestClient) -> None:
    """Test that a receipt yielding no fields never verifies."""
    with patch("receipt_verifier.api.main.extractor.extract", return_value={}):
        response = client.post(
            "/api/v1/receipts/verify", json={"html": "<p></p>", "expected": {}}
        )

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["verified"] is False


def test_malformed_markup_returns_422(client: TestClient) -> None:
    """Test that unparsable markup maps to 422."""
    with patch("receipt_verifier.api.main.receipt_loader.load", return_value=b"\xff\xfe"):
        response = client.post(
            "/api/v1/receipts/verify", json={"receipt_no": "FT1", "expected": {}}
        )

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    assert "Malformed receipt markup" in response.json()["detail"]


def test_metrics_endpoint(client: TestClient, slash_receipt_html: str) -> None:
    """Test Prometheus metrics endpoint."""
    client.post("/api/v1/receipts/extract", json={"html": slash_receipt_html})
    response = client.get("/metrics")

    assert response.status_code == status.HTTP_200_OK
    assert "receipt_extractions_total" in response.text
    assert "http_requests_total" in response.text
