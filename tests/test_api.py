from collections.abc import Generator
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from ledger_brain.app import app
from ledger_brain.models import BulkParseResult, ExtractedTransaction


@pytest.fixture
def client(monkeypatch: pytest.MonkeyPatch) -> Generator[TestClient, None, None]:
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    monkeypatch.delenv("OPENAI_BASE_URL", raising=False)
    with TestClient(app) as test_client:
        yield test_client


def test_validate_endpoint(client: TestClient) -> None:
    response = client.post("/validate", json={"text": "Coffee 25 SAR"})
    assert response.status_code == 200
    assert response.json() == {
        "isValid": True,
        "reason": None,
        "confidence": "high",
        "suggestedCategory": "Food & Dining",
    }


def test_validate_endpoint_rejects_otp(client: TestClient) -> None:
    response = client.post("/validate", json={"text": "Your OTP is 4821"})
    data = response.json()
    assert data["isValid"] is False
    assert data["confidence"] == "high"
    assert "security message" in data["reason"]


def test_validate_requires_text(client: TestClient) -> None:
    response = client.post("/validate", json={})
    assert response.status_code == 422


def test_parse_endpoint(client: TestClient) -> None:
    text = "You have received SAR 500 salary"
    response = client.post("/parse", json={"text": text})
    assert response.status_code == 200
    data = response.json()
    assert data["amount"] == 500
    assert data["currency"] == "SAR"
    assert data["direction"] == "in"
    assert data["merchant"] is None
    assert data["rawText"] == text


def test_parse_endpoint_invalid_returns_null(client: TestClient) -> None:
    response = client.post("/parse", json={"text": "hi"})
    assert response.status_code == 200
    assert response.json() is None


def test_analyze_endpoint_local_fallback(client: TestClient) -> None:
    response = client.post("/analyze", json={
        "text": "Coffee 25 SAR",
        "currentDateTime": "2026-01-04T10:00:00",
        "customCategories": ["Coffee Runs"],
    })
    assert response.status_code == 200
    data = response.json()
    assert data["error"] is None
    assert len(data["transactions"]) == 1
    tx = data["transactions"][0]
    assert tx["amount"] == 25
    assert tx["category"] == "Food & Dining"
    assert tx["transaction_datetime"] == "2026-01-04T10:00:00"
    assert tx["source"] == "local"


def test_analyze_endpoint_invalid_input(client: TestClient) -> None:
    response = client.post("/analyze", json={"text": "Big sale today only"})
    data = response.json()
    assert data["transactions"] == []
    assert data["error"] == "Invalid input"
    assert "promotional" in data["reason"]


def test_analyze_endpoint_uses_llm_when_enabled(client: TestClient) -> None:
    service = app.state.service
    llm = MagicMock()
    llm.parse.return_value = BulkParseResult(transactions=[
        ExtractedTransaction(
            amount=45,
            category="Transportation",
            merchant="Uber",
            transaction_datetime="2026-01-03T00:00:00",
            source="llm",
        ),
        ExtractedTransaction(
            amount=30,
            category="Food & Dining",
            merchant="Starbucks",
            transaction_datetime="2026-01-03T00:00:00",
            source="llm",
        ),
    ])
    service.llm = llm

    response = client.post("/analyze", json={"text": "Uber 45 SAR, Starbucks 30 yesterday"})

    assert response.status_code == 200
    data = response.json()
    assert [tx["merchant"] for tx in data["transactions"]] == ["Uber", "Starbucks"]
    llm.parse.assert_called_once()


def test_categories_endpoint(client: TestClient) -> None:
    response = client.get("/categories")
    assert response.status_code == 200
    categories = response.json()
    assert categories[0] == "Food & Dining"
    assert categories[-1] == "Other"


def test_health_endpoint(client: TestClient) -> None:
    response = client.get("/health")
    assert response.json() == {"status": "ok", "ai_enabled": False}


def test_missing_service_returns_500() -> None:
    had_service = hasattr(app.state, "service")
    original_service = getattr(app.state, "service", None)
    if had_service:
        delattr(app.state, "service")
    try:
        response = TestClient(app).post("/validate", json={"text": "Coffee 25 SAR"})
        assert response.status_code == 500
        assert response.json()["detail"] == "Service not initialized"
    finally:
        if had_service:
            app.state.service = original_service
