"""
Тесты HTTP эндпоинтов.
"""

import base64

import pytest
from conftest import vision_block, vision_response
from fastapi.testclient import TestClient

from quote_ocr import main
from quote_ocr.exceptions import BILLING_GUIDANCE_MESSAGE, BillingNotEnabledError, VisionAPIError
from quote_ocr.services import ocr_processor

IMAGE_B64 = base64.b64encode(b"fake jpeg").decode()


@pytest.fixture
def client(monkeypatch, test_settings):
    monkeypatch.setattr(main, "settings", test_settings)
    return TestClient(main.app)


def fake_vision(monkeypatch, response=None, error=None):
    """Подменяет annotate_image: возвращает response или бросает error."""
    calls = []

    async def fake_annotate_image(content, **kwargs):
        calls.append(content)
        if error is not None:
            raise error
        return response

    monkeypatch.setattr(ocr_processor, "annotate_image", fake_annotate_image)
    return calls


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["vision"]["api_key_configured"] is True
    assert "test-key" not in response.text
    assert data["config"]["filter"]["confidence_threshold"] == 0.5


def test_execute_returns_text_and_page_number(client, monkeypatch):
    calls = fake_vision(
        monkeypatch,
        response=vision_response(
            [
                vision_block("책을 읽는 밤.", (100, 300, 800, 1200), 0.9),
                vision_block("42", (450, 1400, 520, 1430), 0.3),
            ]
        ),
    )

    response = client.post(
        "/ocr/execute", json={"image": f"data:image/png;base64,{IMAGE_B64}"}
    )

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["text"] == "책을 읽는 밤."
    assert data["page_number"] == "42"
    assert calls == [IMAGE_B64]
    # Хангыль отдаётся без \uXXXX экранирования
    assert "책을".encode("utf-8") in response.content


def test_execute_no_text_found(client, monkeypatch):
    fake_vision(monkeypatch, response={"responses": [{}]})

    response = client.post("/ocr/execute", json={"image": IMAGE_B64})

    assert response.status_code == 200
    assert response.json()["text"] == ""
    assert response.json()["page_number"] == ""


def test_execute_missing_image(client, monkeypatch):
    calls = fake_vision(monkeypatch, response={})

    response = client.post("/ocr/execute", json={})

    assert response.status_code == 400
    assert response.json()["detail"]["error"] == "image_required"
    assert calls == []


def test_execute_missing_api_key(client, monkeypatch, test_settings):
    monkeypatch.setattr(
        main, "settings", test_settings.model_copy(update={"vision_api_key": None})
    )
    calls = fake_vision(monkeypatch, response={})

    response = client.post("/ocr/execute", json={"image": IMAGE_B64})

    assert response.status_code == 500
    assert response.json()["detail"]["error"] == "missing_api_key"
    assert calls == []


def test_execute_billing_error(client, monkeypatch):
    fake_vision(monkeypatch, error=BillingNotEnabledError())

    response = client.post("/ocr/execute", json={"image": IMAGE_B64})

    assert response.status_code == 403
    detail = response.json()["detail"]
    assert detail["error"] == "billing_not_enabled"
    assert detail["message"] == BILLING_GUIDANCE_MESSAGE


def test_execute_provider_error_keeps_status_and_message(client, monkeypatch):
    fake_vision(monkeypatch, error=VisionAPIError("Quota exceeded.", status_code=429))

    response = client.post("/ocr/execute", json={"image": IMAGE_B64})

    assert response.status_code == 429
    assert response.json()["detail"] == {
        "error": "vision_api_error",
        "message": "Quota exceeded.",
    }


def test_execute_unexpected_error(client, monkeypatch):
    fake_vision(monkeypatch, error=RuntimeError("boom"))

    response = client.post("/ocr/execute", json={"image": IMAGE_B64})

    assert response.status_code == 500
    assert response.json()["detail"]["error"] == "processing_error"
