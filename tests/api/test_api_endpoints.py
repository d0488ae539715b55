"""Tests for the HTTP API."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from api import letters
from api.main import app, status_code_for
from core.exceptions import (
    ConfigurationError,
    ContentQualityError,
    GenerationTimeoutError,
    ServiceError,
    StructuralError,
)
from letter_factory import DemandLetterFactory

LETTER_FIELDS = {
    "client_name": "Jane Smith",
    "defendant_name": "Acme Logistics, Inc.",
    "incident_date": "2024-01-15",
    "demand_amount": 74000,
}


@pytest.fixture
def client(monkeypatch, fake_llm):
    """Test client whose letter factory uses the fake LLM."""
    monkeypatch.setattr("api.main.DemandLetterFactory", lambda: DemandLetterFactory(client=fake_llm))
    letters.limiter.reset()
    with TestClient(app) as test_client:
        yield test_client
    letters.configure_factory(None)


class TestSystemEndpoints:
    def test_health(self, client: TestClient) -> None:
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}
        assert response.headers["X-Request-ID"]
        assert response.headers["X-Content-Type-Options"] == "nosniff"

    def test_request_id_is_echoed(self, client: TestClient) -> None:
        response = client.get("/health", headers={"X-Request-ID": "req-123"})
        assert response.headers["X-Request-ID"] == "req-123"

    def test_readiness(self, client: TestClient) -> None:
        data = client.get("/health/ready").json()

        assert data["status"] == "ready"
        assert data["checks"] == {"letter_factory": True, "llm_credentials": True}


class TestTemplateEndpoints:
    def test_list_variables(self, client: TestClient) -> None:
        data = client.get("/templates/variables").json()

        assert data["variables"]["client_name"] == "Client full name"
        assert "firm_name" in data["groups"]["firm"]

    def test_default_template(self, client: TestClient) -> None:
        content = client.get("/templates/default").json()["template_content"]

        assert [section["order"] for section in content["sections"]] == [1, 2, 3, 4, 5, 6]
        assert "client_name" in content["variables"]

    def test_validate_valid_template(self, client: TestClient, sample_template_dict: dict) -> None:
        response = client.post("/templates/validate", json={"template_content": sample_template_dict})

        data = response.json()
        assert response.status_code == 200
        assert data["valid"] is True
        assert data["unrecognized"] == []
        assert set(data["variables"]) == {"defendant_name", "client_name", "incident_date", "incident_location"}

    def test_validate_reports_structure_errors(self, client: TestClient) -> None:
        response = client.post(
            "/templates/validate",
            json={"template_content": {"sections": [{"id": "a", "title": "Intro", "content": "x"}]}},
        )

        assert response.status_code == 200
        assert response.json()["errors"] == ["Section 1 is missing a valid order number"]

    def test_validate_non_object(self, client: TestClient) -> None:
        response = client.post("/templates/validate", json={"template_content": "just text"})
        assert response.json() == {
            "valid": False,
            "errors": ["Template content must be an object"],
            "variables": [],
            "unrecognized": [],
        }

    def test_validate_reports_unrecognized_placeholders(self, client: TestClient) -> None:
        template = {"sections": [{"id": "a", "title": "Intro", "content": "{{client_name}} {{favorite_color}}", "order": 1}]}

        data = client.post("/templates/validate", json={"template_content": template}).json()

        assert data["valid"] is True
        assert data["unrecognized"] == ["favorite_color"]

    def test_substitute(self, client: TestClient, sample_template_dict: dict) -> None:
        response = client.post(
            "/templates/substitute",
            json={"template_content": sample_template_dict, "values": {"client_name": "Jane Smith"}},
        )

        data = response.json()
        assert response.status_code == 200
        assert "regarding Jane Smith." in data["template_content"]["sections"][0]["content"]
        assert "client_name" not in data["remaining_variables"]
        assert "defendant_name" in data["remaining_variables"]

    def test_substitute_invalid_template(self, client: TestClient) -> None:
        response = client.post("/templates/substitute", json={"template_content": {"sections": []}, "values": {}})

        assert response.status_code == 400
        error = response.json()["error"]
        assert error["type"] == "StructuralError"
        assert error["details"]["errors"] == ["Template must have at least one section"]


    def test_substitute_non_text_content(self, client: TestClient) -> None:
        template = {"sections": [{"id": "a", "title": "T", "content": 5, "order": 1}]}

        response = client.post(
            "/templates/substitute",
            json={"template_content": template, "values": {"client_name": "Jane Smith"}},
        )

        assert response.status_code == 400
        assert response.json()["error"]["details"]["errors"] == ["Section 1 has non-text content"]

    def test_validate_non_text_title(self, client: TestClient) -> None:
        template = {"sections": [{"id": "a", "title": ["x"], "content": "", "order": 1}]}

        data = client.post("/templates/validate", json={"template_content": template}).json()

        assert data["valid"] is False
        assert data["errors"] == ["Section 1 has a non-text title"]


class TestLetterEndpoints:
    def test_generate_letter(self, client: TestClient, fake_llm, letter_body: str) -> None:
        response = client.post(
            "/letters/generate",
            json={"letter": LETTER_FIELDS, "source_documents": ["Police report: truck ran a red light."]},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["letter"] == {"content": letter_body, "status": "Generated"}
        assert data["generation"]["input_tokens"] == 1200
        assert data["generation"]["output_tokens"] == 800
        assert data["generation"]["total_tokens"] == 2000
        assert data["generation"]["estimated_cost"] == pytest.approx(0.0156)
        assert "- Demand Amount: $74,000.00" in fake_llm.calls[0]["user_prompt"]

    def test_generate_with_template(self, client: TestClient, fake_llm, sample_template_dict: dict) -> None:
        response = client.post(
            "/letters/generate",
            json={
                "letter": LETTER_FIELDS,
                "source_documents": ["Police report"],
                "template": sample_template_dict,
                "template_values": {"incident_location": "Fifth and Main"},
            },
        )

        assert response.status_code == 200
        assert "On January 15, 2024, at Fifth and Main" in fake_llm.calls[0]["user_prompt"]

    def test_generate_requires_source_documents(self, client: TestClient, fake_llm) -> None:
        response = client.post("/letters/generate", json={"letter": LETTER_FIELDS, "source_documents": ["  "]})

        assert response.status_code == 400
        assert "without source documents" in response.json()["error"]["message"]
        assert fake_llm.calls == []

    def test_generate_without_credentials(self, client: TestClient, fake_llm) -> None:
        fake_llm.api_key = None

        response = client.post("/letters/generate", json={"letter": LETTER_FIELDS, "source_documents": ["text"]})

        assert response.status_code == 503
        assert response.json()["error"]["type"] == "ConfigurationError"

    def test_generate_quality_failure(self, client: TestClient, fake_llm) -> None:
        fake_llm.text = "Too short."

        response = client.post("/letters/generate", json={"letter": LETTER_FIELDS, "source_documents": ["text"]})

        assert response.status_code == 422
        assert response.json()["error"]["details"] == {"rule": "too_short"}

    def test_generate_validates_payload(self, client: TestClient) -> None:
        response = client.post(
            "/letters/generate",
            json={"letter": {**LETTER_FIELDS, "demand_amount": -5}, "source_documents": ["text"]},
        )

        assert response.status_code == 422
        assert response.json()["error"]["message"] == "Validation error"

    def test_extract_plain_text(self, client: TestClient) -> None:
        response = client.post(
            "/documents/extract",
            files={"file": ("report.txt", b"Police report narrative", "text/plain")},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["text"] == "Police report narrative"
        assert data["characters"] == 23
        assert data["usable"] is False

    def test_extract_unsupported_type(self, client: TestClient) -> None:
        response = client.post(
            "/documents/extract",
            files={"file": ("photo.png", b"\x89PNG", "image/png")},
        )

        assert response.status_code == 422
        assert response.json()["error"]["type"] == "TextExtractionError"


def test_error_status_codes() -> None:
    assert status_code_for(StructuralError(["x"])) == 400
    assert status_code_for(ContentQualityError("gibberish", "x")) == 422
    assert status_code_for(ConfigurationError("openrouter_api_key", "x")) == 503
    assert status_code_for(GenerationTimeoutError("openrouter", 120)) == 504
    assert status_code_for(ServiceError("openrouter", "x", status_code=500)) == 502
