"""Tests for the FastAPI service mode."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, Dict

import pytest
from fastapi.testclient import TestClient

from tokensmith import __version__
from tokensmith.errors import ConfigError, TokenInputError
from tokensmith.models import GenerateRequest, GenerationResult
from tokensmith.orchestrator import Orchestrator
from tokensmith.service import create_app
from tests._fixtures.tokens import dark_tree, light_tree, values_tree


class _FailingOrchestrator:
    def __init__(self, error: Exception) -> None:
        self.error = error
        self.calls: list[GenerateRequest] = []

    def generate(self, request: GenerateRequest) -> GenerationResult:
        self.calls.append(request)
        raise self.error


def _body(**overrides: Any) -> Dict[str, Any]:
    body: Dict[str, Any] = {"light": light_tree(), "dark": dark_tree(), "values": values_tree()}
    body.update(overrides)
    return body


@pytest.fixture
def client() -> TestClient:
    app = create_app(lambda: Orchestrator(clock=lambda: datetime(2026, 10, 19, tzinfo=UTC)))
    return TestClient(app)


def test_health_endpoint(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "version": __version__}


def test_generate_endpoint_returns_files_and_stats(client: TestClient) -> None:
    response = client.post("/generate", json=_body(platforms=["web", "ios"], categories=["colors"]))

    assert response.status_code == 200
    data = response.json()
    filenames = {(item["platform"], item["filename"]) for item in data["files"]}
    assert ("web", "Colors.scss") in filenames
    assert ("ios", "Colors.swift") in filenames
    assert data["stats"]["semantic_colors"] == 4
    assert data["conventions"]["mode"] == "best-practices"
    assert all(warning["kind"] != "missing-category" for warning in data["warnings"])


def test_generate_endpoint_reports_missing_typography(client: TestClient) -> None:
    response = client.post("/generate", json=_body())

    kinds = [warning["kind"] for warning in response.json()["warnings"]]
    assert "missing-category" in kinds


def test_analyze_endpoint_includes_report_and_changelog(client: TestClient) -> None:
    response = client.post(
        "/analyze",
        json=_body(references={"web-primitives-scss": "$grey-750: #1e1e1e;\n"}),
    )

    assert response.status_code == 200
    data = response.json()
    assert "Primitives.scss" in data["report"]["stats"]
    assert data["changelog"].startswith("## Tokensmith")
    primitives = next(item for item in data["files"] if item["filename"] == "Primitives.scss")
    assert primitives["reference_content"] == "$grey-750: #1e1e1e;\n"


def test_invalid_platform_is_rejected(client: TestClient) -> None:
    response = client.post("/generate", json=_body(platforms=["desktop"]))

    assert response.status_code == 422


def test_token_input_errors_map_to_422() -> None:
    stub = _FailingOrchestrator(TokenInputError("Token export must be a JSON object", source="light"))
    client = TestClient(create_app(lambda: stub))

    response = client.post("/generate", json=_body())

    assert response.status_code == 422
    assert response.json() == {"detail": "light: Token export must be a JSON object"}
    assert len(stub.calls) == 1


def test_config_errors_map_to_400() -> None:
    stub = _FailingOrchestrator(ConfigError("bad config"))
    client = TestClient(create_app(lambda: stub))

    response = client.post("/generate", json=_body())

    assert response.status_code == 400
    assert response.json() == {"detail": "bad config"}
