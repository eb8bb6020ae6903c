"""Tests for the calorie suggestion endpoint."""

import pytest
from fastapi.testclient import TestClient

from calorie_tracker.api.app import create_app
from calorie_tracker.containers import AppContainer
from calorie_tracker.services.suggestions import CalorieSuggestionService
from tests.conftest import FailingCompletionClient, UpstreamError


def test_health(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_suggest_calories_returns_estimate(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    response = client.post("/api/suggest-calories", json={"text": "2 eggs"})

    assert response.status_code == 200
    assert response.json() == {"calories": 140, "notes": "approx for 2 large eggs"}


def test_suggest_calories_rejects_empty_text(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    response = client.post("/api/suggest-calories", json={"text": ""})

    assert response.status_code == 400
    assert response.json() == {"error": "Missing ingredient text"}


def test_suggest_calories_tolerates_malformed_body(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/api/suggest-calories",
        content=b"not json",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json() == {"error": "Missing ingredient text"}


def test_suggest_calories_requires_post(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    response = client.get("/api/suggest-calories")

    assert response.status_code == 405
    assert response.json() == {"error": "Use POST"}


@pytest.mark.parametrize("method", ["PUT", "DELETE", "TRACE", "PROPFIND"])
def test_suggest_calories_rejects_any_other_method(
    container: AppContainer, method: str
) -> None:
    client = TestClient(create_app(container))

    response = client.request(method, "/api/suggest-calories")

    assert response.status_code == 405
    assert response.json() == {"error": "Use POST"}


def test_unknown_route_keeps_default_error(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    response = client.get("/missing")

    assert response.status_code == 404
    assert response.json() == {"detail": "Not Found"}


def test_suggest_calories_without_credential(container: AppContainer) -> None:
    container.suggestion_service = None
    client = TestClient(create_app(container))

    response = client.post("/api/suggest-calories", json={"text": "2 eggs"})

    assert response.status_code == 500
    assert response.json() == {"error": "Missing OPENAI_API_KEY"}


def test_suggest_calories_maps_upstream_failure(container: AppContainer) -> None:
    container.suggestion_service = CalorieSuggestionService(
        client=FailingCompletionClient(UpstreamError("Rate limited", 429)),
        production=True,
    )
    client = TestClient(create_app(container))

    response = client.post("/api/suggest-calories", json={"text": "2 eggs"})

    assert response.status_code == 429
    assert response.json() == {"error": "AI suggestion failed"}
