from __future__ import annotations

from fastapi.testclient import TestClient

from app.config import settings
from app.services.mock_recommendations import get_mock_recommendations_response
from app.services.mock_timelines import get_mock_timelines_response


def test_recommendations_for_fixed_day(client: TestClient):
    response = client.get("/api/mock/recommendations", params={"date": "2024-01-15"})
    assert response.status_code == 200
    expected = get_mock_recommendations_response("2024-01-15").model_dump(mode="json", by_alias=True)
    assert response.json() == expected
    assert len(response.json()["recommendations"]) >= 5


def test_timelines_for_fixed_day(client: TestClient):
    response = client.get("/api/mock/timelines", params={"date": "2024-01-15"})
    assert response.status_code == 200
    payload = response.json()
    assert len(payload["blocks"]) >= 3
    assert payload == get_mock_timelines_response("2024-01-15").model_dump(mode="json", by_alias=True)


def test_end_to_end_regression_is_stable(client: TestClient):
    first = client.get("/api/mock/recommendations", params={"date": "2024-01-15"}).json()
    second = client.get("/api/mock/recommendations", params={"date": "2024-01-15"}).json()
    assert first == second
    first = client.get("/api/mock/timelines", params={"date": "2024-01-15"}).json()
    second = client.get("/api/mock/timelines", params={"date": "2024-01-15"}).json()
    assert first == second


def test_default_day_matches_today(client: TestClient):
    payload = client.get("/api/mock/recommendations").json()
    assert payload == get_mock_recommendations_response().model_dump(mode="json", by_alias=True)


def test_invalid_date(client: TestClient):
    response = client.get("/api/mock/timelines", params={"date": "yesterday"})
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_DATE"


def test_simulated_error_returns_empty_lists(client: TestClient):
    recs = client.get("/api/mock/recommendations", params={"simulateError": "true"})
    blocks = client.get("/api/mock/timelines", params={"simulateError": "true"})
    assert recs.status_code == 200 and recs.json() == {"recommendations": []}
    assert blocks.status_code == 200 and blocks.json() == {"blocks": []}


def test_seed_override_ignores_date(client: TestClient, monkeypatch):
    monkeypatch.setattr(settings, "mock_seed", 1234)
    first = client.get("/api/mock/recommendations", params={"date": "2024-01-15"}).json()
    second = client.get("/api/mock/recommendations", params={"date": "2030-06-01"}).json()
    assert first == second


def test_fixed_day_body_is_byte_identical(client: TestClient):
    first = client.get("/api/mock/timelines", params={"date": "2024-01-15"})
    second = client.get("/api/mock/timelines", params={"date": "2024-01-15"})
    assert first.text == second.text
