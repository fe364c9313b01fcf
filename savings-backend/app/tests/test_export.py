from __future__ import annotations

import csv
import io
from datetime import date, datetime, timezone

from fastapi.testclient import TestClient

from app.config import settings
from app.services.export import (
    RECOMMENDATION_HEADERS,
    SPENDING_HEADERS,
    build_export,
    recommendations_csv,
    spending_csv,
)


def _rows(content: str):
    return list(csv.reader(io.StringIO(content)))


def test_spending_csv_quotes_embedded_commas():
    rows = _rows(spending_csv())
    assert tuple(rows[0]) == SPENDING_HEADERS
    assert ["Lambda, Edge", "42.1", "38.9", "8.2", "increasing", "40"] in rows
    assert len(rows) == 5


def test_recommendations_csv_converts_minor_units():
    rows = _rows(recommendations_csv())
    assert tuple(rows[0]) == RECOMMENDATION_HEADERS
    first = rows[1]
    assert first[0] == "01234567-89ab-cdef-0123-456789abcdef"
    assert first[3] == "450.00"
    assert len(rows) == 5


def test_full_export_has_both_sections():
    filename, content = build_export("full", date(2024, 1, 15))
    assert filename == "full-export-2024-01-15.csv"
    spending, recommendations = content.split("\n\n")
    assert spending.startswith("SPENDING DATA\nService,")
    assert recommendations.startswith("RECOMMENDATIONS DATA\nId,")


def test_fallback_rows_when_fixtures_missing(monkeypatch, tmp_path):
    monkeypatch.setattr(settings, "fixture_dir", tmp_path)
    spending = _rows(spending_csv())
    assert [row[0] for row in spending[1:]] == ["EC2", "S3", "RDS"]
    recommendations = _rows(recommendations_csv())
    assert recommendations[1][3] == "450.00"


def test_export_endpoint_attachment(client: TestClient):
    response = client.get("/export", params={"type": "spending", "format": "csv"})
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    today = datetime.now(timezone.utc).date().isoformat()
    assert response.headers["content-disposition"] == f'attachment; filename="spending-export-{today}.csv"'
    assert response.text.startswith("Service,Current Month ($)")


def test_export_defaults_to_full(client: TestClient):
    response = client.get("/export")
    assert response.status_code == 200
    assert "RECOMMENDATIONS DATA" in response.text
    assert 'filename="full-export-' in response.headers["content-disposition"]


def test_export_rejects_unknown_type(client: TestClient):
    response = client.get("/export", params={"type": "everything"})
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_EXPORT_TYPE"


def test_export_rejects_unknown_format(client: TestClient):
    response = client.get("/export", params={"format": "xlsx"})
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_FORMAT"
