from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from .config import settings

logger = logging.getLogger(__name__)


class FixtureError(RuntimeError):
    """Raised when a fixture file is missing or cannot be decoded."""


def fixture_path(name: str, fixture_dir: Optional[Path] = None) -> Path:
    return Path(fixture_dir or settings.fixture_dir) / name


def load_fixture(name: str, fixture_dir: Optional[Path] = None) -> Dict[str, Any]:
    """Read a JSON fixture. Each call returns a fresh object the caller may mutate."""
    path = fixture_path(name, fixture_dir)
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise FixtureError(f"Fixture {name} not found") from exc
    except (OSError, json.JSONDecodeError) as exc:
        raise FixtureError(f"Fixture {name} could not be read: {exc}") from exc
    if not isinstance(payload, dict):
        raise FixtureError(f"Fixture {name} must contain a JSON object")
    return payload


FALLBACK_SPEND_SERVICES: List[Dict[str, object]] = [
    {
        "name": "EC2",
        "currentCost": 1250.45,
        "previousCost": 1100.20,
        "changePercent": 13.7,
        "trend": "increasing",
        "resourceCount": 25,
    },
    {
        "name": "S3",
        "currentCost": 89.32,
        "previousCost": 92.15,
        "changePercent": -3.1,
        "trend": "decreasing",
        "resourceCount": 15,
    },
    {
        "name": "RDS",
        "currentCost": 445.78,
        "previousCost": 430.22,
        "changePercent": 3.6,
        "trend": "stable",
        "resourceCount": 3,
    },
]

FALLBACK_RECOMMENDATION_ROWS: List[Dict[str, object]] = [
    {
        "id": "fallback-rightsizing",
        "category": "rightsizing",
        "status": "new",
        "expectedSavingsMinor": 45000,
        "rationale": "Right-size EC2 instances",
    },
    {
        "id": "fallback-idle",
        "category": "idle",
        "status": "new",
        "expectedSavingsMinor": 12550,
        "rationale": "Enable S3 intelligent tiering",
    },
    {
        "id": "fallback-commitment",
        "category": "commitment",
        "status": "new",
        "expectedSavingsMinor": 89025,
        "rationale": "Schedule EC2 instances",
    },
]


def spend_services() -> List[Dict[str, object]]:
    try:
        services = load_fixture("spend.json").get("services")
    except FixtureError as exc:
        logger.warning("Spend fixture unavailable, using fallback export rows: %s", exc)
        return [dict(row) for row in FALLBACK_SPEND_SERVICES]
    if not isinstance(services, list):
        return [dict(row) for row in FALLBACK_SPEND_SERVICES]
    return services


def recommendation_rows() -> List[Dict[str, object]]:
    try:
        items = load_fixture("recommendations.json").get("items")
    except FixtureError as exc:
        logger.warning("Recommendations fixture unavailable, using fallback export rows: %s", exc)
        return [dict(row) for row in FALLBACK_RECOMMENDATION_ROWS]
    if not isinstance(items, list):
        return [dict(row) for row in FALLBACK_RECOMMENDATION_ROWS]
    return items
