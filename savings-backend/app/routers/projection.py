from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Query

from ..config import settings
from ..data import FixtureError, load_fixture
from ..errors import ERROR_RESPONSES, fixture_unavailable, not_implemented
from ..models import ProjectionResponse, TimeRange

logger = logging.getLogger(__name__)

router = APIRouter(tags=["projection"], responses=ERROR_RESPONSES)


@router.get("/projection", response_model=ProjectionResponse)
def get_projection(period: TimeRange = Query(default="month")):
    if not settings.use_mocks:
        raise not_implemented("projection data")

    try:
        payload = load_fixture("projection.json")
    except FixtureError as exc:
        logger.error("Failed to load projection fixture: %s", exc)
        raise fixture_unavailable("Failed to load projection data") from exc

    payload["period"] = period
    payload["generatedAt"] = datetime.now(timezone.utc).isoformat()
    logger.info("Projection served (mock): period=%s", period)
    return ProjectionResponse.model_validate(payload)
