from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Query

from ..config import settings
from ..data import FixtureError, load_fixture
from ..errors import ERROR_RESPONSES, fixture_unavailable, not_implemented
from ..models import RecommendationCategory, RecommendationsResponse, RecommendationStatus

logger = logging.getLogger(__name__)

router = APIRouter(tags=["recommendations"], responses=ERROR_RESPONSES)


@router.get("/recommendations", response_model=RecommendationsResponse)
def list_recommendations(
    status: Optional[RecommendationStatus] = Query(default=None),
    category: Optional[RecommendationCategory] = Query(default=None),
):
    if not settings.use_mocks:
        raise not_implemented("recommendations")

    try:
        payload = load_fixture("recommendations.json")
    except FixtureError as exc:
        logger.error("Failed to load recommendations fixture: %s", exc)
        raise fixture_unavailable("Failed to load recommendations") from exc

    items = payload.get("items") or []
    if status:
        items = [item for item in items if item.get("status") == status]
    if category:
        items = [item for item in items if item.get("category") == category]
    payload["items"] = items

    logger.info("Recommendations served (mock): status=%s category=%s count=%s", status, category, len(items))
    return RecommendationsResponse.model_validate(payload)
