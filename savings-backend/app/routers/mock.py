from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Query

from ..config import settings
from ..errors import ERROR_RESPONSES, validation
from ..models import MockRecommendationsResponse, MockTimelinesResponse
from ..services.mock_recommendations import generate_mock_recommendations
from ..services.mock_timelines import generate_mock_timelines
from ..services.seed import InvalidDateError, SeededRandom, TemplatePoolError, create_random, utc_day

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/mock", tags=["mock"], responses=ERROR_RESPONSES)


def _resolve_day(raw: Optional[str]) -> date:
    try:
        return utc_day(raw)
    except InvalidDateError as exc:
        raise validation("date", str(exc), code="INVALID_DATE") from exc


def _random_for(day: date) -> SeededRandom:
    return create_random(day, settings.mock_seed)


@router.get("/recommendations", response_model=MockRecommendationsResponse)
def mock_recommendations(
    on_date: Optional[str] = Query(default=None, alias="date"),
    simulate_error: bool = Query(default=False, alias="simulateError"),
):
    day = _resolve_day(on_date)
    if simulate_error:
        logger.error("Simulated failure generating mock recommendations for %s", day)
        return MockRecommendationsResponse(recommendations=[])
    try:
        recommendations = generate_mock_recommendations(day, rng=_random_for(day))
    except TemplatePoolError as exc:
        logger.error("Failed to generate mock recommendations for %s: %s", day, exc)
        return MockRecommendationsResponse(recommendations=[])
    logger.info("Generated %s mock recommendation(s) for %s", len(recommendations), day)
    return MockRecommendationsResponse(recommendations=recommendations)


@router.get("/timelines", response_model=MockTimelinesResponse)
def mock_timelines(
    on_date: Optional[str] = Query(default=None, alias="date"),
    simulate_error: bool = Query(default=False, alias="simulateError"),
):
    day = _resolve_day(on_date)
    if simulate_error:
        logger.error("Simulated failure generating mock timelines for %s", day)
        return MockTimelinesResponse(blocks=[])
    try:
        blocks = generate_mock_timelines(day, rng=_random_for(day))
    except TemplatePoolError as exc:
        logger.error("Failed to generate mock timelines for %s: %s", day, exc)
        return MockTimelinesResponse(blocks=[])
    logger.info("Generated %s mock timeline block(s) for %s", len(blocks), day)
    return MockTimelinesResponse(blocks=blocks)
