from __future__ import annotations

import asyncio
import logging
from typing import Optional

from fastapi import APIRouter, Query

from ..config import settings
from ..data import FixtureError, load_fixture
from ..errors import ERROR_RESPONSES, fixture_unavailable, not_implemented
from ..models import Granularity, SpendResponse, TimeRange

logger = logging.getLogger(__name__)

router = APIRouter(tags=["spend"], responses=ERROR_RESPONSES)


@router.get("/spend", response_model=SpendResponse)
async def get_spend(
    time_range: TimeRange = Query(alias="timeRange"),
    granularity: Granularity = Query(default="day"),
    service: Optional[str] = Query(default=None),
    account_scope: Optional[str] = Query(default=None, alias="accountScope"),
):
    if not settings.use_mocks:
        raise not_implemented("spend data")

    if settings.simulate_latency:
        await asyncio.sleep(settings.latency_ms / 1000)

    try:
        payload = load_fixture("spend.json")
    except FixtureError as exc:
        logger.error("Failed to load spend fixture: %s", exc)
        raise fixture_unavailable("Failed to load spend data") from exc

    payload["timeRange"] = time_range
    payload["granularity"] = granularity
    response = SpendResponse.model_validate(payload)
    logger.info(
        "Spend served (mock): timeRange=%s granularity=%s service=%s accountScope=%s points=%s",
        time_range,
        granularity,
        service,
        account_scope,
        len(response.series),
    )
    return response
