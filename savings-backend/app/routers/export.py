from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from typing import Literal

from fastapi import APIRouter, Query
from fastapi.responses import Response

from ..config import settings
from ..errors import ERROR_RESPONSES, not_implemented
from ..services.export import ExportType, build_export

logger = logging.getLogger(__name__)

router = APIRouter(tags=["export"], responses=ERROR_RESPONSES)


@router.get("/export", response_class=Response)
async def export_csv(
    export_type: ExportType = Query(default="full", alias="type"),
    export_format: Literal["csv"] = Query(default="csv", alias="format"),
):
    if not settings.use_mocks:
        raise not_implemented("export")

    if settings.simulate_latency:
        await asyncio.sleep(settings.latency_ms / 1000)

    filename, content = build_export(export_type, datetime.now(timezone.utc).date())
    logger.info("Export generated (mock): type=%s format=%s bytes=%s", export_type, export_format, len(content))
    return Response(
        content=content,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
