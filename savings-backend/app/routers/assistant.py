from __future__ import annotations

import logging
from time import perf_counter
from typing import AsyncIterator

from fastapi import APIRouter, Request
from fastapi.responses import StreamingResponse

from ..config import settings
from ..errors import ERROR_RESPONSES, not_implemented
from ..models import AssistantQueryRequest, AssistantQueryResponse
from ..services.assistant import build_assistant_response, sse_event, stream_chunks

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/assistant", tags=["assistant"], responses=ERROR_RESPONSES)

EVENT_STREAM = "text/event-stream"


def _wants_stream(request: Request) -> bool:
    return EVENT_STREAM in request.headers.get("accept", "")


async def _event_stream(request: Request, text: str) -> AsyncIterator[str]:
    sent = 0
    async for chunk in stream_chunks(
        text,
        chunk_size=settings.assistant_chunk_size,
        delay_ms=settings.assistant_chunk_delay_ms,
    ):
        if await request.is_disconnected():
            logger.info("Assistant stream closed by client after %s chunk(s)", sent)
            return
        yield sse_event({"chunk": chunk})
        sent += 1
    yield sse_event({"done": True})


@router.post("/query", response_model=AssistantQueryResponse)
async def query_assistant(body: AssistantQueryRequest, request: Request):
    started_at = perf_counter()
    if not settings.use_mocks:
        raise not_implemented("assistant")

    response = build_assistant_response(body.prompt, started_at=started_at, seed=settings.mock_seed)

    if _wants_stream(request):
        return StreamingResponse(
            _event_stream(request, response.response),
            media_type=EVENT_STREAM,
            headers={"Cache-Control": "no-cache", "X-Interaction-ID": str(response.interaction_id)},
        )
    return response
