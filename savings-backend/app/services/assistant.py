from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from time import perf_counter
from typing import Any, AsyncIterator, Dict, List, Mapping, Optional, Sequence, Tuple
from uuid import uuid4

import orjson
from fastapi import status
from pydantic import ValidationError

from ..data import FixtureError, load_fixture
from ..errors import AppError, fixture_unavailable
from ..models.assistant import AssistantQueryResponse
from .mock_recommendations import generate_mock_recommendations
from .references import Citation, ReferenceTokenError, cite, validate_references
from .seed import DateLike, create_random, utc_day

logger = logging.getLogger(__name__)

ASSISTANT_FIXTURE = "assistant.json"


@dataclass(frozen=True)
class ResponseTemplate:
    """Canned answer for one prompt intent.

    ``text`` takes positional placeholders for citation tokens and named
    placeholders from the render context. ``citations`` are bare reference
    patterns formatted with the same context.
    """

    intent: str
    keywords: Tuple[str, ...]
    text: str
    citations: Tuple[str, ...]

    def matches(self, prompt: str) -> bool:
        lowered = prompt.lower()
        return any(keyword in lowered for keyword in self.keywords)

    def render(self, context: Mapping[str, Any]) -> Tuple[str, List[str]]:
        citations = []
        for pattern in self.citations:
            kind, _, identifier = pattern.format(**context).partition(":")
            citations.append(Citation(kind=kind, id=identifier))
        return cite(self.text, citations, **context)


RESPONSE_TEMPLATES: Sequence[ResponseTemplate] = (
    ResponseTemplate(
        intent="spend",
        keywords=("cost", "spend", "bill", "budget"),
        text=(
            "Based on your question about costs, I can see from your recent spending data {0} that you have "
            "opportunities for optimization. Your current weekly spend shows a potential 20% savings, "
            "led by {top.title} {1}."
        ),
        citations=("agg:{day}T10", "rec:{top.id}"),
    ),
    ResponseTemplate(
        intent="recommendations",
        keywords=("recommend", "saving", "optimi", "opportunit"),
        text=(
            "Today's strongest opportunity is {top.title} {0}: {top.short_description}. "
            "{runner_up.title} {1} is next in line. Both are sized against your last 30 days of usage {2}."
        ),
        citations=("rec:{top.id}", "rec:{runner_up.id}", "agg:{day}T00"),
    ),
    ResponseTemplate(
        intent="projection",
        keywords=("forecast", "projection", "project", "next month", "trend"),
        text=(
            "If current usage holds, next month's spend tracks about 20% below baseline {0}. "
            "Most of that gap closes once {top.title} {1} is applied."
        ),
        citations=("agg:{day}T00", "rec:{top.id}"),
    ),
)


def classify_intent(
    prompt: str, templates: Sequence[ResponseTemplate] = RESPONSE_TEMPLATES
) -> Optional[ResponseTemplate]:
    for template in templates:
        if template.matches(prompt):
            return template
    return None


def build_render_context(on_date: Optional[DateLike] = None, seed: Optional[int] = None) -> Dict[str, Any]:
    day = utc_day(on_date)
    recommendations = generate_mock_recommendations(day, rng=create_random(day, seed))
    return {"day": day.isoformat(), "top": recommendations[0], "runner_up": recommendations[1]}


def build_assistant_response(
    prompt: str,
    *,
    started_at: Optional[float] = None,
    on_date: Optional[DateLike] = None,
    seed: Optional[int] = None,
) -> AssistantQueryResponse:
    started_at = perf_counter() if started_at is None else started_at

    try:
        payload = load_fixture(ASSISTANT_FIXTURE)
    except FixtureError as exc:
        logger.error("Failed to load assistant fixture: %s", exc)
        raise fixture_unavailable("Failed to process assistant query") from exc

    template = classify_intent(prompt)
    if template is not None:
        text, references = template.render(build_render_context(on_date, seed))
        payload["response"] = text
        payload["references"] = references

    payload["interactionId"] = str(uuid4())
    payload["firstTokenLatencyMs"] = round((perf_counter() - started_at) * 1000, 2)

    try:
        response = AssistantQueryResponse.model_validate(payload)
        validate_references(response.response, response.references)
    except (ValidationError, ReferenceTokenError) as exc:
        logger.error("Assistant response failed validation: %s", exc)
        raise AppError(
            "RESPONSE_VALIDATION_FAILED",
            "Failed to process assistant query",
            status.HTTP_500_INTERNAL_SERVER_ERROR,
        ) from exc

    logger.info(
        "Assistant query processed (mock): intent=%s promptLength=%s responseLength=%s references=%s",
        template.intent if template else "fixture",
        len(prompt),
        len(response.response),
        len(response.references),
    )
    return response


def sse_event(payload: Mapping[str, Any]) -> str:
    return f"data: {orjson.dumps(payload).decode()}\n\n"


async def stream_chunks(text: str, chunk_size: int = 10, delay_ms: int = 50) -> AsyncIterator[str]:
    """Yield ``text`` in fixed-size slices, pausing between slices."""
    for start in range(0, len(text), chunk_size):
        yield text[start : start + chunk_size]
        if start + chunk_size < len(text) and delay_ms > 0:
            await asyncio.sleep(delay_ms / 1000)
