from __future__ import annotations

from typing import Annotated, List
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, StringConstraints

from .common import MetricRef

Prompt = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=1000)]


class AssistantQueryRequest(BaseModel):
    prompt: Prompt


class AssistantQueryResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)
    interaction_id: UUID = Field(alias="interactionId")
    response: str = Field(min_length=1)
    references: List[MetricRef] = Field(default_factory=list, max_length=20)
    first_token_latency_ms: float = Field(ge=0, alias="firstTokenLatencyMs")
