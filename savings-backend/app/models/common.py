from __future__ import annotations

from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field, StringConstraints

MetricRef = Annotated[str, StringConstraints(pattern=r"^(agg|rec):[A-Za-z0-9:-]+$")]


class ErrorDetail(BaseModel):
    code: str = Field(min_length=1)
    message: str = Field(min_length=1)
    hint: Optional[str] = None


class ErrorResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)
    error: ErrorDetail
    request_id: Optional[str] = Field(default=None, alias="requestId")
