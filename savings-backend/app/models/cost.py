from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from .common import MetricRef

TimeRange = Literal["day", "week", "month", "ytd"]
Granularity = Literal["hour", "day"]
RecommendationStatus = Literal["draft", "new", "acknowledged", "actioned", "archived"]
RecommendationCategory = Literal["rightsizing", "commitment", "idle"]


class SpendDataPoint(BaseModel):
    model_config = ConfigDict(populate_by_name=True)
    ts: datetime
    cost_minor: int = Field(ge=0, alias="costMinor")
    projected_cost_minor: int = Field(ge=0, alias="projectedCostMinor")


class SpendTotals(BaseModel):
    model_config = ConfigDict(populate_by_name=True)
    baseline_minor: int = Field(ge=0, alias="baselineMinor")
    projected_minor: int = Field(ge=0, alias="projectedMinor")
    delta_pct: float = Field(ge=0, le=1, alias="deltaPct")


class SpendMeta(BaseModel):
    model_config = ConfigDict(populate_by_name=True)
    last_ingest_at: Optional[datetime] = Field(default=None, alias="lastIngestAt")
    data_points: Optional[int] = Field(default=None, ge=0, alias="dataPoints")
    currency: Optional[str] = Field(default=None, min_length=3, max_length=3)


class SpendResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)
    tenant_id: UUID = Field(alias="tenantId")
    time_range: TimeRange = Field(alias="timeRange")
    currency: str = Field(default="USD", min_length=3, max_length=3)
    granularity: Granularity
    series: List[SpendDataPoint] = Field(max_length=744, description="31 days of hourly points at most")
    totals: SpendTotals
    meta: Optional[SpendMeta] = None


class ProjectionResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)
    tenant_id: UUID = Field(alias="tenantId")
    period: TimeRange
    baseline_minor: int = Field(ge=0, alias="baselineMinor")
    projected_minor: int = Field(ge=0, alias="projectedMinor")
    delta_pct: float = Field(ge=0, le=1, alias="deltaPct")
    generated_at: datetime = Field(alias="generatedAt")


class RecommendationItem(BaseModel):
    model_config = ConfigDict(populate_by_name=True)
    id: UUID
    category: RecommendationCategory
    status: RecommendationStatus
    rationale: str = Field(min_length=1, max_length=2000)
    expected_savings_minor: int = Field(ge=0, alias="expectedSavingsMinor")
    metric_refs: List[MetricRef] = Field(default_factory=list, max_length=10, alias="metricRefs")
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")


class RecommendationsResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)
    tenant_id: UUID = Field(alias="tenantId")
    items: List[RecommendationItem] = Field(max_length=100)
