from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

ImpactLevel = Literal["Low", "Medium", "High"]
StubStatus = Literal["Prototype", "ComingSoon", "Future"]
MetricType = Literal["Spend", "Performance", "Projection", "Other"]


class RecommendationStub(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)
    id: str = Field(min_length=1)
    title: str = Field(min_length=1)
    short_description: str = Field(min_length=1, alias="shortDescription")
    impact_level: ImpactLevel = Field(alias="impactLevel")
    status: StubStatus
    category: Optional[str] = None
    display_order: int = Field(default=1, ge=1, alias="displayOrder")
    rationale_preview: Optional[str] = Field(default=None, alias="rationalePreview")


class TimelineTemplate(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)
    id: str
    title: str
    metric_type: MetricType = Field(alias="metricType")
    time_range: str = Field(default="LAST_30_DAYS", alias="timeRange")


class TimelineDataPoint(BaseModel):
    timestamp: int = Field(description="Unix timestamp in milliseconds")
    value: float = Field(ge=0)


class TimelineBlock(BaseModel):
    model_config = ConfigDict(populate_by_name=True)
    id: str
    title: str
    metric_type: MetricType = Field(alias="metricType")
    time_range: str = Field(alias="timeRange")
    data_points: List[TimelineDataPoint] = Field(alias="dataPoints")
    disclaimer_flag: bool = Field(alias="disclaimerFlag")


class MockRecommendationsResponse(BaseModel):
    recommendations: List[RecommendationStub]


class MockTimelinesResponse(BaseModel):
    blocks: List[TimelineBlock]
