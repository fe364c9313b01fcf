from .assistant import AssistantQueryRequest, AssistantQueryResponse
from .common import ErrorDetail, ErrorResponse, MetricRef
from .cost import (
    Granularity,
    ProjectionResponse,
    RecommendationCategory,
    RecommendationItem,
    RecommendationsResponse,
    RecommendationStatus,
    SpendDataPoint,
    SpendMeta,
    SpendResponse,
    SpendTotals,
    TimeRange,
)
from .mock import (
    MetricType,
    MockRecommendationsResponse,
    MockTimelinesResponse,
    RecommendationStub,
    TimelineBlock,
    TimelineDataPoint,
    TimelineTemplate,
)
