from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence

from ..models.mock import MockRecommendationsResponse, RecommendationStub
from .seed import DateLike, SeededRandom, TemplatePoolError, create_daily_random

logger = logging.getLogger(__name__)

MIN_RECOMMENDATIONS = 5
MAX_RECOMMENDATIONS = 8

RECOMMENDATION_TEMPLATES: Sequence[RecommendationStub] = (
    RecommendationStub(
        id="rightsizing-ec2",
        title="Rightsize EC2 Instances",
        short_description="Identify over-provisioned instances running below optimal capacity",
        impact_level="High",
        status="Prototype",
        category="cost",
        display_order=1,
        rationale_preview="Large instance family with <20% avg utilization",
    ),
    RecommendationStub(
        id="unused-volumes",
        title="Remove Unused EBS Volumes",
        short_description="Clean up unattached storage volumes accumulating costs",
        impact_level="Medium",
        status="Prototype",
        category="cost",
        display_order=2,
        rationale_preview="Detached volumes older than 7 days",
    ),
    RecommendationStub(
        id="reserved-instance-optimization",
        title="Reserved Instance Optimization",
        short_description="Optimize RI coverage and instance family selection",
        impact_level="High",
        status="ComingSoon",
        category="savings",
        display_order=3,
        rationale_preview="Potential 30-60% savings on stable workloads",
    ),
    RecommendationStub(
        id="spot-instance-migration",
        title="Spot Instance Migration",
        short_description="Migrate suitable workloads to cost-effective spot instances",
        impact_level="Medium",
        status="ComingSoon",
        category="cost",
        display_order=4,
        rationale_preview="Up to 90% savings for fault-tolerant workloads",
    ),
    RecommendationStub(
        id="storage-class-optimization",
        title="S3 Storage Class Optimization",
        short_description="Transition infrequently accessed data to cheaper storage tiers",
        impact_level="Medium",
        status="Prototype",
        category="storage",
        display_order=5,
        rationale_preview="Objects not accessed in 30+ days",
    ),
    RecommendationStub(
        id="lambda-memory-optimization",
        title="Lambda Memory Optimization",
        short_description="Right-size Lambda functions for optimal cost-performance ratio",
        impact_level="Low",
        status="Future",
        category="serverless",
        display_order=6,
        rationale_preview="Memory over-provisioning detected",
    ),
    RecommendationStub(
        id="database-rightsizing",
        title="RDS Instance Rightsizing",
        short_description="Optimize database instance sizes based on actual usage patterns",
        impact_level="High",
        status="ComingSoon",
        category="database",
        display_order=7,
        rationale_preview="CPU utilization consistently below 30%",
    ),
    RecommendationStub(
        id="cloudfront-optimization",
        title="CloudFront Cache Optimization",
        short_description="Improve cache hit ratios and reduce origin requests",
        impact_level="Medium",
        status="Future",
        category="performance",
        display_order=8,
        rationale_preview="Low cache hit ratio affecting costs",
    ),
)


def deduplicate_recommendations(recommendations: Iterable[RecommendationStub]) -> List[RecommendationStub]:
    """Drop repeated ids, keeping the first occurrence."""
    seen: set[str] = set()
    unique: List[RecommendationStub] = []
    duplicates = 0
    for rec in recommendations:
        if rec.id in seen:
            duplicates += 1
            continue
        seen.add(rec.id)
        unique.append(rec)
    if duplicates:
        logger.debug("Removed %s duplicate mock recommendation(s)", duplicates)
    return unique


def generate_mock_recommendations(
    on_date: Optional[DateLike] = None,
    *,
    rng: Optional[SeededRandom] = None,
    templates: Sequence[RecommendationStub] = RECOMMENDATION_TEMPLATES,
) -> List[RecommendationStub]:
    """Build the day's recommendation stubs.

    The batch size, selection and order all come from the daily generator, so
    repeated calls for the same UTC day return identical lists.
    """
    if not templates:
        raise TemplatePoolError("Recommendation template pool is empty")

    random = rng or create_daily_random(on_date)
    count = max(MIN_RECOMMENDATIONS, random.next_int(MIN_RECOMMENDATIONS, MAX_RECOMMENDATIONS + 1))

    shuffled = random.shuffle(templates)
    selected: List[RecommendationStub] = [
        template.model_copy(update={"display_order": position + 1})
        for position, template in enumerate(shuffled[: min(count, len(shuffled))])
    ]

    # cycle the pool once it is exhausted; suffixed ids stay unique
    while len(selected) < count:
        position = len(selected)
        template = templates[position % len(templates)]
        selected.append(
            template.model_copy(
                update={"id": f"{template.id}-{position}", "display_order": position + 1}
            )
        )

    return sorted(deduplicate_recommendations(selected), key=lambda rec: rec.display_order)


def get_mock_recommendations_response(
    on_date: Optional[DateLike] = None,
    *,
    rng: Optional[SeededRandom] = None,
) -> MockRecommendationsResponse:
    return MockRecommendationsResponse(recommendations=generate_mock_recommendations(on_date, rng=rng))
