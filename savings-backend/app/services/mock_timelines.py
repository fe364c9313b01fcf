from __future__ import annotations

import math
from datetime import datetime, time, timedelta, timezone
from typing import List, Optional, Sequence

from ..models.mock import (
    MetricType,
    MockTimelinesResponse,
    TimelineBlock,
    TimelineDataPoint,
    TimelineTemplate,
)
from .seed import DateLike, SeededRandom, TemplatePoolError, create_daily_random, utc_day

MIN_BLOCKS = 3
MAX_BLOCKS = 6
WINDOW_DAYS = 30

TIMELINE_TEMPLATES: Sequence[TimelineTemplate] = (
    TimelineTemplate(id="spend-trend", title="Daily Spend Trend", metric_type="Spend"),
    TimelineTemplate(id="performance-overview", title="Resource Performance", metric_type="Performance"),
    TimelineTemplate(id="cost-projection", title="Cost Projection", metric_type="Projection"),
    TimelineTemplate(id="savings-opportunity", title="Savings Opportunities", metric_type="Other"),
    TimelineTemplate(id="efficiency-score", title="Efficiency Score", metric_type="Performance"),
)


def _clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))


def _spend_value(random: SeededRandom, day_index: int) -> float:
    base = 500 + random.next_float(-200, 800)
    weekly = 1 + 0.3 * math.sin(2 * math.pi * day_index / 7)
    return max(100.0, base * weekly + random.next_float(-100, 100))


def _performance_value(random: SeededRandom, day_index: int) -> float:
    trend = 75 + 15 * math.sin(2 * math.pi * day_index / 30)
    return _clamp(trend + random.next_float(-10, 10), 0.0, 100.0)


def _projection_value(random: SeededRandom, day_index: int) -> float:
    return max(0.0, 1000 + 20 * day_index + random.next_float(-150, 150))


def generate_data_points(
    metric_type: MetricType,
    random: SeededRandom,
    end_day: Optional[DateLike] = None,
    window_days: int = WINDOW_DAYS,
) -> List[TimelineDataPoint]:
    """Daily points for ``window_days`` days ending at midnight UTC of ``end_day``."""
    end_midnight = datetime.combine(utc_day(end_day), time.min, tzinfo=timezone.utc)
    points: List[TimelineDataPoint] = []
    previous = 500.0
    for day_index in range(window_days - 1, -1, -1):
        ts = end_midnight - timedelta(days=day_index)
        if metric_type == "Spend":
            value = _spend_value(random, day_index)
        elif metric_type == "Performance":
            value = _performance_value(random, day_index)
        elif metric_type == "Projection":
            value = _projection_value(random, day_index)
        else:
            value = _clamp(previous + random.next_float(-50, 50), 0.0, 1000.0)
        value = round(value, 2)
        previous = value
        points.append(TimelineDataPoint(timestamp=int(ts.timestamp() * 1000), value=value))
    return points


def _build_block(
    template: TimelineTemplate,
    random: SeededRandom,
    end_day: Optional[DateLike],
    block_id: Optional[str] = None,
) -> TimelineBlock:
    return TimelineBlock(
        id=block_id or template.id,
        title=template.title,
        metric_type=template.metric_type,
        time_range=template.time_range,
        data_points=generate_data_points(template.metric_type, random, end_day),
        disclaimer_flag=True,
    )


def generate_mock_timelines(
    on_date: Optional[DateLike] = None,
    *,
    rng: Optional[SeededRandom] = None,
    templates: Sequence[TimelineTemplate] = TIMELINE_TEMPLATES,
) -> List[TimelineBlock]:
    if not templates:
        raise TemplatePoolError("Timeline template pool is empty")

    end_day = utc_day(on_date)
    random = rng or create_daily_random(end_day)
    count = max(MIN_BLOCKS, random.next_int(MIN_BLOCKS, MAX_BLOCKS + 1))

    shuffled = random.shuffle(templates)
    blocks: List[TimelineBlock] = [
        _build_block(template, random, end_day) for template in shuffled[: min(count, len(shuffled))]
    ]
    while len(blocks) < count:
        position = len(blocks)
        template = templates[position % len(templates)]
        blocks.append(_build_block(template, random, end_day, block_id=f"{template.id}-{position}"))

    ids = [block.id for block in blocks]
    if len(set(ids)) != len(ids):
        raise TemplatePoolError(f"Timeline template pool produced duplicate ids: {ids}")
    return blocks


def generate_single_timeline(metric_type: MetricType, on_date: Optional[DateLike] = None) -> TimelineBlock:
    if not TIMELINE_TEMPLATES:
        raise TemplatePoolError("No timeline template available")
    template = next((t for t in TIMELINE_TEMPLATES if t.metric_type == metric_type), TIMELINE_TEMPLATES[0])
    end_day = utc_day(on_date)
    return TimelineBlock(
        id=template.id,
        title=template.title,
        metric_type=metric_type,
        time_range=template.time_range,
        data_points=generate_data_points(metric_type, create_daily_random(end_day), end_day),
        disclaimer_flag=True,
    )


def get_mock_timelines_response(
    on_date: Optional[DateLike] = None,
    *,
    rng: Optional[SeededRandom] = None,
) -> MockTimelinesResponse:
    return MockTimelinesResponse(blocks=generate_mock_timelines(on_date, rng=rng))
