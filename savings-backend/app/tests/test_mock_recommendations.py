from __future__ import annotations

import pytest

from app.services.mock_recommendations import (
    MAX_RECOMMENDATIONS,
    MIN_RECOMMENDATIONS,
    RECOMMENDATION_TEMPLATES,
    deduplicate_recommendations,
    generate_mock_recommendations,
    get_mock_recommendations_response,
)
from app.services.seed import TemplatePoolError, create_seeded_random


def test_minimum_and_maximum_count():
    for day in ("2024-01-15", "2024-02-29", "2024-07-04", "2025-12-31"):
        recommendations = generate_mock_recommendations(day)
        assert MIN_RECOMMENDATIONS <= len(recommendations) <= MAX_RECOMMENDATIONS


def test_ids_are_unique():
    for offset in range(1, 29):
        recommendations = generate_mock_recommendations(f"2024-03-{offset:02d}")
        ids = [rec.id for rec in recommendations]
        assert len(ids) == len(set(ids))


def test_same_day_is_identical():
    first = get_mock_recommendations_response("2024-01-15").model_dump(by_alias=True)
    second = get_mock_recommendations_response("2024-01-15T18:45:00Z").model_dump(by_alias=True)
    assert first == second


def test_display_order_is_sequential():
    recommendations = generate_mock_recommendations("2024-01-15")
    assert [rec.display_order for rec in recommendations] == list(range(1, len(recommendations) + 1))


def test_selection_comes_from_template_pool():
    template_ids = {template.id for template in RECOMMENDATION_TEMPLATES}
    assert {rec.id for rec in generate_mock_recommendations("2024-01-15")} <= template_ids


def test_small_pool_is_cycled_with_unique_ids():
    pool = RECOMMENDATION_TEMPLATES[:2]
    recommendations = generate_mock_recommendations(rng=create_seeded_random(1), templates=pool)
    ids = [rec.id for rec in recommendations]
    assert len(ids) >= MIN_RECOMMENDATIONS
    assert len(ids) == len(set(ids))
    assert any(rec_id.startswith(f"{pool[0].id}-") or rec_id.startswith(f"{pool[1].id}-") for rec_id in ids)


def test_empty_pool_raises():
    with pytest.raises(TemplatePoolError):
        generate_mock_recommendations("2024-01-15", templates=())


def test_deduplicate_keeps_first_occurrence():
    first, second = RECOMMENDATION_TEMPLATES[:2]
    repeat = first.model_copy(update={"title": "Duplicate"})
    unique = deduplicate_recommendations([first, second, repeat])
    assert [rec.id for rec in unique] == [first.id, second.id]
    assert unique[0].title == first.title


def test_serialized_fields_use_camel_case():
    payload = get_mock_recommendations_response("2024-01-15").model_dump(by_alias=True)
    stub = payload["recommendations"][0]
    assert {"id", "title", "shortDescription", "impactLevel", "status", "displayOrder"} <= set(stub)
    assert stub["impactLevel"] in {"Low", "Medium", "High"}
    assert stub["status"] in {"Prototype", "ComingSoon", "Future"}


def test_golden_order_for_fixed_day():
    ids = [rec.id for rec in generate_mock_recommendations("2024-01-15")]
    assert ids == [
        "storage-class-optimization",
        "reserved-instance-optimization",
        "database-rightsizing",
        "lambda-memory-optimization",
        "unused-volumes",
        "cloudfront-optimization",
    ]


def test_same_day_serializes_to_identical_json():
    first = get_mock_recommendations_response("2024-01-15").model_dump_json(by_alias=True)
    second = get_mock_recommendations_response("2024-01-15").model_dump_json(by_alias=True)
    assert first == second
