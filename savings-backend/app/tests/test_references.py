from __future__ import annotations

import pytest

from app.data import load_fixture
from app.services.assistant import RESPONSE_TEMPLATES, build_render_context
from app.services.references import (
    Citation,
    ReferenceTokenError,
    cite,
    extract_references,
    format_token,
    is_valid_reference,
    missing_references,
    validate_references,
)


@pytest.mark.parametrize(
    "ref,valid",
    [
        ("agg:2025-09-19T10", True),
        ("rec:01234567-89ab-cdef-0123-456789abcdef", True),
        ("rec:rightsizing-ec2", True),
        ("usr:123", False),
        ("agg:", False),
        ("rec:has space", False),
    ],
)
def test_reference_pattern(ref, valid):
    assert is_valid_reference(ref) is valid


def test_format_token_rejects_malformed_reference():
    assert format_token("agg:2025-09-19T10") == "[REF:agg:2025-09-19T10]"
    with pytest.raises(ReferenceTokenError):
        format_token("bogus")


def test_extract_references_keeps_first_appearance_order():
    text = "See [REF:rec:b] then [REF:agg:a] and [REF:rec:b] again, ignore [REF:usr:x]."
    assert extract_references(text) == ["rec:b", "agg:a"]


def test_missing_references_detected():
    text = "Only [REF:agg:2025-09-19T10] is cited."
    assert missing_references(text, ["agg:2025-09-19T10", "rec:abc"]) == ["rec:abc"]
    with pytest.raises(ReferenceTokenError):
        validate_references(text, ["agg:2025-09-19T10", "rec:abc"])


def test_cite_fills_tokens_and_fields():
    text, refs = cite(
        "Spend rose {0} on {day}; fix with {1}.",
        [Citation(kind="agg", id="2024-01-15T10"), Citation(kind="rec", id="rightsizing-ec2")],
        day="2024-01-15",
    )
    assert text == "Spend rose [REF:agg:2024-01-15T10] on 2024-01-15; fix with [REF:rec:rightsizing-ec2]."
    assert refs == ["agg:2024-01-15T10", "rec:rightsizing-ec2"]


def test_cite_rejects_unused_citation():
    with pytest.raises(ReferenceTokenError):
        cite("Nothing cited here {0}.", [Citation(kind="agg", id="a"), Citation(kind="rec", id="b")])


@pytest.mark.parametrize("template", RESPONSE_TEMPLATES, ids=lambda t: t.intent)
def test_every_response_template_satisfies_reference_invariant(template):
    for day in ("2024-01-15", "2024-06-30", "2025-09-19"):
        text, refs = template.render(build_render_context(day))
        assert refs
        assert all(is_valid_reference(ref) for ref in refs)
        assert set(refs) <= set(extract_references(text))


def test_assistant_fixture_satisfies_reference_invariant():
    payload = load_fixture("assistant.json")
    validate_references(payload["response"], payload["references"])
