"""Inline citation tokens used in assistant prose.

A citation is written into text as ``[REF:<kind>:<id>]`` and mirrored, without
brackets, into the response's ``references`` list.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, List, Literal, Sequence, Tuple

CitationKind = Literal["agg", "rec"]

REFERENCE_PATTERN = re.compile(r"^(agg|rec):[A-Za-z0-9:-]+$")
TOKEN_PATTERN = re.compile(r"\[REF:((?:agg|rec):[A-Za-z0-9:-]+)\]")


class ReferenceTokenError(ValueError):
    """Raised when text and its references list fall out of step."""


@dataclass(frozen=True)
class Citation:
    kind: CitationKind
    id: str

    @property
    def ref(self) -> str:
        return f"{self.kind}:{self.id}"

    @property
    def token(self) -> str:
        return format_token(self.ref)


def is_valid_reference(ref: str) -> bool:
    return bool(REFERENCE_PATTERN.match(ref))


def format_token(ref: str) -> str:
    if not is_valid_reference(ref):
        raise ReferenceTokenError(f"Malformed reference {ref!r}")
    return f"[REF:{ref}]"


def extract_references(text: str) -> List[str]:
    """References cited in ``text``, in order of first appearance."""
    found: List[str] = []
    for match in TOKEN_PATTERN.finditer(text):
        ref = match.group(1)
        if ref not in found:
            found.append(ref)
    return found


def missing_references(text: str, references: Iterable[str]) -> List[str]:
    cited = set(extract_references(text))
    return [ref for ref in references if ref not in cited]


def validate_references(text: str, references: Sequence[str]) -> None:
    malformed = [ref for ref in references if not is_valid_reference(ref)]
    if malformed:
        raise ReferenceTokenError(f"Malformed references: {', '.join(malformed)}")
    missing = missing_references(text, references)
    if missing:
        raise ReferenceTokenError(f"References without a matching token: {', '.join(missing)}")


def cite(template: str, citations: Sequence[Citation], **fields) -> Tuple[str, List[str]]:
    """Fill positional placeholders with citation tokens.

    ``{0}`` receives the first citation's token, ``{1}`` the second and so
    on; keyword ``fields`` fill the named placeholders. Every citation must
    end up in the text.
    """
    text = template.format(*(citation.token for citation in citations), **fields)
    references: List[str] = []
    for citation in citations:
        if citation.ref not in references:
            references.append(citation.ref)
    validate_references(text, references)
    return text, references
