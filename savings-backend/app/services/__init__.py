"""Service layer namespace."""

__all__ = [
    "assistant",
    "export",
    "mock_recommendations",
    "mock_timelines",
    "references",
    "seed",
]
