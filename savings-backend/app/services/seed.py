"""Deterministic pseudo-random generation for mock dashboard data.

All generation for a given UTC calendar day uses the same seed, so mock data
is stable within a day and varies from one day to the next.
"""
from __future__ import annotations

import math
from datetime import date, datetime, timezone
from typing import List, Optional, Sequence, TypeVar, Union

T = TypeVar("T")

DateLike = Union[date, datetime, str]

LCG_MULTIPLIER = 1664525
LCG_INCREMENT = 1013904223
LCG_MODULUS = 2**32


class InvalidDateError(ValueError):
    """Raised when a value cannot be resolved to a calendar day."""


class TemplatePoolError(RuntimeError):
    """Raised when a generator is configured with an empty template pool."""


class SeededRandom:
    """Linear congruential generator.

    Not cryptographically secure; it only exists to make mock data
    reproducible. Every call advances the internal state, so an instance must
    not be shared between independent generation runs.
    """

    def __init__(self, seed: int) -> None:
        self.state = int(seed) % LCG_MODULUS

    def next(self) -> float:
        self.state = (self.state * LCG_MULTIPLIER + LCG_INCREMENT) % LCG_MODULUS
        return self.state / LCG_MODULUS

    def next_int(self, min_value: int, max_value: int) -> int:
        """Integer in the half-open interval [min_value, max_value)."""
        return math.floor(self.next() * (max_value - min_value)) + min_value

    def next_float(self, min_value: float, max_value: float) -> float:
        return self.next() * (max_value - min_value) + min_value

    def shuffle(self, items: Sequence[T]) -> List[T]:
        """Fisher-Yates shuffle of a copy of ``items``."""
        shuffled = list(items)
        for i in range(len(shuffled) - 1, 0, -1):
            j = self.next_int(0, i + 1)
            shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
        return shuffled


def utc_day(on_date: Optional[DateLike] = None) -> date:
    """Resolve ``on_date`` to its UTC calendar day.

    Naive datetimes are read as UTC. Strings must be ISO-8601.
    """
    if on_date is None:
        return datetime.now(timezone.utc).date()
    if isinstance(on_date, str):
        raw = on_date.strip()
        if not raw:
            raise InvalidDateError("Invalid date provided: empty string")
        try:
            on_date = datetime.fromisoformat(raw.replace("Z", "+00:00"))
        except ValueError as exc:
            raise InvalidDateError(f"Invalid date provided: {raw!r}") from exc
    if isinstance(on_date, datetime):
        if on_date.tzinfo is not None:
            on_date = on_date.astimezone(timezone.utc)
        return on_date.date()
    if isinstance(on_date, date):
        return on_date
    raise InvalidDateError(f"Invalid date provided: {on_date!r}")


def _string_hash(value: str) -> int:
    h = 0
    for ch in value:
        h = (h * 31 + ord(ch)) & 0xFFFFFFFF
    if h >= 2**31:
        h -= 2**32
    return abs(h)


def get_daily_seed(on_date: Optional[DateLike] = None) -> int:
    return _string_hash(utc_day(on_date).isoformat())


def create_daily_random(on_date: Optional[DateLike] = None) -> SeededRandom:
    return SeededRandom(get_daily_seed(on_date))


def create_seeded_random(seed: int) -> SeededRandom:
    """Fixed-seed generator that bypasses date derivation."""
    return SeededRandom(seed)


def create_random(on_date: Optional[DateLike] = None, seed: Optional[int] = None) -> SeededRandom:
    if seed is not None:
        return create_seeded_random(seed)
    return create_daily_random(on_date)
