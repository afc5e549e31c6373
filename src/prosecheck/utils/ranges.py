"""Utility functions for working with document ranges.

The helpers in this module are pure.  Ranges are half-open intervals
``[start, end)``, but invalidation checks use :func:`ranges_touch`, which also
treats zero-length ranges (deletion points) and shared boundaries as contact.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover - typing only
    from prosecheck.document.base import Range


def ranges_touch(a: Range, b: Range) -> bool:
    """Return ``True`` if ``a`` and ``b`` overlap or meet at a boundary."""

    return a.start <= b.end and b.start <= a.end


def range_contains(outer: Range, inner: Range) -> bool:
    """Return ``True`` if ``outer`` fully contains ``inner``."""

    return outer.start <= inner.start and inner.end <= outer.end


def touches_any(rng: Range, others: Iterable[Range]) -> bool:
    """Return ``True`` if ``rng`` touches any range in ``others``."""

    return any(ranges_touch(rng, other) for other in others)


def dedupe_ranges(ranges: Iterable[Range]) -> list[Range]:
    """Return ``ranges`` without exact duplicates, keeping first occurrences."""

    seen: set[Range] = set()
    result: list[Range] = []
    for rng in ranges:
        if rng in seen:
            continue
        seen.add(rng)
        result.append(rng)
    return result


__all__ = [
    "dedupe_ranges",
    "range_contains",
    "ranges_touch",
    "touches_any",
]
