"""
Records & Year Range
====================
Immutable per-entity-per-year measurements and the helpers that slice them
by year.

Classes:
    Record: One (entity, year) measurement tuple.
"""
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Iterable, Sequence


@dataclass(frozen=True)
class Record:
    entity_id: str
    year: int
    indicator_x: float
    indicator_y: float
    size: float
    category: str

    @property
    def category_key(self) -> str:
        """Styling key of the category, e.g. 'North America' -> 'North-America'."""
        return self.category.replace(" ", "-")


def year_range(min_year: int, max_year: int) -> list[int]:
    """Inclusive, ordered list of selectable years."""
    if min_year > max_year:
        raise ValueError(f"Invalid year range: {min_year} > {max_year}")
    return list(range(min_year, max_year + 1))


def next_year(years: Sequence[int], current: int) -> int:
    """
    Cyclic successor of `current` within `years`.

    The last year wraps back to the first one.
    """
    index = years.index(current)
    return years[(index + 1) % len(years)]


def records_for_year(records: Iterable[Record], year: int) -> list[Record]:
    return [r for r in records if r.year == year]


def find_duplicates(records: Iterable[Record]) -> list[tuple[str, int]]:
    """(entity_id, year) keys that occur more than once, in first-seen order."""
    counts = Counter((r.entity_id, r.year) for r in records)
    return [key for key, n in counts.items() if n > 1]
