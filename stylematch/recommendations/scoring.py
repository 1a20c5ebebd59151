"""
Ranking policies shared by the recommendation and matching engines.

A policy is an ordered chain of criteria. Items are compared criterion by
criterion; the first criterion on which they differ decides the order. New
ranking factors are added by extending the chain, not by touching the
callers that sort with it.
"""
from __future__ import annotations

from dataclasses import dataclass
from functools import cmp_to_key
from operator import attrgetter
from typing import Any, Callable, Iterable, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Criterion:
    name: str
    value: Callable[[Any], Any]
    descending: bool = False


def by_attribute(attr: str, descending: bool = False) -> Criterion:
    return Criterion(name=attr, value=attrgetter(attr), descending=descending)


@dataclass(frozen=True)
class RankingPolicy:
    criteria: tuple[Criterion, ...]

    def compare(self, a: Any, b: Any) -> int:
        """Return <0 if *a* ranks before *b*, >0 if after, 0 if tied on every criterion."""
        for criterion in self.criteria:
            va, vb = criterion.value(a), criterion.value(b)
            if va == vb:
                continue
            result = -1 if va < vb else 1
            return -result if criterion.descending else result
        return 0

    def prefers(self, a: Any, b: Any) -> bool:
        return self.compare(a, b) < 0

    def rank(self, items: Iterable[T]) -> list[T]:
        return sorted(items, key=cmp_to_key(self.compare))


# Elo descending first; cost, distance and id only break ties.
OFFERING_RANKING = RankingPolicy((
    by_attribute("elo_rating", descending=True),
    by_attribute("total_cost"),
    by_attribute("distance"),
    by_attribute("offering_id"),
))
