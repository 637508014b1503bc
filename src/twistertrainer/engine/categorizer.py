"""Overlapping training buckets for a perfection session."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence

from twistertrainer.engine.analyzer import AnalyzedItem, TextAnalyzer
from twistertrainer.engine.difficulty import Band
from twistertrainer.engine.focus import Focus, FocusStrategy, strategy_for


@dataclass
class Categories:
    """Name -> items multi-map. An item may sit in several buckets."""
    buckets: dict[str, list[AnalyzedItem]] = field(default_factory=dict)

    def __getitem__(self, name: str) -> list[AnalyzedItem]:
        return self.buckets.get(name, [])

    def __contains__(self, name: str) -> bool:
        return name in self.buckets

    def names(self) -> list[str]:
        return list(self.buckets)

    def non_empty(self, names: Optional[Iterable[str]] = None) -> list[str]:
        names = self.buckets if names is None else names
        return [n for n in names if self[n]]

    @property
    def is_empty(self) -> bool:
        return not self.non_empty()


def categorize(
    items: Sequence[AnalyzedItem],
    focus: Focus,
    strategy: Optional[FocusStrategy] = None,
    analyzer: Optional[TextAnalyzer] = None,
) -> Categories:
    """Build the band buckets plus the buckets of ``focus``.

    Every bucket is present even when nothing matches it.
    """
    strategy = strategy or strategy_for(focus, analyzer)
    predicates = strategy.buckets()

    buckets: dict[str, list[AnalyzedItem]] = {band.value: [] for band in Band}
    for name in predicates:
        buckets[name] = []

    for item in items:
        buckets[item.band.value].append(item)
        for name, matches in predicates.items():
            if matches(item):
                buckets[name].append(item)

    return Categories(buckets)
