"""Training subset selection: single-band sampling or a balanced blend."""

from __future__ import annotations

import logging
import math
import random
from typing import Optional, Sequence, TypeVar

from twistertrainer.engine.analyzer import AnalyzedItem
from twistertrainer.engine.difficulty import Band

logger = logging.getLogger(__name__)

T = TypeVar("T")

BALANCE_RATIOS: dict[Band, float] = {
    Band.EASY: 0.25,
    Band.MEDIUM: 0.30,
    Band.HARD: 0.30,
    Band.EXPERT: 0.15,
}

# Order in which surplus is removed and shortfall is filled
TRIM_ORDER = (Band.EXPERT, Band.HARD, Band.MEDIUM, Band.EASY)
FILL_ORDER = (Band.MEDIUM, Band.EASY, Band.HARD, Band.EXPERT)


class EmptyPool(Exception):
    """The requested band or category has no items."""


def round_half_away(value: float) -> int:
    if value < 0:
        return -math.floor(-value + 0.5)
    return math.floor(value + 0.5)


def group_by_band(items: Sequence[AnalyzedItem]) -> dict[Band, list[AnalyzedItem]]:
    pools: dict[Band, list[AnalyzedItem]] = {band: [] for band in Band}
    for item in items:
        pools[item.band].append(item)
    return pools


def shuffled(items: Sequence[T], rng: random.Random) -> list[T]:
    result = list(items)
    rng.shuffle(result)
    return result


def select_random(pool: Sequence[T], n: int, rng: Optional[random.Random] = None) -> list[T]:
    """Pick ``n`` distinct items uniformly. Returns the whole pool if ``n`` covers it."""
    if not pool:
        raise EmptyPool("No tongue twisters in the selected pool")
    if n >= len(pool):
        return list(pool)
    rng = rng or random.Random()
    return shuffled(pool, rng)[:n]


def balanced_counts(pools: dict[Band, Sequence], total: int) -> dict[Band, int]:
    """Per-band counts for a balanced selection of ``total`` items."""
    total = max(total, 0)
    counts = {band: round_half_away(total * BALANCE_RATIOS[band]) for band in Band}

    while sum(counts.values()) > total:
        for band in TRIM_ORDER:
            if counts[band] > 0:
                counts[band] -= 1
                break

    counts = {band: min(counts[band], len(pools[band])) for band in Band}

    missing = total - sum(counts.values())
    for _ in range(missing):
        for band in FILL_ORDER:
            if len(pools[band]) > counts[band]:
                counts[band] += 1
                break

    return counts


def select_balanced(
    pools: dict[Band, Sequence[AnalyzedItem]],
    total: int,
    rng: Optional[random.Random] = None,
) -> list[AnalyzedItem]:
    """Blend every band by fixed ratios, then shuffle the bands together."""
    rng = rng or random.Random()
    if not any(pools.values()):
        return []

    counts = balanced_counts(pools, total)
    result: list[AnalyzedItem] = []
    for band in Band:
        if counts[band] > 0:
            result.extend(select_random(pools[band], counts[band], rng))
            logger.info("Selected %d %s tongue twisters", counts[band], band.value)

    return shuffled(result, rng)


def select_corpus(
    items: Sequence[AnalyzedItem],
    band: Optional[Band],
    count: int,
    balanced: bool = False,
    rng: Optional[random.Random] = None,
) -> list[AnalyzedItem]:
    """Choose the training subset.

    ``band`` of ``None`` means every band. The balanced blend only applies
    when no band is requested; otherwise the matching pool is sampled.
    """
    rng = rng or random.Random()
    count = max(count, 1)

    if balanced and band is None:
        selected = select_balanced(group_by_band(items), count, rng)
        if not selected:
            raise EmptyPool("The corpus is empty")
        return selected

    pool = list(items) if band is None else group_by_band(items)[band]
    if not pool:
        label = "any" if band is None else band.value
        raise EmptyPool(f"No tongue twisters of {label} difficulty")
    return select_random(pool, count, rng)
