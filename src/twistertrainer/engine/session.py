"""Adaptive perfection session.

A session runs ``level + 2`` rounds. Each round picks an item from the
categorized buckets according to how far the session has progressed, asks
for a 1-5 self-rating, updates the running performance profile and scales
the remaining target difficulties up or down.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Callable, Iterator, Optional, Sequence

from twistertrainer.engine.analyzer import AnalyzedItem, TextAnalyzer
from twistertrainer.engine.categorizer import Categories, categorize
from twistertrainer.engine.difficulty import Band, band_for_progress
from twistertrainer.engine.focus import Focus, rating_feedback, strategy_for
from twistertrainer.engine.selector import EmptyPool

logger = logging.getLogger(__name__)

MIN_LEVEL = 1
MAX_LEVEL = 5
MIN_RATING = 1
MAX_RATING = 5

INITIAL_AVERAGE = 3.0
KEEP_WEIGHT = 0.7
NEW_WEIGHT = 0.3
WEAK_THRESHOLD = 3.5

PROGRESSION_FLOOR = 1.0
PROGRESSION_CEILING = 5.0
RATING_MULTIPLIERS = {1: 0.8, 2: 0.9, 3: 1.0, 4: 1.1, 5: 1.2}

EXTRA_TIP_CHANCE = 0.7
EXTRA_TIPS = (
    "Record yourself and listen back to check your pronunciation",
    "Read poetry and prose aloud to develop your diction",
    "Warm up your lips and tongue before training",
    "Practice for 15-20 minutes every day for steady progress",
    "Try different tempos and intonations with the same tongue twister",
)


def clamp_level(level: int) -> int:
    return min(max(int(level), MIN_LEVEL), MAX_LEVEL)


def clamp_rating(rating: int) -> int:
    return min(max(int(rating), MIN_RATING), MAX_RATING)


def _clamp_target(value: float) -> float:
    return min(max(value, PROGRESSION_FLOOR), PROGRESSION_CEILING)


def standing_for(average: float) -> str:
    if average < 2.5:
        return "beginner"
    if average < 3.5:
        return "intermediate"
    if average < 4.5:
        return "advanced"
    return "expert"


def pick_extra_tip(rng: random.Random) -> Optional[str]:
    """An extra practice tip, offered on most but not all sessions."""
    if rng.random() < EXTRA_TIP_CHANCE:
        return rng.choice(EXTRA_TIPS)
    return None


@dataclass
class PerformanceProfile:
    """Running per-category averages and every rating given this session."""
    categories: dict[str, float] = field(default_factory=dict)
    ratings: list[int] = field(default_factory=list)

    @property
    def average(self) -> float:
        if not self.ratings:
            return INITIAL_AVERAGE
        return sum(self.ratings) / len(self.ratings)

    def touch(self, category: str, rating: int) -> float:
        current = self.categories.get(category, INITIAL_AVERAGE)
        self.categories[category] = current * KEEP_WEIGHT + rating * NEW_WEIGHT
        return self.categories[category]

    def record(self, rating: int, categories: Sequence[str]) -> None:
        self.ratings.append(rating)
        for category in categories:
            self.touch(category, rating)

    def weakest(self, threshold: float = WEAK_THRESHOLD) -> Optional[tuple[str, float]]:
        """Lowest tracked category, if its average is under ``threshold``."""
        lowest: Optional[tuple[str, float]] = None
        for name, value in self.categories.items():
            if lowest is None or value < lowest[1]:
                lowest = (name, value)
        if lowest is not None and lowest[1] < threshold:
            return lowest
        return None


class DifficultyProgression:
    """Per-round target difficulties, rescaled after every rated round."""

    def __init__(self, values: Sequence[float]):
        self.values = list(values)

    @classmethod
    def generate(
        cls, level: int, rounds: int, rng: random.Random, start: float = 1.0
    ) -> "DifficultyProgression":
        max_diff = max(level * 1.5, start)
        step = (max_diff - start) / (rounds - 1) if rounds > 1 else 0.0
        values = []
        for i in range(rounds):
            jitter = 0.9 + rng.random() * 0.2
            values.append(_clamp_target((start + i * step) * jitter))
        return cls(values)

    def __len__(self) -> int:
        return len(self.values)

    def __getitem__(self, index: int) -> float:
        return self.values[index]

    def adjust(self, completed_round: int, rating: int) -> None:
        """Scale every slot after ``completed_round`` (1-based) by the rating's multiplier."""
        factor = RATING_MULTIPLIERS[clamp_rating(rating)]
        for i in range(completed_round, len(self.values)):
            self.values[i] = _clamp_target(self.values[i] * factor)


@dataclass(frozen=True)
class Round:
    number: int
    total: int
    item: AnalyzedItem
    target: float
    display_fields: dict[str, object] = field(default_factory=dict)
    advice: list[str] = field(default_factory=list)

    @property
    def band(self) -> Band:
        return self.item.band

    @property
    def score(self) -> float:
        return self.item.score


@dataclass(frozen=True)
class RoundOutcome:
    round: Round
    rating: int
    feedback: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class SessionSummary:
    focus: Focus
    rounds: int
    ratings: list[int]
    average: float
    weakest_category: Optional[str] = None
    weakest_average: Optional[float] = None
    practice: str = ""
    next_steps: tuple[str, ...] = ()
    extra_tip: Optional[str] = None

    @property
    def recommendation(self) -> str:
        if self.average < 3.0:
            return ("Keep practicing in this mode. "
                    "Concentrate on slower, clearer pronunciation.")
        if self.average < 4.0:
            return ("You are ready for a little more difficulty. "
                    "Try a faster pace or harder tongue twisters.")
        return ("Excellent result! You are ready for the advanced level. "
                "Move on to harder tongue twisters or raise the tempo.")

    @property
    def standing(self) -> str:
        return standing_for(self.average)

    @property
    def next_focus(self) -> Focus:
        """Stay on the current focus until the intermediate standing is passed."""
        if self.standing in ("beginner", "intermediate"):
            return self.focus
        return self.focus.next_focus


class PerfectionSession:
    """One adaptive session over a fixed training subset.

    The session owns its profile and progression. ``play`` may be consumed
    only once.
    """

    def __init__(
        self,
        items: Sequence[AnalyzedItem],
        focus: Focus,
        level: int = 3,
        rng: Optional[random.Random] = None,
        analyzer: Optional[TextAnalyzer] = None,
    ):
        self.focus = focus
        self.level = clamp_level(level)
        self.rounds = self.level + 2
        self.rng = rng or random.Random()
        self.strategy = strategy_for(focus, analyzer)
        self.categories: Categories = categorize(items, focus, strategy=self.strategy)
        if self.categories.is_empty:
            raise EmptyPool("No tongue twisters to train on")
        self.profile = PerformanceProfile()
        self.progression = DifficultyProgression.generate(self.level, self.rounds, self.rng)
        self._started = False

    def progress(self, round_no: int) -> float:
        if self.rounds <= 1:
            return 0.0
        return (round_no - 1) / (self.rounds - 1)

    def choose_category(self, round_no: int) -> str:
        cats = self.categories
        if round_no == 1 and cats[Band.EASY.value]:
            return Band.EASY.value
        if round_no == self.rounds and cats[Band.EXPERT.value]:
            return Band.EXPERT.value

        progress = self.progress(round_no)
        candidates = cats.non_empty(self.strategy.tier_menu(progress))
        if candidates:
            return self.rng.choice(candidates)

        name = band_for_progress(progress).value
        if cats[name]:
            logger.debug("Round %d: no menu bucket available, using band %s", round_no, name)
            return name

        remaining = cats.non_empty()
        if not remaining:
            raise EmptyPool("No tongue twisters left to choose from")
        logger.debug("Round %d: band %s empty, using %s", round_no, name, remaining[0])
        return remaining[0]

    def select_item(self, round_no: int) -> AnalyzedItem:
        return self.rng.choice(self.categories[self.choose_category(round_no)])

    def next_round(self, round_no: int) -> Round:
        item = self.select_item(round_no)
        target = self.progression[round_no - 1]
        return Round(
            number=round_no,
            total=self.rounds,
            item=item,
            target=target,
            display_fields=self.strategy.display_fields(item),
            advice=self.strategy.advice(item, round_no, self.rounds, target),
        )

    def record(self, rnd: Round, rating: int) -> RoundOutcome:
        rating = clamp_rating(rating)
        tracked = [rnd.item.band.value] + self.strategy.tracked_categories(rnd.item)
        self.profile.record(rating, tracked)

        if rnd.number < self.rounds:
            self.progression.adjust(rnd.number, rating)
            logger.debug("Progression after round %d: %s", rnd.number, self.progression.values)

        feedback = rating_feedback(rating, rnd.item)
        if rating < 4:
            hint = self.strategy.low_rating_hint(rnd.item)
            if hint:
                feedback.append(hint)
        return RoundOutcome(round=rnd, rating=rating, feedback=feedback)

    def play(self, rate: Callable[[Round], int]) -> Iterator[RoundOutcome]:
        """Run every round, asking ``rate`` for the user's rating of each."""
        if self._started:
            raise RuntimeError("A session can only be played once")
        self._started = True

        for round_no in range(1, self.rounds + 1):
            rnd = self.next_round(round_no)
            yield self.record(rnd, rate(rnd))

    def summary(self) -> SessionSummary:
        weakest = self.profile.weakest()
        average = self.profile.average
        return SessionSummary(
            focus=self.focus,
            rounds=self.rounds,
            ratings=list(self.profile.ratings),
            average=average,
            weakest_category=weakest[0] if weakest else None,
            weakest_average=weakest[1] if weakest else None,
            practice=self.strategy.practice,
            next_steps=tuple(self.strategy.next_steps(standing_for(average), average)),
            extra_tip=pick_extra_tip(self.rng),
        )


def run_session(
    items: Sequence[AnalyzedItem],
    focus: Focus,
    level: int,
    rate: Callable[[Round], int],
    rng: Optional[random.Random] = None,
    on_outcome: Optional[Callable[[RoundOutcome], None]] = None,
) -> SessionSummary:
    session = PerfectionSession(items, focus, level, rng=rng)
    for outcome in session.play(rate):
        if on_outcome is not None:
            on_outcome(outcome)
    return session.summary()
