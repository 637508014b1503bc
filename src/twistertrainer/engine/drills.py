"""Fixed training routines: every selected item presented once, in order."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence

from twistertrainer.engine.analyzer import AnalyzedItem

CHALLENGE_SPEEDS = ("Slow", "Medium", "Fast", "Very fast")


class Mode(str, Enum):
    STANDARD = "standard"
    TIMED = "timed"
    REPEAT = "repeat"
    CHALLENGE = "challenge"
    PERFECTION = "perfection"

    @classmethod
    def from_choice(cls, choice: str) -> "Mode":
        """Unknown modes fall back to the standard routine."""
        try:
            return cls(choice.strip().lower())
        except ValueError:
            return cls.STANDARD


@dataclass(frozen=True)
class DrillStep:
    index: int  # 1-based
    total: int
    item: AnalyzedItem
    # Readings the user confirms one by one after the item is shown
    readings: list[str] = field(default_factory=list)
    seconds: int = 0


def build_drill(
    mode: Mode,
    items: Sequence[AnalyzedItem],
    repetitions: int = 3,
    seconds: int = 30,
) -> list[DrillStep]:
    if mode == Mode.PERFECTION:
        raise ValueError("Perfection mode runs as an adaptive session")

    readings: list[str] = []
    if mode == Mode.REPEAT:
        repetitions = max(repetitions, 1)
        readings = [f"Repetition {n} of {repetitions}" for n in range(1, repetitions + 1)]
    elif mode == Mode.CHALLENGE:
        readings = [f"Reading #{n}: {speed}" for n, speed in enumerate(CHALLENGE_SPEEDS, 1)]

    return [
        DrillStep(
            index=i,
            total=len(items),
            item=item,
            readings=list(readings),
            seconds=max(seconds, 1) if mode == Mode.TIMED else 0,
        )
        for i, item in enumerate(items, 1)
    ]
