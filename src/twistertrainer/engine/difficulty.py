"""Difficulty bands over the scalar difficulty score."""

from __future__ import annotations

from enum import Enum


class Band(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    EXPERT = "expert"

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @classmethod
    def from_choice(cls, choice: str) -> "Band | None":
        """Parse a user-supplied band name. ``None`` means every band ("all")."""
        try:
            return cls(choice.strip().lower())
        except ValueError:
            return None


# Upper bounds (exclusive) for every band except the last
BAND_THRESHOLDS: tuple[tuple[float, Band], ...] = (
    (10.0, Band.EASY),
    (20.0, Band.MEDIUM),
    (30.0, Band.HARD),
)


def classify(score: float) -> Band:
    for upper, band in BAND_THRESHOLDS:
        if score < upper:
            return band
    return Band.EXPERT


def band_for_progress(progress: float) -> Band:
    """Band a session should draw from at ``progress`` in [0, 1]."""
    if progress < 0.3:
        return Band.EASY
    if progress < 0.6:
        return Band.MEDIUM
    if progress < 0.9:
        return Band.HARD
    return Band.EXPERT
