"""Diction focus areas.

Each focus is a strategy: which extra buckets it builds, which buckets it
draws from as a session progresses, and what it tells the user about an item.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Callable, Optional

from twistertrainer.engine.analyzer import AnalyzedItem, TextAnalyzer
from twistertrainer.engine.difficulty import band_for_progress

Predicate = Callable[[AnalyzedItem], bool]
Tier = tuple[float, tuple[str, ...]]


class Focus(str, Enum):
    ARTICULATION = "articulation"
    RHYTHM = "rhythm"
    STRESS = "stress"
    BREATHING = "breathing"
    SPEED = "speed"

    @classmethod
    def from_choice(cls, choice: "str | int") -> "Focus":
        """Accept a focus name or its index 0-4; out-of-range indexes are clamped."""
        members = list(cls)
        if isinstance(choice, int) or str(choice).strip().lstrip("-").isdigit():
            index = min(max(int(choice), 0), len(members) - 1)
            return members[index]
        return cls(str(choice).strip().lower())

    @property
    def description(self) -> str:
        return FOCUS_DESCRIPTIONS[self]

    @property
    def next_focus(self) -> "Focus":
        members = list(Focus)
        return members[(members.index(self) + 1) % len(members)]


FOCUS_DESCRIPTIONS = {
    Focus.ARTICULATION: "Clear pronunciation of every sound",
    Focus.RHYTHM: "Even pace of speech",
    Focus.STRESS: "Correct stress in words",
    Focus.BREATHING: "Breath control while speaking",
    Focus.SPEED: "More speed without losing quality",
}


def _contains_any(text: str, letters) -> bool:
    return any(ch in text for ch in letters)


def _round_line(round_no: int, lines: tuple[str, ...]) -> str:
    """Round-specific line; the last entry covers every later round."""
    return lines[min(round_no, len(lines)) - 1]


class FocusStrategy:
    focus: Focus
    tiers: tuple[Tier, ...] = ()
    tips: tuple[str, ...] = ()
    hint: Optional[str] = None
    practice: str = ""

    def __init__(self, analyzer: Optional[TextAnalyzer] = None):
        self.analyzer = analyzer or TextAnalyzer()
        self.tables = self.analyzer.tables

    def buckets(self) -> dict[str, Predicate]:
        """Focus-specific bucket names and their membership tests."""
        return {}

    def tier_menu(self, progress: float) -> tuple[str, ...]:
        for upper, names in self.tiers:
            if progress < upper:
                return names
        return (band_for_progress(progress).value,)

    def tracked_categories(self, item: AnalyzedItem) -> list[str]:
        """Profile categories, beyond the band, that a rating of ``item`` updates."""
        return []

    def display_fields(self, item: AnalyzedItem) -> dict[str, object]:
        return {}

    def advice(
        self, item: AnalyzedItem, round_no: int, total_rounds: int, target: float
    ) -> list[str]:
        return []

    def low_rating_hint(self, item: AnalyzedItem) -> Optional[str]:
        return self.hint

    def next_steps(self, standing: str, average: float) -> list[str]:
        """Suggestions for the next session once the user has moved past this focus."""
        return []


ADVANCED_STANDINGS = ("advanced", "expert")


class ArticulationStrategy(FocusStrategy):
    focus = Focus.ARTICULATION
    tiers = (
        (0.3, ("easy", "medium", "sibilant")),
        (0.6, ("medium", "hissing", "sibilant")),
        (math.inf, ("hard", "expert", "sonorant", "complex_combos")),
    )
    tips = (
        "Pronounce every consonant as crisply as you can",
        "Keep the vowels round and full",
        "Watch the position of your tongue and lips",
    )
    rounds = (
        "Focus: crisp pronunciation of every consonant",
        "Focus: bring out the hissing and sibilant sounds (ш, щ, ж, с, з)",
        "Focus: work through the consonant clusters",
        "Focus: smooth transitions between all sounds",
        "Focus: flawless pronunciation of every sound",
    )
    hint = "Tip: give the difficult sounds extra attention and pronounce them clearly."
    practice = "Lip and tongue exercises before practice will sharpen your articulation"

    def next_steps(self, standing, average):
        if standing not in ADVANCED_STANDINGS:
            return []
        level = min(5, int(average) + 1)
        return [f"Raise the demand level (--level {level}) "
                "or train on more tongue twisters per session (--count 10)"]

    def _groups(self):
        return {
            "hissing": self.tables.hissing,
            "sibilant": self.tables.sibilant,
            "sonorant": self.tables.sonorant,
        }

    def buckets(self) -> dict[str, Predicate]:
        buckets: dict[str, Predicate] = {
            name: (lambda a, letters=letters: _contains_any(a.text.lower(), letters))
            for name, letters in self._groups().items()
        }
        buckets["complex_combos"] = lambda a: a.stats.difficult_combos > 2
        return buckets

    def tracked_categories(self, item: AnalyzedItem) -> list[str]:
        text = item.text.lower()
        return [name for name, letters in self._groups().items() if _contains_any(text, letters)]

    def display_fields(self, item: AnalyzedItem) -> dict[str, object]:
        combos = self.analyzer.found_combinations(item.text, limit=3)
        sounds = self.analyzer.found_hard_sounds(item.text)
        parts = []
        if combos:
            parts.append(", ".join(combos))
        if sounds:
            parts.append(("also sounds: " if combos else "") + ", ".join(sounds))
        return {
            "Difficult sounds": "; ".join(parts) if parts else "ordinary sounds",
            "Difficult combinations": item.stats.difficult_combos,
        }

    def advice(self, item, round_no, total_rounds, target):
        lines = [_round_line(round_no, self.rounds)]
        combos = self.analyzer.found_combinations(item.text, limit=1)
        if combos:
            lines.append(f'Pay special attention to the combination "{combos[0]}"')

        text = item.text.lower()
        found = []
        for name, letters in self.tables.sound_groups().items():
            count = sum(1 for ch in text if ch in letters)
            if count:
                found.append(f"- {name} ({count} sounds)")
        if found:
            lines.append("Difficult sound groups in this tongue twister:")
            lines.extend(found)
        return lines

    def low_rating_hint(self, item):
        return self.hint if item.stats.difficult_sounds > 0 else None


class RhythmStrategy(FocusStrategy):
    focus = Focus.RHYTHM
    tiers = (
        (0.4, ("short", "easy", "medium")),
        (0.7, ("medium", "rhythmic")),
        (math.inf, ("long", "hard", "rhythmic")),
    )
    tips = (
        "Keep the pronunciation even",
        "Do not rush, hold the same tempo throughout",
        "Use a metronome if you can (60-80 beats per minute)",
    )
    rounds = (
        "Focus: even pronunciation of every syllable",
        "Focus: correct pauses between words",
        "Focus: a smooth rhythmic pattern",
        "Focus: natural rhythm while staying clear",
    )
    hint = "Tip: clap out the rhythm of the tongue twister before saying it."
    practice = "Practice with a metronome to improve your rhythm"

    def next_steps(self, standing, average):
        if standing not in ADVANCED_STANDINGS:
            return []
        return ["Blend difficulty bands (--mix) for more varied practice"]

    def buckets(self):
        return {
            "short": lambda a: a.stats.word_count <= 3,
            "long": lambda a: a.stats.word_count >= 7,
            "rhythmic": lambda a: a.stats.repeat_chars > a.stats.char_count // 3,
        }

    def rhythm_pattern(self, text: str, sep: str = " ") -> str:
        return sep.join("•" * self.analyzer.word_syllables(w) for w in text.split())

    def display_fields(self, item):
        return {
            "Rhythmic structure": self.rhythm_pattern(item.text),
            "Syllables": self.analyzer.syllables(item.text),
            "Words": item.stats.word_count,
        }

    def advice(self, item, round_no, total_rounds, target):
        lines = [
            _round_line(round_no, self.rounds),
            "Pattern: " + self.rhythm_pattern(item.text, sep=" | "),
        ]
        if item.stats.word_count > 5:
            lines.append("Keep a steady pace across the long phrase")
        else:
            lines.append("Concentrate on an even rhythm of the short words")
        return lines


class StressStrategy(FocusStrategy):
    focus = Focus.STRESS
    tips = (
        "Make the stressed syllables a little stronger",
        "Do not swallow the unstressed vowels",
        "Keep the rhythmic pattern of each word intact",
    )
    hint = "Tip: say the tongue twister slowly, stressing the accented syllables."
    practice = "Read poetry with a strong meter aloud to work on stress"

    def next_steps(self, standing, average):
        if standing not in ADVANCED_STANDINGS:
            return []
        return ["Try timed mode (--mode timed) to practice against the clock"]

    def polysyllabic_words(self, text: str) -> list[str]:
        return [w for w in text.split() if self.analyzer.word_syllables(w) > 2]

    def display_fields(self, item):
        return {"Polysyllabic words": ", ".join(self.polysyllabic_words(item.text)) or "none"}

    def advice(self, item, round_no, total_rounds, target):
        lines = [f"Correct stress in every word (level {target:.1f})"]
        words = self.polysyllabic_words(item.text)
        if words:
            lines.append("Watch the stress in: " + ", ".join(words))
        return lines


class BreathingStrategy(FocusStrategy):
    focus = Focus.BREATHING
    tiers = (
        (0.4, ("short_phrases", "easy")),
        (math.inf, ("long_phrases", "medium", "hard")),
    )
    tips = (
        "Take a deep breath before the phrase",
        "Spread the breath over the whole phrase",
        "Keep the exhale steady",
    )
    rounds = (
        "Focus: a deep breath before you begin",
        "Focus: say it in a single breath",
        "Focus: control the strength of the exhale",
        "Focus: distribute the breath smoothly",
    )
    hint = "Tip: take a few deep breaths before speaking."
    practice = "Regular breathing exercises will develop your breath control"

    def next_steps(self, standing, average):
        if standing != "expert":
            return []
        return ["Move on to challenge mode (--mode challenge) to test yourself under pressure"]

    def buckets(self):
        return {
            "long_phrases": lambda a: a.stats.char_count > 60,
            "short_phrases": lambda a: a.stats.char_count < 30,
        }

    def breath_marks(self, text: str) -> Optional[str]:
        words = text.split()
        if len(words) <= 5:
            return None
        middle = len(words) // 2
        return " ".join(words[:middle] + ["(breath)"] + words[middle:])

    def display_fields(self, item):
        words = item.stats.word_count
        per_word = item.stats.char_count / words if words else 0.0
        fields: dict[str, object] = {
            "Words": words,
            "Letters per word": round(per_word, 1),
            "Letters": item.stats.char_count,
        }
        marked = self.breath_marks(item.text)
        if marked:
            fields["Breathing"] = marked
        return fields

    def advice(self, item, round_no, total_rounds, target):
        lines = [_round_line(round_no, self.rounds)]
        marked = self.breath_marks(item.text)
        if marked:
            lines.append("Where to breathe: " + marked)
        if item.stats.char_count > 50:
            lines.append("Take a deep breath before this long phrase")
        return lines


class SpeedStrategy(FocusStrategy):
    focus = Focus.SPEED
    tiers = (
        (0.3, ("easy",)),
        (0.6, ("medium", "repetitive")),
        (math.inf, ("hard", "expert", "repetitive")),
    )
    tips = (
        "Start slowly with perfect articulation",
        "Increase the speed gradually",
        "Stay clear as you speed up",
    )
    rounds = (
        "Focus: clear pronunciation at a slow tempo",
        "Focus: gradually increase the tempo",
        "Focus: smoothness and speed",
        "Focus: top speed while staying clear",
    )
    hint = "Tip: start very slowly and accelerate step by step."
    practice = "Practice daily and raise the tempo gradually to speak faster"

    def next_steps(self, standing, average):
        if standing == "expert":
            return [
                "Harder tongue twisters (--difficulty hard or --difficulty expert)",
                "The top demand level (--level 5)",
                "More repetitions (--mode repeat --reps 5)",
            ]
        if standing == "advanced":
            return ["Go back to articulation at a higher level to polish your diction"]
        return []
    base_pace = 60
    max_pace = 120

    def buckets(self):
        label = self.tables.twister_label
        return {
            "repetitive": lambda a: a.stats.repeat_chars > a.stats.char_count // 4,
            "labeled": lambda a: label in a.text.lower(),
        }

    def target_pace(self, round_no: int, total_rounds: int) -> int:
        """Words per minute to aim for in ``round_no``."""
        share = round_no / total_rounds if total_rounds else 1.0
        return self.base_pace + int((self.max_pace - self.base_pace) * share)

    def display_fields(self, item):
        return {
            "Speed difficulty": round(item.score, 1),
            "Difficult combinations": item.stats.difficult_combos,
            "Repeats": item.stats.repeat_chars,
            "Estimated time (s)": round(item.stats.char_count * 0.1, 1),
        }

    def advice(self, item, round_no, total_rounds, target):
        pace = self.target_pace(round_no, total_rounds)
        seconds = item.stats.word_count / (pace / 60.0)
        lines = [
            f"Recommended pace: about {pace} words per minute",
            _round_line(round_no, self.rounds),
            f"Target time: about {seconds:.1f} seconds",
        ]
        if item.stats.difficult_combos > 2:
            lines.append("Pay special attention to the difficult sound combinations")
        return lines


STRATEGIES: dict[Focus, type[FocusStrategy]] = {
    Focus.ARTICULATION: ArticulationStrategy,
    Focus.RHYTHM: RhythmStrategy,
    Focus.STRESS: StressStrategy,
    Focus.BREATHING: BreathingStrategy,
    Focus.SPEED: SpeedStrategy,
}


def strategy_for(focus: Focus, analyzer: Optional[TextAnalyzer] = None) -> FocusStrategy:
    return STRATEGIES[focus](analyzer)


def rating_feedback(rating: int, item: AnalyzedItem) -> list[str]:
    """General feedback for a self-rating."""
    if rating <= 2:
        return [
            "Don't be discouraged, this one really is tough!",
            "Try splitting it into small pieces and saying it more slowly.",
        ]
    if rating == 3:
        return [
            "Not bad! Keep working on your diction.",
            "Pay attention to the position of your tongue and lips.",
        ]
    if rating == 4:
        return [
            "Good! You are close to perfect.",
            "Try speeding up a little.",
        ]
    return [
        "Excellent! Perfect pronunciation!",
        f"You have mastered a tongue twister of {item.band.label} difficulty.",
    ]
