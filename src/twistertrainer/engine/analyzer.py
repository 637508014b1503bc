"""Text statistics and difficulty scoring for tongue twisters.

Every figure here is a pure function of the lower-cased text, so analyzing
the same item twice yields identical results.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Iterable, Optional

from twistertrainer.engine.corpus import TextItem
from twistertrainer.engine.difficulty import Band, classify
from twistertrainer.engine.tables import DEFAULT_TABLES, PhoneticTables


@dataclass(frozen=True)
class TextStatistics:
    word_count: int = 0
    char_count: int = 0  # letters only
    vowel_count: int = 0
    consonant_count: int = 0
    unique_chars: int = 0
    repeat_chars: int = 0
    difficult_sounds: int = 0
    difficult_combos: int = 0
    sound_complexity: float = 0.0


@dataclass(frozen=True)
class AnalyzedItem:
    item: TextItem
    stats: TextStatistics
    score: float

    @property
    def text(self) -> str:
        return self.item.text

    @property
    def band(self) -> Band:
        return classify(self.score)


def difficulty_score(stats: TextStatistics) -> float:
    """Weighted linear score. The order of additions is part of the contract."""
    score = stats.word_count * 0.5
    score += stats.char_count * 0.1

    ratio = 1.0
    if stats.vowel_count > 0:
        ratio = stats.consonant_count / stats.vowel_count
    score += ratio * 2.0

    score += stats.repeat_chars * 0.3
    score += stats.difficult_sounds * 0.5
    score += stats.difficult_combos * 1.0
    score += stats.sound_complexity * 1.5
    return score


class TextAnalyzer:
    """Computes :class:`TextStatistics` using a set of phonetic tables."""

    def __init__(self, tables: Optional[PhoneticTables] = None):
        self.tables = tables or DEFAULT_TABLES

    def statistics(self, text: str) -> TextStatistics:
        text = text.lower()
        letters = [ch for ch in text if ch.isalpha()]
        counts = Counter(letters)

        vowels = sum(1 for ch in letters if ch in self.tables.vowels)
        return TextStatistics(
            word_count=len(text.split()),
            char_count=len(letters),
            vowel_count=vowels,
            consonant_count=len(letters) - vowels,
            unique_chars=len(counts),
            repeat_chars=sum(n - 1 for n in counts.values() if n > 1),
            difficult_sounds=sum(1 for ch in letters if ch in self.tables.hard_sounds),
            difficult_combos=self.count_combinations(text),
            sound_complexity=self.sound_complexity(letters),
        )

    def count_combinations(self, text: str) -> int:
        return sum(text.count(combo) for combo in self.tables.combinations)

    def sound_complexity(self, letters: list[str]) -> float:
        if not letters:
            return 0.0
        total = 0.0
        for ch in letters:
            total += self.tables.tier_weight(ch)
        return total / len(letters)

    def analyze(self, item: TextItem) -> AnalyzedItem:
        stats = self.statistics(item.text)
        return AnalyzedItem(item=item, stats=stats, score=difficulty_score(stats))

    def found_combinations(self, text: str, limit: Optional[int] = None) -> list[str]:
        """Combinations present in ``text``, in table order."""
        text = text.lower()
        found = []
        for combo in self.tables.combinations:
            if combo in text:
                found.append(combo)
                if limit is not None and len(found) >= limit:
                    break
        return found

    def found_hard_sounds(self, text: str) -> list[str]:
        """Distinct hard sounds in ``text``, in order of first occurrence."""
        seen: list[str] = []
        for ch in text.lower():
            if ch in self.tables.hard_sounds and ch not in seen:
                seen.append(ch)
        return seen

    def word_syllables(self, word: str) -> int:
        """Vowel count of ``word``, at least 1."""
        count = sum(1 for ch in word.lower() if ch in self.tables.vowels)
        return count or 1

    def syllables(self, text: str) -> int:
        return sum(self.word_syllables(w) for w in text.split())


_default_analyzer = TextAnalyzer()


def analyze(item: TextItem, tables: Optional[PhoneticTables] = None) -> AnalyzedItem:
    if tables is None:
        return _default_analyzer.analyze(item)
    return TextAnalyzer(tables).analyze(item)


def analyze_corpus(
    items: Iterable[TextItem], tables: Optional[PhoneticTables] = None
) -> list[AnalyzedItem]:
    """Analyze every item and return them sorted by ascending score."""
    analyzer = TextAnalyzer(tables)
    analyzed = [analyzer.analyze(item) for item in items]
    analyzed.sort(key=lambda a: a.score)
    return analyzed
