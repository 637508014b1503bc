"""Tests for text statistics and difficulty scoring."""

import pytest

from twistertrainer.engine.analyzer import (
    TextAnalyzer,
    TextStatistics,
    analyze,
    analyze_corpus,
    difficulty_score,
)
from twistertrainer.engine.corpus import TextItem
from twistertrainer.engine.difficulty import Band
from twistertrainer.engine.tables import PhoneticTables, SoundTier


def _item(text):
    return TextItem(number="1", date="", text=text)


class TestStatistics:
    def test_counts_for_short_phrase(self, analyzer):
        stats = analyzer.statistics("Шла Саша")
        assert stats.word_count == 2
        assert stats.char_count == 7
        assert stats.vowel_count == 3
        assert stats.consonant_count == 4
        assert stats.unique_chars == 4
        # ш twice, а three times
        assert stats.repeat_chars == 3
        assert stats.difficult_sounds == 3
        assert stats.difficult_combos == 0
        assert stats.sound_complexity == pytest.approx(30 / 7)

    def test_punctuation_is_not_counted(self, analyzer):
        stats = analyzer.statistics("о, о!")
        assert stats.char_count == 2
        assert stats.word_count == 2

    def test_case_insensitive(self, analyzer):
        assert analyzer.statistics("ШЛА САША") == analyzer.statistics("шла саша")

    def test_combinations_count_every_listed_substring(self, analyzer):
        # "встр", "стр" and "тр" all occur
        assert analyzer.count_combinations("встреча") == 3

    def test_repeated_combination_counted_per_occurrence(self, analyzer):
        assert analyzer.count_combinations("кс кс кс") == 3

    def test_empty_text(self, analyzer):
        stats = analyzer.statistics("")
        assert stats == TextStatistics()
        assert stats.sound_complexity == 0.0

    def test_letters_outside_tiers_weigh_nothing(self, analyzer):
        # ь is a letter but belongs to no tier
        assert analyzer.statistics("ьа").sound_complexity == pytest.approx(0.5)


class TestScore:
    def test_exact_weighting(self, analyzer):
        result = analyzer.analyze(_item("Шла Саша"))
        expected = 1.0 + 0.7 + (4 / 3) * 2.0 + 0.9 + 1.5 + 0 + (30 / 7) * 1.5
        assert result.score == pytest.approx(expected)
        assert result.band == Band.MEDIUM

    def test_no_vowels_uses_unit_ratio(self):
        stats = TextStatistics(word_count=1, char_count=2, consonant_count=2)
        assert difficulty_score(stats) == pytest.approx(0.5 + 0.2 + 2.0)

    def test_deterministic(self, analyzer):
        text = "Карл у Клары украл кораллы, а Клара у Карла украла кларнет"
        first = analyzer.analyze(_item(text))
        second = analyzer.analyze(_item(text))
        assert first.stats == second.stats
        assert first.score == second.score
        assert first.score >= 0

    def test_band_texts_land_in_their_bands(self, band_texts, analyzer):
        for name, text in band_texts.items():
            assert analyzer.analyze(_item(text)).band.value == name


def test_analyze_corpus_sorts_by_score(band_texts):
    items = [_item(t) for t in reversed(list(band_texts.values()))]
    scores = [a.score for a in analyze_corpus(items)]
    assert scores == sorted(scores)


def test_module_level_analyze_matches_analyzer(analyzer):
    item = _item("Шла Саша по шоссе")
    assert analyze(item) == analyzer.analyze(item)


def test_custom_tables_change_the_result():
    tables = PhoneticTables(
        vowels=frozenset("ae"),
        hard_sounds=frozenset("x"),
        combinations=("xx",),
        sound_tiers=(SoundTier("all", frozenset("abcdefghijklmnopqrstuvwxyz"), 2.0),),
    )
    stats = TextAnalyzer(tables).statistics("axxe")
    assert stats.vowel_count == 2
    assert stats.difficult_sounds == 2
    assert stats.difficult_combos == 1
    assert stats.sound_complexity == pytest.approx(2.0)


class TestSyllables:
    def test_word_without_vowels_counts_one(self, analyzer):
        assert analyzer.word_syllables("вдр") == 1

    def test_text_syllables(self, analyzer):
        assert analyzer.syllables("Шла Саша по шоссе") == 1 + 2 + 1 + 2

    def test_found_hard_sounds_in_order(self, analyzer):
        assert analyzer.found_hard_sounds("Шла Саша") == ["ш", "л"]

    def test_found_combinations_limit(self, analyzer):
        assert analyzer.found_combinations("встреча", limit=2) == ["стр", "встр"]
