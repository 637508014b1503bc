"""Tests for session buckets and focus strategies."""

import pytest

from twistertrainer.engine.categorizer import categorize
from twistertrainer.engine.focus import (
    BreathingStrategy,
    Focus,
    RhythmStrategy,
    SpeedStrategy,
    StressStrategy,
    rating_feedback,
    strategy_for,
)

BAND_BUCKETS = {"easy", "medium", "hard", "expert"}


class TestCategorize:
    def test_hissing_item_in_hissing_and_band_bucket(self, make_item):
        item = make_item("Шла Саша по шоссе и сосала сушку")
        cats = categorize([item], Focus.ARTICULATION)
        assert item in cats["hissing"]
        assert item in cats[item.band.value]
        assert item in cats["sibilant"]

    def test_articulation_buckets_always_present(self, make_item):
        cats = categorize([make_item("о")], Focus.ARTICULATION)
        assert set(cats.names()) == BAND_BUCKETS | {
            "hissing", "sibilant", "sonorant", "complex_combos",
        }
        assert cats["sonorant"] == []

    def test_complex_combos_needs_more_than_two(self, make_item):
        three = make_item("встреча")
        two = make_item("кс кс")
        cats = categorize([three, two], Focus.ARTICULATION)
        assert cats["complex_combos"] == [three]

    def test_rhythm_buckets(self, make_item, band_texts):
        short = make_item(band_texts["easy"])
        long = make_item(band_texts["medium"])
        cats = categorize([short, long], Focus.RHYTHM)
        assert cats["short"] == [short]
        assert cats["long"] == [long]
        # nine repeats of ten letters beats 10 // 3
        assert cats["rhythmic"] == [long]

    def test_breathing_buckets(self, make_item, band_texts):
        short = make_item(band_texts["easy"])
        long = make_item(
            "Ехал Грека через реку, видит Грека в реке рак, "
            "сунул Грека руку в реку, рак за руку Греку цап"
        )
        middle = make_item(band_texts["expert"])
        cats = categorize([short, long, middle], Focus.BREATHING)
        assert cats["short_phrases"] == [short]
        assert cats["long_phrases"] == [long]

    def test_speed_buckets(self, make_item):
        labeled = make_item("Скороговорку скажи быстро")
        cats = categorize([labeled], Focus.SPEED)
        assert cats["labeled"] == [labeled]
        assert "repetitive" in cats

    def test_stress_has_only_band_buckets(self, band_items):
        cats = categorize(band_items, Focus.STRESS)
        assert set(cats.names()) == BAND_BUCKETS
        assert all(len(cats[name]) == 1 for name in BAND_BUCKETS)

    def test_non_empty_and_unknown_names(self, band_items):
        cats = categorize(band_items[:1], Focus.STRESS)
        assert cats.non_empty() == ["easy"]
        assert cats["missing"] == []
        assert not cats.is_empty


class TestFocus:
    def test_from_choice_name_and_index(self):
        assert Focus.from_choice("Rhythm") == Focus.RHYTHM
        assert Focus.from_choice(2) == Focus.STRESS
        assert Focus.from_choice("4") == Focus.SPEED
        assert Focus.from_choice(9) == Focus.SPEED
        assert Focus.from_choice(-1) == Focus.ARTICULATION

    def test_from_choice_unknown_name(self):
        with pytest.raises(ValueError):
            Focus.from_choice("singing")

    def test_next_focus_wraps(self):
        assert Focus.ARTICULATION.next_focus == Focus.RHYTHM
        assert Focus.SPEED.next_focus == Focus.ARTICULATION

    @pytest.mark.parametrize(
        "focus, progress, menu",
        [
            (Focus.ARTICULATION, 0.0, ("easy", "medium", "sibilant")),
            (Focus.ARTICULATION, 0.5, ("medium", "hissing", "sibilant")),
            (Focus.ARTICULATION, 0.75, ("hard", "expert", "sonorant", "complex_combos")),
            (Focus.RHYTHM, 0.5, ("medium", "rhythmic")),
            (Focus.BREATHING, 0.5, ("long_phrases", "medium", "hard")),
            (Focus.SPEED, 0.25, ("easy",)),
            (Focus.STRESS, 0.75, ("hard",)),
            (Focus.STRESS, 0.95, ("expert",)),
        ],
    )
    def test_tier_menu(self, focus, progress, menu):
        assert strategy_for(focus).tier_menu(progress) == menu


class TestDisplayFields:
    def test_articulation(self, make_item):
        fields = strategy_for(Focus.ARTICULATION).display_fields(make_item("Шла Саша"))
        assert fields["Difficult sounds"] == "ш, л"
        assert fields["Difficult combinations"] == 0

    def test_articulation_plain_text(self, make_item):
        fields = strategy_for(Focus.ARTICULATION).display_fields(make_item("мама"))
        assert fields["Difficult sounds"] == "ordinary sounds"

    def test_rhythm_pattern(self, make_item):
        fields = RhythmStrategy().display_fields(make_item("Шла Саша"))
        assert fields["Rhythmic structure"] == "• ••"
        assert fields["Syllables"] == 3

    def test_stress_polysyllabic(self, make_item):
        fields = StressStrategy().display_fields(make_item("Карл украл кораллы"))
        assert fields["Polysyllabic words"] == "кораллы"

    def test_breathing_marks_long_phrases(self, make_item):
        item = make_item("раз два три четыре пять шесть")
        fields = BreathingStrategy().display_fields(item)
        assert fields["Breathing"] == "раз два три (breath) четыре пять шесть"
        assert "Breathing" not in BreathingStrategy().display_fields(make_item("раз два"))

    def test_speed_estimated_time(self, make_item):
        fields = SpeedStrategy().display_fields(make_item("Шла Саша"))
        assert fields["Estimated time (s)"] == 0.7


class TestAdvice:
    def test_speed_pace_grows_with_rounds(self, make_item):
        item = make_item("Шла Саша")
        first = SpeedStrategy().advice(item, 1, 5, 1.0)[0]
        last = SpeedStrategy().advice(item, 5, 5, 1.0)[0]
        assert "72 words" in first
        assert "120 words" in last

    def test_articulation_names_combination(self, make_item):
        lines = strategy_for(Focus.ARTICULATION).advice(make_item("встреча"), 2, 5, 1.0)
        assert any('"стр"' in line for line in lines)

    def test_low_rating_hint_articulation_needs_hard_sounds(self, make_item):
        strategy = strategy_for(Focus.ARTICULATION)
        assert strategy.low_rating_hint(make_item("мама")) is None
        assert strategy.low_rating_hint(make_item("шар")) is not None


def test_rating_feedback_mentions_band_on_five(make_item):
    item = make_item("о")
    assert "Easy" in rating_feedback(5, item)[1]
    assert rating_feedback(1, item) == rating_feedback(2, item)


class TestNextSteps:
    @pytest.mark.parametrize("focus", list(Focus))
    def test_every_focus_has_practice_advice(self, focus):
        assert strategy_for(focus).practice

    @pytest.mark.parametrize("focus", list(Focus))
    def test_nothing_suggested_below_advanced(self, focus):
        strategy = strategy_for(focus)
        assert strategy.next_steps("beginner", 2.0) == []
        assert strategy.next_steps("intermediate", 3.0) == []

    def test_rhythm_suggests_mixing(self):
        assert "--mix" in strategy_for(Focus.RHYTHM).next_steps("advanced", 4.0)[0]

    def test_stress_suggests_timed_mode(self):
        assert "--mode timed" in strategy_for(Focus.STRESS).next_steps("expert", 4.8)[0]

    def test_speed_expert_combines_modes(self):
        """At expert, speed training points at the hardest settings the trainer has."""
        steps = strategy_for(Focus.SPEED).next_steps("expert", 4.8)
        assert any("--level 5" in s for s in steps)
        assert any("--reps 5" in s for s in steps)
        assert len(strategy_for(Focus.SPEED).next_steps("advanced", 4.0)) == 1
