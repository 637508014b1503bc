"""Tests for the fixed training routines."""

import pytest

from twistertrainer.engine.drills import Mode, build_drill


def test_standard_presents_each_item_once(band_items):
    steps = build_drill(Mode.STANDARD, band_items)
    assert [s.item for s in steps] == band_items
    assert [s.index for s in steps] == [1, 2, 3, 4]
    assert all(s.total == 4 and not s.readings for s in steps)


def test_repeat_readings():
    steps = build_drill(Mode.REPEAT, ["x"], repetitions=2)
    assert steps[0].readings == ["Repetition 1 of 2", "Repetition 2 of 2"]


def test_challenge_speeds():
    steps = build_drill(Mode.CHALLENGE, ["x", "y"])
    assert len(steps[1].readings) == 4
    assert steps[1].readings[-1] == "Reading #4: Very fast"


def test_timed_seconds():
    steps = build_drill(Mode.TIMED, ["x"], seconds=0)
    assert steps[0].seconds == 1
    assert build_drill(Mode.STANDARD, ["x"])[0].seconds == 0


def test_perfection_is_not_a_drill():
    with pytest.raises(ValueError):
        build_drill(Mode.PERFECTION, ["x"])


def test_mode_from_choice():
    assert Mode.from_choice("TIMED") == Mode.TIMED
    assert Mode.from_choice("karaoke") == Mode.STANDARD
