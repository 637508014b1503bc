"""Shared fixtures for TwisterTrainer tests."""

from __future__ import annotations

import json
import random

import pytest

from twistertrainer.engine.analyzer import AnalyzedItem, TextAnalyzer
from twistertrainer.engine.corpus import TextItem

# One text per band: scores 2.1, 10.2, 23.7 and 37.2
BAND_TEXTS = {
    "easy": "о",
    "medium": " ".join(["у"] * 10),
    "hard": " ".join(["э"] * 25),
    "expert": " ".join(["а"] * 40),
}


@pytest.fixture
def band_texts():
    return dict(BAND_TEXTS)


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def analyzer():
    return TextAnalyzer()


@pytest.fixture
def make_item(analyzer):
    """Build an analyzed item, optionally forcing its score."""
    counter = iter(range(1, 10_000))

    def _make(text: str, score: float | None = None) -> AnalyzedItem:
        item = analyzer.analyze(TextItem(number=str(next(counter)), date="", text=text))
        if score is not None:
            item = AnalyzedItem(item=item.item, stats=item.stats, score=score)
        return item

    return _make


@pytest.fixture
def band_items(make_item, band_texts):
    return [make_item(text) for text in band_texts.values()]


@pytest.fixture
def sample_corpus_path(tmp_path, band_texts):
    """Write a four-item corpus, one per band, in the crawler's JSON layout."""
    path = tmp_path / "all_twisters.json"
    records = [
        {"number": str(i), "date": "01.01.2020", "text": text}
        for i, text in enumerate(band_texts.values(), 1)
    ]
    with open(path, "w", encoding="utf-8") as f:
        json.dump(records, f, ensure_ascii=False)
    return path


@pytest.fixture
def isolated_home(tmp_path, monkeypatch):
    """Keep config lookups and fallback corpus paths inside tmp_path."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("TWISTERTRAINER_DATASET", raising=False)
    monkeypatch.delenv("TWISTERTRAINER_SEED", raising=False)
    monkeypatch.chdir(tmp_path)
    return home
