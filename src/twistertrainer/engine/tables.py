"""Phonetic lookup tables used by the analyzer and categorizer.

The defaults describe Russian. A YAML file can replace any table, which is
how tests and other alphabets substitute their own data.
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Optional

import yaml


@dataclass(frozen=True)
class SoundTier:
    name: str
    sounds: frozenset[str]
    weight: float


DEFAULT_SOUND_TIERS: tuple[SoundTier, ...] = (
    SoundTier("simple_vowels", frozenset("аоуэ"), 1.0),
    SoundTier("complex_vowels", frozenset("ыиеёюя"), 2.0),
    SoundTier("simple_consonants", frozenset("мнпбтдкгвф"), 3.0),
    SoundTier("whistling", frozenset("сзц"), 5.0),
    SoundTier("hushing", frozenset("шжщч"), 7.0),
    SoundTier("sonorant", frozenset("рлй"), 8.0),
)

DEFAULT_COMBINATIONS: tuple[str, ...] = (
    "ств", "здр", "вств", "стн", "нтг", "рдц", "стл", "нтск",
    "стск", "тск", "стр", "скр", "спр", "взр", "вдр", "встр",
    "всм", "рщ", "сч", "зщ", "жж", "жд", "жч", "шч", "щч",
    "чщ", "чт", "чш", "шт", "шц", "рл", "лр", "кр", "тр",
    "рт", "тч", "дж", "дз", "дц", "кс", "гз", "бз",
)


@dataclass(frozen=True)
class PhoneticTables:
    vowels: frozenset[str] = frozenset("аеёиоуыэюя")
    hard_sounds: frozenset[str] = frozenset("жшщчцрлфх")
    combinations: tuple[str, ...] = DEFAULT_COMBINATIONS
    sound_tiers: tuple[SoundTier, ...] = DEFAULT_SOUND_TIERS
    # Sound groups used for articulation buckets and profile tracking
    hissing: frozenset[str] = frozenset("шщжч")
    sibilant: frozenset[str] = frozenset("сзц")
    sonorant: frozenset[str] = frozenset("рл")
    plosive: frozenset[str] = frozenset("пбтдкг")
    # Stem of the word "tongue twister", matched as a plain substring
    twister_label: str = "скороговорк"

    def tier_weight(self, char: str) -> float:
        """Weight of the first tier containing ``char``, 0.0 if none does."""
        for tier in self.sound_tiers:
            if char in tier.sounds:
                return tier.weight
        return 0.0

    def sound_groups(self) -> dict[str, frozenset[str]]:
        return {
            "hissing": self.hissing,
            "sibilant": self.sibilant,
            "sonorant": self.sonorant,
            "plosive": self.plosive,
        }


DEFAULT_TABLES = PhoneticTables()


def _letters(value) -> frozenset[str]:
    if isinstance(value, str):
        return frozenset(value.lower())
    return frozenset(str(v).lower() for v in value)


def load_tables(path: Optional[Path]) -> PhoneticTables:
    """Load table overrides from a YAML file on top of the defaults.

    Letter sets may be written as a string ("аоуэ") or a list. Sound tiers
    are a list of mappings with ``name``, ``sounds`` and ``weight``.
    """
    if path is None:
        return DEFAULT_TABLES

    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    known = {fld.name for fld in fields(PhoneticTables)}
    overrides: dict = {}
    for key, value in data.items():
        if key not in known:
            raise ValueError(f"Unknown phonetic table: {key}")
        if key == "combinations":
            overrides[key] = tuple(str(c).lower() for c in value)
        elif key == "sound_tiers":
            overrides[key] = tuple(
                SoundTier(
                    name=t["name"],
                    sounds=_letters(t["sounds"]),
                    weight=float(t["weight"]),
                )
                for t in value
            )
        elif key == "twister_label":
            overrides[key] = str(value).lower()
        else:
            overrides[key] = _letters(value)

    return replace(DEFAULT_TABLES, **overrides)

