"""Configuration model for TwisterTrainer."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, field_validator

from twistertrainer.engine.drills import Mode
from twistertrainer.engine.focus import Focus
from twistertrainer.engine.session import clamp_level


def default_data_dir() -> Path:
    return Path.home() / ".twistertrainer"


class Settings(BaseModel):
    dataset_path: Path = Path("tongue_twisters/all_twisters.json")
    count: int = 5
    difficulty: str = "all"
    mode: Mode = Mode.STANDARD
    seconds_per_item: int = 30
    repetitions: int = 3
    focus: Focus = Focus.ARTICULATION
    level: int = 3
    mix: bool = True
    seed: Optional[int] = None
    tables_path: Optional[Path] = None
    data_dir: Path = Field(default_factory=default_data_dir)

    @field_validator("count", "seconds_per_item", "repetitions")
    @classmethod
    def _at_least_one(cls, value: int) -> int:
        return max(value, 1)

    @field_validator("level")
    @classmethod
    def _clamp_level(cls, value: int) -> int:
        return clamp_level(value)

    @field_validator("difficulty")
    @classmethod
    def _known_difficulty(cls, value: str) -> str:
        value = value.strip().lower()
        return value if value in ("easy", "medium", "hard", "expert") else "all"

    @field_validator("mode", mode="before")
    @classmethod
    def _parse_mode(cls, value):
        return Mode.from_choice(value) if isinstance(value, str) else value

    @field_validator("focus", mode="before")
    @classmethod
    def _parse_focus(cls, value):
        return value if isinstance(value, Focus) else Focus.from_choice(value)

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "Settings":
        config_path = config_path or default_data_dir() / "config.yaml"
        data: dict = {}
        if config_path.exists():
            with open(config_path) as f:
                data = yaml.safe_load(f) or {}
            if not isinstance(data, dict):
                raise ValueError(f"{config_path} must contain a mapping of settings")

        if os.environ.get("TWISTERTRAINER_DATASET"):
            data["dataset_path"] = os.environ["TWISTERTRAINER_DATASET"]
        if os.environ.get("TWISTERTRAINER_SEED"):
            seed = os.environ["TWISTERTRAINER_SEED"]
            try:
                data["seed"] = int(seed)
            except ValueError as e:
                raise ValueError(f"TWISTERTRAINER_SEED must be an integer, got {seed!r}") from e
        return cls(**data)

    def save(self) -> None:
        self.data_dir.mkdir(parents=True, exist_ok=True)
        config_path = self.data_dir / "config.yaml"
        with open(config_path, "w") as f:
            yaml.dump(self.model_dump(mode="json"), f, default_flow_style=False, allow_unicode=True)
