"""JSON corpus loader for tongue twisters."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

FALLBACK_PATHS: tuple[Path, ...] = (
    Path("all_twisters.json"),
    Path("../tongue_twisters/all_twisters.json"),
    Path("../../tongue_twisters/all_twisters.json"),
)


class DatasetUnavailable(Exception):
    """No readable corpus could be found."""


@dataclass(frozen=True)
class TextItem:
    number: str
    date: str
    text: str


def _candidate_paths(json_path: Path) -> list[Path]:
    candidates = [json_path]
    for path in FALLBACK_PATHS:
        if path not in candidates:
            candidates.append(path)
    return candidates


def _parse_items(raw) -> list[TextItem]:
    if not isinstance(raw, list):
        raise DatasetUnavailable("Corpus must be a JSON list of objects")

    items: list[TextItem] = []
    for entry in raw:
        if not isinstance(entry, dict):
            continue
        text = str(entry.get("text", "")).strip()
        if not text:
            continue
        items.append(TextItem(
            number=str(entry.get("number", "")),
            date=str(entry.get("date", "")),
            text=text,
        ))
    return items


def load_corpus(json_path: Path) -> list[TextItem]:
    """Load tongue twisters from ``json_path``.

    If the file does not exist, a few conventional locations relative to the
    working directory are tried before giving up.
    """
    json_path = Path(json_path)
    data = None
    for candidate in _candidate_paths(json_path):
        try:
            with open(candidate, encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            logger.debug("No corpus at %s", candidate)
            continue
        except json.JSONDecodeError as e:
            raise DatasetUnavailable(f"Failed to parse {candidate}: {e}") from e
        except OSError as e:
            raise DatasetUnavailable(f"Failed to read {candidate}: {e}") from e
        json_path = candidate
        break

    if data is None:
        raise DatasetUnavailable(f"Failed to read file {json_path}: not found")

    items = _parse_items(data)
    logger.info("Loaded %d tongue twisters from %s", len(items), json_path)
    return items
