"""
JSON-array persistence adapter.

The whole store is one JSON array read at the start of each request and
rewritten entirely on mutation. There is no lock and no atomic rename.
"""

from __future__ import annotations

from pathlib import Path
import json
import logging

from minicrud.core.config import get_settings

logger = logging.getLogger(__name__)


def data_file() -> Path:
    return get_settings().data_file


def ensure_store(path: Path | None = None) -> Path:
    """Create the file with an empty array when missing."""
    target = path or data_file()
    if not target.exists():
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(json.dumps([]) + "\n", encoding="utf-8")
        logger.info("Created empty store at %s", target)
    return target


def load(path: Path | None = None) -> list:
    target = path or data_file()
    try:
        raw = target.read_text(encoding="utf-8")
    except FileNotFoundError:
        return []
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Could not read store %s: %s", target, exc)
        return []
    if not raw.strip():
        return []
    try:
        records = json.loads(raw)
    except json.JSONDecodeError:
        logger.warning("Store %s is not valid JSON; treating as empty", target)
        return []
    if not isinstance(records, list):
        logger.warning("Store %s does not hold an array; treating as empty", target)
        return []
    return records


def persist(records: list, path: Path | None = None) -> None:
    target = path or data_file()
    target.write_text(json.dumps(records, ensure_ascii=False, indent=4) + "\n", encoding="utf-8")
