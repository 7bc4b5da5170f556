"""
Key-value storage for the journal.

Every collection lives as one JSON blob under a fixed key. Updates read the
whole blob, change it in memory and write it back; nothing guards against two
processes writing the same key, the last writer wins.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

RECORDS_KEY = "book_records_v2"
GROUPS_KEY = "book_groups"
SESSION_KEY = "book_session"
JOINED_GROUPS_KEY = "book_joined_groups"
DRAFT_KEY = "book_record_draft"


class MemoryBackend:
    def __init__(self, items: Optional[Dict[str, str]] = None):
        self._items: Dict[str, str] = dict(items or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str):
        self._items[key] = value

    def remove_item(self, key: str):
        self._items.pop(key, None)


class FileBackend:
    """One ``<key>.json`` file per key inside a data directory."""

    def __init__(self, root: Union[str, Path]):
        self.root = Path(root).expanduser()
        self.root.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        return self.root / f"{key}.json"

    def get_item(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        with open(path, "r", encoding="utf-8") as f:
            return f.read()

    def set_item(self, key: str, value: str):
        with open(self._path(key), "w", encoding="utf-8") as f:
            f.write(value)

    def remove_item(self, key: str):
        self._path(key).unlink(missing_ok=True)

    def keys(self):
        return sorted(p.stem for p in self.root.glob("*.json"))


class JsonStore:
    """Reads and writes whole JSON values through a string backend."""

    def __init__(self, backend=None):
        self.backend = backend if backend is not None else MemoryBackend()

    def read(self, key: str, default: Any = None) -> Any:
        try:
            raw = self.backend.get_item(key)
            if raw is None:
                return default
            value = json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.warning(f"Stored value under {key!r} is not valid JSON, treating it as empty: {e}")
            return default
        logger.debug(f"read {key}")
        return value

    def write(self, key: str, value: Any):
        self.backend.set_item(key, json.dumps(value, ensure_ascii=False))
        logger.debug(f"wrote {key}")

    def remove(self, key: str):
        self.backend.remove_item(key)
        logger.debug(f"removed {key}")


def read_models(store: JsonStore, key: str, model: Type[M]) -> List[M]:
    """Load a stored collection, dropping entries that no longer validate."""
    raw = store.read(key, [])
    if not isinstance(raw, list):
        logger.warning(f"Stored value under {key!r} is not a list, treating it as empty")
        return []
    items = []
    for entry in raw:
        try:
            items.append(model.model_validate(entry))
        except ValidationError as e:
            logger.warning(f"Skipping unreadable {model.__name__} under {key!r}: {e.error_count()} error(s)")
    return items


def read_model(store: JsonStore, key: str, model: Type[M]) -> Optional[M]:
    raw = store.read(key)
    if raw is None:
        return None
    try:
        return model.model_validate(raw)
    except ValidationError as e:
        logger.warning(f"Stored {model.__name__} under {key!r} is unreadable, ignoring it: {e.error_count()} error(s)")
        return None


def write_models(store: JsonStore, key: str, items: Sequence[BaseModel]):
    store.write(key, [item.model_dump(mode="json") for item in items])
