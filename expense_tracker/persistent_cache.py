"""Lightweight persistent key-value cache for the ledger.

Values are plain strings, keyed by name, and the whole mapping is written
to a single JSON file on every ``set``/``remove``.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, Optional

try:
    from .config import CACHE_PATH
except ImportError:
    from config import CACHE_PATH

logger = logging.getLogger(__name__)


def load_cache(path: Path | None = None) -> Dict[str, str]:
    target = path or CACHE_PATH
    if not target.exists():
        return {}
    try:
        with target.open('r', encoding='utf-8') as handle:
            data = json.load(handle)
    except (json.JSONDecodeError, OSError) as exc:
        logger.warning("Could not read cache %s: %s", target, exc)
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring cache %s: expected an object", target)
        return {}
    return {str(k): v for k, v in data.items() if isinstance(v, str)}


def save_cache(cache: Dict[str, str], path: Path | None = None) -> None:
    target = path or CACHE_PATH
    target.parent.mkdir(parents=True, exist_ok=True)
    # Write beside the target and swap in, so a failed write leaves the old file intact
    fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=target.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            json.dump(cache, handle, indent=2, sort_keys=True)
        os.replace(tmp_name, target)
    except Exception:
        try:
            os.unlink(tmp_name)
        except OSError:
            pass
        raise


class PersistentCache:
    """String key-value store backed by a JSON file.

    Reads go to an in-memory copy loaded on construction. Writes update
    the copy first and then rewrite the file, so an ``OSError`` from the
    write leaves the in-memory value in place.
    """

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path is not None else CACHE_PATH
        self._entries = load_cache(self.path)

    def get(self, key: str) -> Optional[str]:
        return self._entries.get(key)

    def set(self, key: str, value: str) -> None:
        self._entries[key] = str(value)
        save_cache(self._entries, self.path)

    def remove(self, key: str) -> None:
        if self._entries.pop(key, None) is not None:
            save_cache(self._entries, self.path)

    def __contains__(self, key: object) -> bool:
        return key in self._entries


class MemoryCache(PersistentCache):
    """Cache that never touches disk. Useful for throwaway sessions."""

    def __init__(self, entries: Optional[Dict[str, str]] = None):
        self.path = None
        self._entries = dict(entries or {})

    def set(self, key: str, value: str) -> None:
        self._entries[key] = str(value)

    def remove(self, key: str) -> None:
        self._entries.pop(key, None)
