"""
Per-class metadata cache.

Holds derived per-class records (such as the extracted field rules of a DTO)
keyed weakly by the class, so dropping a class also drops its records.
"""

from __future__ import annotations

import threading
import weakref
from typing import Any


class MetadataCache:
    """Weakly keyed ``class -> {key: value}`` store."""

    def __init__(self) -> None:
        self._cache: weakref.WeakKeyDictionary[type, dict[str, Any]] = weakref.WeakKeyDictionary()
        self._lock = threading.RLock()

    def get_class_cache(self, cls: type) -> dict[str, Any]:
        """Get (creating if needed) the record dictionary for ``cls``."""
        with self._lock:
            records = self._cache.get(cls)
            if records is None:
                records = self._cache[cls] = {}
            return records

    def set_metadata(self, cls: type, key: str, value: Any) -> None:
        with self._lock:
            self.get_class_cache(cls)[key] = value

    def get_metadata(self, cls: type, key: str, default: Any = None) -> Any:
        with self._lock:
            records = self._cache.get(cls)
            if records is None:
                return default
            return records.get(key, default)

    def has_metadata(self, cls: type, key: str) -> bool:
        with self._lock:
            records = self._cache.get(cls)
            return records is not None and key in records

    def clear_class_cache(self, cls: type) -> None:
        with self._lock:
            self._cache.pop(cls, None)

    def clear(self) -> None:
        with self._lock:
            self._cache = weakref.WeakKeyDictionary()

    def __len__(self) -> int:
        return len(self._cache)
