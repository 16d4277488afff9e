"""Scenario-scoped key/value cache.

Values saved here are shared between steps of one scenario, either directly
(`I send request "KEY"`) or through `{{.KEY}}` placeholders. The store is
cleared on every scenario start, never recreated.
"""

from __future__ import annotations

import copy
from typing import Any, Dict

from apisteps.errors import CacheMissError


class Cache:
    def __init__(self) -> None:
        self._store: Dict[str, Any] = {}

    def save(self, key: str, value: Any) -> None:
        """Store value under key, overwriting any previous value."""
        self._store[key] = value

    def get(self, key: str) -> Any:
        """Return a copy of the value under key; the cache keeps the original."""
        return copy.deepcopy(self.peek(key))

    def peek(self, key: str) -> Any:
        """Return the stored object itself (used for in-place request edits)."""
        try:
            return self._store[key]
        except KeyError:
            raise CacheMissError(key) from None

    def has(self, key: str) -> bool:
        return key in self._store

    def all(self) -> Dict[str, Any]:
        return copy.deepcopy(self._store)

    def reset(self) -> None:
        self._store.clear()

    def __len__(self) -> int:
        return len(self._store)


__all__ = ["Cache"]
