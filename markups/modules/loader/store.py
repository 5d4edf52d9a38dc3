"""
Cache store and in-flight tracker.

Both are plain insertion-ordered dicts. Every mutation happens synchronously
inside one event loop step, so the check-then-register sequence in the loader
cannot interleave with another caller and no lock is needed.
"""

import asyncio
from typing import Any, Dict, List, Optional

from .errors import LoaderStateError


class CacheStore:
    """Resolved capability values, written once per key and never removed."""

    def __init__(self):
        self._entries: Dict[str, Any] = {}

    def has(self, key: str) -> bool:
        return key in self._entries

    def get(self, key: str) -> Optional[Any]:
        """Return the cached value or None when the key is not loaded."""
        return self._entries.get(key)

    def set(self, key: str, value: Any) -> None:
        """
        Record a successful load.

        Raises:
            LoaderStateError: If the key is already cached
        """
        if key in self._entries:
            raise LoaderStateError(f"Capability {key} is already cached")
        self._entries[key] = value

    def keys(self) -> List[str]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


class InFlightTracker:
    """Pending load task per key while a factory is running."""

    def __init__(self):
        self._pending: Dict[str, asyncio.Task] = {}

    def has(self, key: str) -> bool:
        return key in self._pending

    def get(self, key: str) -> Optional[asyncio.Task]:
        return self._pending.get(key)

    def begin(self, key: str, task: asyncio.Task) -> None:
        """
        Record a pending load.

        Raises:
            LoaderStateError: If a load for the key is already in flight
        """
        if key in self._pending:
            raise LoaderStateError(f"Capability {key} is already loading")
        self._pending[key] = task

    def end(self, key: str) -> None:
        """Drop the pending record, whatever the outcome."""
        self._pending.pop(key, None)

    def keys(self) -> List[str]:
        return list(self._pending)

    def __len__(self) -> int:
        return len(self._pending)
