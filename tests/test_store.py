"""
Unit tests for the cache store and the in-flight tracker.
"""

import asyncio

import pytest

from markups.modules.loader import CacheStore, InFlightTracker, LoaderStateError


class TestCacheStore:
    """Write-once cache of resolved capabilities."""

    def test_get_missing_key(self):
        store = CacheStore()

        assert store.get("diagram-engine") is None
        assert not store.has("diagram-engine")
        assert len(store) == 0

    def test_set_and_get(self):
        store = CacheStore()
        engine = object()

        store.set("diagram-engine", engine)

        assert store.has("diagram-engine")
        assert store.get("diagram-engine") is engine
        assert store.keys() == ["diagram-engine"]

    def test_set_twice_is_rejected(self):
        store = CacheStore()
        store.set("math-engine", "first")

        with pytest.raises(LoaderStateError):
            store.set("math-engine", "second")

        assert store.get("math-engine") == "first"


class TestInFlightTracker:
    """Pending loads keyed by capability."""

    @pytest.mark.asyncio
    async def test_begin_and_end(self):
        tracker = InFlightTracker()
        task = asyncio.ensure_future(asyncio.sleep(0))

        tracker.begin("math-engine", task)
        assert tracker.has("math-engine")
        assert tracker.get("math-engine") is task
        assert tracker.keys() == ["math-engine"]

        tracker.end("math-engine")
        assert not tracker.has("math-engine")
        assert tracker.get("math-engine") is None
        await task

    @pytest.mark.asyncio
    async def test_begin_twice_is_rejected(self):
        tracker = InFlightTracker()
        task = asyncio.ensure_future(asyncio.sleep(0))
        tracker.begin("diagram-engine", task)

        with pytest.raises(LoaderStateError):
            tracker.begin("diagram-engine", task)

        assert len(tracker) == 1
        await task

    def test_end_unknown_key_is_noop(self):
        tracker = InFlightTracker()

        tracker.end("docx-export")

        assert len(tracker) == 0
