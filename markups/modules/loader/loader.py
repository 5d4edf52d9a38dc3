"""
Capability Loader for Markups.

Owns the cache store and the in-flight tracker for one process. Every caller,
foreground rendering or idle-time preloading, goes through
request_capability(), which guarantees that a capability's factory runs at
most once per successful resolution.

Design Principles:
- Single owner: one CapabilityLoader is built at startup and handed out
- Cache first, then attach to the pending load, then start a new one
- Failures are never cached: the key returns to Unloaded and may be retried
- No cancellation: a started factory always runs to completion
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Mapping

from .errors import CapabilityLoadError, UnknownCapabilityError
from .store import CacheStore, InFlightTracker

logger = logging.getLogger(__name__)

LoaderFactory = Callable[[], Awaitable[Any]]


@dataclass
class LoadingStatus:
    """Point-in-time snapshot of loaded and loading capability keys."""

    loaded: List[str] = field(default_factory=list)
    loading: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, List[str]]:
        return {"loaded": list(self.loaded), "loading": list(self.loading)}


class CapabilityLoader:
    """
    Lazily loads and memoizes capabilities from a fixed factory registry.

    Usage:
        loader = CapabilityLoader({"diagram-engine": DiagramEngineFactory(client)})
        engine = await loader.request_capability("diagram-engine")
    """

    def __init__(self, registry: Mapping[str, LoaderFactory]):
        """
        Initialize capability loader.

        Args:
            registry: Mapping of capability key to its factory. Each factory
                is a zero-argument callable returning an awaitable that
                resolves to the capability value.
        """
        self._registry: Dict[str, LoaderFactory] = dict(registry)
        self._cache = CacheStore()
        self._in_flight = InFlightTracker()

    @property
    def capabilities(self) -> List[str]:
        """Registered capability keys."""
        return list(self._registry)

    def is_registered(self, key: str) -> bool:
        return key in self._registry

    async def request_capability(self, key: str) -> Any:
        """
        Return the capability value, loading it if needed.

        Args:
            key: Capability key

        Returns:
            The resolved capability value

        Raises:
            UnknownCapabilityError: If no factory is registered for key
            CapabilityLoadError: If the shared load attempt failed
        """
        # Cache hit returns without suspending
        if self._cache.has(key):
            return self._cache.get(key)

        task = self._in_flight.get(key)
        if task is None:
            task = self._start_load(key)
        else:
            logger.debug(f"Attaching to in-flight load of {key}")

        try:
            # Shielded so a cancelled caller never cancels the shared load
            return await asyncio.shield(task)
        except Exception as e:
            raise CapabilityLoadError(key, e) from e

    def get_loading_status(self) -> LoadingStatus:
        """Snapshot of the cache store and in-flight tracker keys."""
        return LoadingStatus(loaded=self._cache.keys(), loading=self._in_flight.keys())

    async def drain(self) -> None:
        """
        Wait for every in-flight load to settle.

        Outcomes are left to the callers; failures are not raised here.
        """
        while len(self._in_flight):
            tasks = [self._in_flight.get(key) for key in self._in_flight.keys()]
            await asyncio.gather(*tasks, return_exceptions=True)

    def _start_load(self, key: str) -> asyncio.Task:
        """Invoke the factory and register its task before any suspension."""
        factory = self._registry.get(key)
        if factory is None:
            raise UnknownCapabilityError(key)

        logger.info(f"Loading capability {key}")
        task = asyncio.ensure_future(self._load(key, factory))
        self._in_flight.begin(key, task)
        task.add_done_callback(self._consume_outcome)
        return task

    async def _load(self, key: str, factory: LoaderFactory) -> Any:
        try:
            value = await factory()
            self._cache.set(key, value)
            logger.info(f"Loaded capability {key}")
            return value
        except Exception as e:
            logger.error(f"Failed to load capability {key}: {e}")
            raise
        finally:
            self._in_flight.end(key)

    @staticmethod
    def _consume_outcome(task: asyncio.Task) -> None:
        # Callers may all have gone away; mark the exception as retrieved
        if not task.cancelled():
            task.exception()
