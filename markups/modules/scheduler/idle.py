"""
Idle-time preloading.

The scheduler is an ordinary caller of CapabilityLoader.request_capability(),
so foreground requests and preloads share the same dedup guarantees. It only
decides *when* to ask: once the idle signal fires, or once the wait deadline
passes, whichever comes first.
"""

import asyncio
import logging
import time
from typing import Iterable, List, Optional, Protocol, Set

from markups.modules.loader import CapabilityLoader

logger = logging.getLogger(__name__)

DEFAULT_IDLE_TIMEOUT = 5.0


class IdleSignal(Protocol):
    """Anything that can tell the scheduler the application is idle."""

    async def wait_idle(self) -> None:
        """Return once the application is idle."""
        ...


class RequestActivityMonitor:
    """
    Idle signal driven by in-flight HTTP requests.

    The application counts as idle once no request is active and none has
    finished within the last `quiet_period` seconds.
    """

    def __init__(self, quiet_period: float = 0.5):
        self.quiet_period = quiet_period
        self._active = 0
        self._last_activity = time.monotonic()
        # Bound to the loop that waits on it; rebuilt when a new loop waits
        self._no_requests: Optional[asyncio.Event] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None

    @property
    def active_requests(self) -> int:
        return self._active

    @property
    def is_idle(self) -> bool:
        return self._active == 0 and self._quiet_remaining() <= 0

    def request_started(self) -> None:
        self._active += 1
        self._last_activity = time.monotonic()
        if self._no_requests is not None:
            self._no_requests.clear()

    def request_finished(self) -> None:
        self._active = max(0, self._active - 1)
        self._last_activity = time.monotonic()
        if self._active == 0 and self._no_requests is not None:
            self._no_requests.set()

    async def wait_idle(self) -> None:
        while True:
            await self._event().wait()
            remaining = self._quiet_remaining()
            if remaining <= 0 and self._active == 0:
                return
            await asyncio.sleep(max(remaining, 0.0))

    def _event(self) -> asyncio.Event:
        loop = asyncio.get_running_loop()
        if self._loop is not loop:
            self._loop = loop
            self._no_requests = asyncio.Event()
            if self._active == 0:
                self._no_requests.set()
        return self._no_requests

    def _quiet_remaining(self) -> float:
        return self.quiet_period - (time.monotonic() - self._last_activity)


class IdleScheduler:
    """Fire-and-forget background preloading of capabilities."""

    def __init__(
        self,
        loader: CapabilityLoader,
        idle_signal: Optional[IdleSignal] = None,
        idle_timeout: float = DEFAULT_IDLE_TIMEOUT,
    ):
        """
        Initialize idle scheduler.

        Args:
            loader: Capability loader shared with foreground callers
            idle_signal: Idle notification source; None disables preloading
            idle_timeout: Seconds to wait for idleness before preloading anyway
        """
        self.loader = loader
        self.idle_signal = idle_signal
        self.idle_timeout = idle_timeout
        self._tasks: Set[asyncio.Task] = set()

    @property
    def pending(self) -> int:
        """Number of preload batches not finished yet."""
        return len(self._tasks)

    def schedule_preload(self, keys: Iterable[str]) -> None:
        """
        Preload the given capabilities once the application is idle.

        Returns immediately. Nothing is scheduled when no idle signal is
        available; those capabilities load lazily on first use instead.
        """
        keys = list(dict.fromkeys(keys))
        if self.idle_signal is None:
            logger.debug(f"No idle signal available, skipping preload of {keys}")
            return
        if not keys:
            return

        task = asyncio.get_running_loop().create_task(self._preload_when_idle(keys))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def wait_pending(self) -> None:
        """Wait for every scheduled preload batch to settle."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def shutdown(self) -> None:
        """
        Cancel preload batches that are still waiting.

        A factory already running is shielded by the loader and keeps going.
        """
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

    async def _preload_when_idle(self, keys: List[str]) -> None:
        try:
            await asyncio.wait_for(self.idle_signal.wait_idle(), timeout=self.idle_timeout)
        except asyncio.TimeoutError:
            logger.debug(f"Idle wait exceeded {self.idle_timeout}s, preloading anyway")
        except Exception as e:
            logger.warning(f"Idle signal failed ({e}), preloading anyway")

        logger.info(f"Preloading capabilities: {', '.join(keys)}")
        await asyncio.gather(*(self._preload(key) for key in keys))

    async def _preload(self, key: str) -> None:
        try:
            await self.loader.request_capability(key)
        except Exception as e:
            # Nobody is waiting on a preload; the next real request retries
            logger.warning(f"Preload of {key} failed: {e}")
