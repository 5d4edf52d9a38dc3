"""
Shared pytest fixtures for Markups tests.

This module provides common fixtures including:
- RecordingFactory: Capability factory that counts invocations and can be
  held open or made to fail
- Loader fixtures built on a fresh registry per test
"""

import asyncio
import os
import sys
from typing import Any, Optional

import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from markups.modules.loader import CapabilityLoader


class RecordingFactory:
    """
    Fake capability factory.

    Usage:
        factory = RecordingFactory("engine", hold=True)
        loader = CapabilityLoader({"diagram-engine": factory})
        task = asyncio.create_task(loader.request_capability("diagram-engine"))
        ...
        factory.release()
    """

    def __init__(self, value: Any = "engine", hold: bool = False, error: Optional[Exception] = None):
        self.value = value
        self.error = error
        self.calls = 0
        self.started = asyncio.Event()
        self._gate = asyncio.Event()
        if not hold:
            self._gate.set()

    def release(self) -> None:
        self._gate.set()

    async def __call__(self) -> Any:
        self.calls += 1
        self.started.set()
        await self._gate.wait()
        if self.error is not None:
            raise self.error
        return self.value


@pytest.fixture
def diagram_factory():
    """Held diagram factory; call release() to let it finish."""
    return RecordingFactory(value={"engine": "mermaid"}, hold=True)


@pytest.fixture
def math_factory():
    """Math factory that resolves as soon as it is awaited."""
    return RecordingFactory(value={"engine": "katex"})


@pytest.fixture
def loader(diagram_factory, math_factory):
    """Fresh capability loader per test."""
    return CapabilityLoader({
        "diagram-engine": diagram_factory,
        "math-engine": math_factory,
    })
