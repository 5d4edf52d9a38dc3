"""
Loader Module - Black Box Interface

Purpose: Load each optional capability at most once and share it
Interface: request_capability(), get_loading_status()
Hidden: Cache store, in-flight tracking, factory invocation

Concurrent requests for the same capability share one underlying load.
Failed loads are never cached, so the next request starts a fresh attempt.
"""

from .errors import (
    CapabilityLoadError,
    LoaderError,
    LoaderStateError,
    UnknownCapabilityError,
)
from .loader import CapabilityLoader, LoaderFactory, LoadingStatus
from .store import CacheStore, InFlightTracker

__all__ = [
    "CacheStore",
    "CapabilityLoadError",
    "CapabilityLoader",
    "InFlightTracker",
    "LoaderError",
    "LoaderFactory",
    "LoaderStateError",
    "LoadingStatus",
    "UnknownCapabilityError",
]
