"""
Scheduler Module - Black Box Interface

Purpose: Warm up anticipated capabilities while the application is idle
Interface: IdleScheduler.schedule_preload(), RequestActivityMonitor
Hidden: Idle detection, wait deadline, background task bookkeeping

Best effort only: a skipped or failed preload just means the capability is
loaded lazily on first real demand.
"""

from .idle import IdleScheduler, IdleSignal, RequestActivityMonitor

__all__ = ["IdleScheduler", "IdleSignal", "RequestActivityMonitor"]
