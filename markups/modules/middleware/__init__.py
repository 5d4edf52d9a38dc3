"""
Activity Middleware Module - Black Box Interface

Purpose: Report HTTP request activity to the idle signal
Interface: ActivityMiddleware, create_activity_middleware(), DEFAULT_SKIP_PATHS
Hidden: Path filtering, start/finish bookkeeping

Health checks and other skipped paths do not count as activity, so monitoring traffic
never holds off idle-time preloading. The same paths are dropped from the
access log (see markups.logging_config).
"""

from typing import Iterable, Optional

from fastapi import Request

from markups.modules.scheduler import RequestActivityMonitor

DEFAULT_SKIP_PATHS = ("/health",)


class ActivityMiddleware:
    """
    HTTP middleware that feeds a RequestActivityMonitor.

    Register with `app.middleware("http")(ActivityMiddleware())`. Without an
    explicit monitor, the one on `app.state.activity_monitor` is used, so the
    monitor can be rebuilt for every application run.
    """

    def __init__(
        self,
        monitor: Optional[RequestActivityMonitor] = None,
        skip_paths: Optional[Iterable[str]] = None,
    ):
        """
        Initialize activity middleware.

        Args:
            monitor: Activity monitor acting as the idle signal; resolved from
                app state per request when None
            skip_paths: Request paths that do not count as activity
        """
        self.monitor = monitor
        self.skip_paths = set(skip_paths if skip_paths is not None else DEFAULT_SKIP_PATHS)

    def should_skip(self, request: Request) -> bool:
        return str(request.url.path) in self.skip_paths

    def resolve_monitor(self, request: Request) -> Optional[RequestActivityMonitor]:
        if self.monitor is not None:
            return self.monitor
        return getattr(request.app.state, "activity_monitor", None)

    async def __call__(self, request: Request, call_next):
        """Count the request as activity for its whole duration."""
        monitor = self.resolve_monitor(request)
        if monitor is None or self.should_skip(request):
            return await call_next(request)

        monitor.request_started()
        try:
            return await call_next(request)
        finally:
            monitor.request_finished()


def create_activity_middleware(
    monitor: Optional[RequestActivityMonitor] = None,
    skip_paths: Optional[Iterable[str]] = None,
) -> ActivityMiddleware:
    """
    Factory function to create activity tracking middleware.

    Args:
        monitor: Activity monitor acting as the idle signal (default: app state)
        skip_paths: Paths that do not count as activity (default: /health)

    Returns:
        Configured ActivityMiddleware instance
    """
    return ActivityMiddleware(monitor=monitor, skip_paths=skip_paths)


__all__ = [
    "ActivityMiddleware",
    "DEFAULT_SKIP_PATHS",
    "create_activity_middleware",
]
