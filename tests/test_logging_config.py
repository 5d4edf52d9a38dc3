"""
Unit tests for the logging configuration and the access-log skip-path filter.
"""

import logging

import pytest

from markups.logging_config import SkipPathAccessFilter, get_logging_config
from markups.modules.middleware import DEFAULT_SKIP_PATHS


def access_record(method: str, path: str, name: str = "uvicorn.access") -> logging.LogRecord:
    """Build a record shaped like uvicorn's access log line."""
    return logging.LogRecord(
        name=name,
        level=logging.INFO,
        pathname=__file__,
        lineno=0,
        msg='%s - "%s %s HTTP/%s" %d',
        args=("127.0.0.1:50000", method, path, "1.1", 200),
        exc_info=None,
    )


@pytest.fixture
def configured_filter():
    """Instantiate the filter exactly as dictConfig would."""
    spec = dict(get_logging_config()["filters"]["skip_path_access"])
    factory = spec.pop("()")
    return factory(**spec)


class TestSkipPathAccessFilter:

    def test_uses_middleware_skip_paths(self, configured_filter):
        assert isinstance(configured_filter, SkipPathAccessFilter)
        assert configured_filter.skip_paths == frozenset(DEFAULT_SKIP_PATHS)

    @pytest.mark.parametrize("path", ["/health", "/health?verbose=1"])
    def test_drops_health_checks(self, configured_filter, path):
        assert configured_filter.filter(access_record("GET", path)) is False

    @pytest.mark.parametrize("method,path", [
        ("GET", "/api/v1/capabilities/status"),
        ("GET", "/healthz"),
        ("GET", "/api/v1/health"),
        ("POST", "/health"),
        ("POST", "/api/v1/capabilities/diagram-engine/load"),
    ])
    def test_keeps_real_traffic(self, configured_filter, method, path):
        assert configured_filter.filter(access_record(method, path)) is True

    def test_other_loggers_untouched(self, configured_filter):
        assert configured_filter.filter(access_record("GET", "/health", name="markups.main")) is True

    def test_preformatted_message(self, configured_filter):
        record = logging.LogRecord(
            "uvicorn.access", logging.INFO, __file__, 0,
            '10.0.0.1:1234 - "GET /health HTTP/1.1" 200', None, None,
        )

        assert configured_filter.filter(record) is False


class TestLoggingConfig:

    def test_level_applies_to_markups_logger(self):
        config = get_logging_config("debug")

        assert config["loggers"]["markups"]["level"] == "DEBUG"
        assert config["root"]["level"] == "DEBUG"
        assert config["handlers"]["access"]["filters"] == ["skip_path_access"]
        assert config["loggers"]["uvicorn.access"]["handlers"] == ["access"]
