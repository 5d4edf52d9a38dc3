"""
Logging configuration for Markups.

Uvicorn access lines for health checks are dropped. Skipped traffic is the
same set of paths the activity middleware ignores, so a request either
counts as real activity and is logged, or is neither.
"""

import logging
import logging.config
import re
from typing import Any, Dict, Iterable, Optional

from markups.modules.middleware import DEFAULT_SKIP_PATHS

# uvicorn: '%s - "%s %s HTTP/%s" %d'
ACCESS_LINE = re.compile(r'"(?P<method>[A-Z]+) (?P<path>\S+) HTTP/[\d.]+"')


class SkipPathAccessFilter(logging.Filter):
    """Drop uvicorn access records for GET requests to skipped paths."""

    def __init__(self, skip_paths: Optional[Iterable[str]] = None):
        super().__init__()
        self.skip_paths = frozenset(skip_paths if skip_paths is not None else DEFAULT_SKIP_PATHS)

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name != "uvicorn.access":
            return True
        request = self._request_line(record)
        if request is None:
            return True
        method, path = request
        return not (method == "GET" and path.split("?", 1)[0] in self.skip_paths)

    @staticmethod
    def _request_line(record: logging.LogRecord):
        args = record.args
        if isinstance(args, tuple) and len(args) >= 3:
            return str(args[1]), str(args[2])
        match = ACCESS_LINE.search(record.getMessage())
        if match:
            return match.group("method"), match.group("path")
        return None


def get_logging_config(level: str = "INFO") -> Dict[str, Any]:
    """Get dictConfig settings; `level` applies to markups and root loggers."""
    level = level.upper()
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {
            "skip_path_access": {
                "()": SkipPathAccessFilter,
                "skip_paths": list(DEFAULT_SKIP_PATHS),
            }
        },
        "formatters": {
            "default": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            },
            "access": {
                "format": "%(message)s"
            }
        },
        "handlers": {
            "default": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "stream": "ext://sys.stdout"
            },
            "access": {
                "class": "logging.StreamHandler",
                "formatter": "access",
                "stream": "ext://sys.stdout",
                "filters": ["skip_path_access"]
            }
        },
        "loggers": {
            "uvicorn": {"handlers": ["default"], "level": "INFO", "propagate": False},
            "uvicorn.error": {"handlers": ["default"], "level": "INFO", "propagate": False},
            "uvicorn.access": {"handlers": ["access"], "level": "INFO", "propagate": False},
            "markups": {"handlers": ["default"], "level": level, "propagate": False},
        },
        "root": {
            "level": level,
            "handlers": ["default"]
        }
    }


def configure_logging(level: str = "INFO") -> None:
    """Apply the logging configuration."""
    logging.config.dictConfig(get_logging_config(level))
