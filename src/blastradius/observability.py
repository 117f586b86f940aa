"""Observability: structured logging and the injectable log capability.

Components never reach for a process-wide logger directly.  Each one takes an
optional ``log`` argument (anything satisfying ``LogLike``) and falls back to
its named module logger, so tests can pass a recording fake.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class LogLike(Protocol):
    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None: ...
    def info(self, msg: str, *args: Any, **kwargs: Any) -> None: ...
    def warning(self, msg: str, *args: Any, **kwargs: Any) -> None: ...
    def error(self, msg: str, *args: Any, **kwargs: Any) -> None: ...


def get_log(name: str, log: LogLike | None = None) -> LogLike:
    """Return the injected log, or the named ``blastradius.*`` logger."""
    if log is not None:
        return log
    return logging.getLogger(f"blastradius.{name}")


# ---------------------------------------------------------------------------
# Structured JSON logging
# ---------------------------------------------------------------------------

class JsonFormatter(logging.Formatter):
    """Emit log records as single-line JSON."""

    def format(self, record: logging.LogRecord) -> str:
        log_dict: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info and record.exc_info[0] is not None:
            log_dict["exception"] = self.formatException(record.exc_info)
        # Propagate extra fields
        for key in ("file", "package", "duration_ms", "files", "hits", "misses"):
            val = getattr(record, key, None)
            if val is not None:
                log_dict[key] = val
        return json.dumps(log_dict, default=str)


def setup_logging(level: str = "WARNING", json_output: bool = False) -> None:
    """Configure the root logger.  Logs go to stderr so stdout stays parseable."""
    handler = logging.StreamHandler()
    if json_output:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter("[%(levelname)s] %(name)s: %(message)s"))
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.WARNING))
