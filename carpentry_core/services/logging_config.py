"""
Structured logging for the carpentry calculation core.

Every engine gets its logger from ``engine_logger()`` and attaches batch
context through ``log_context()``. The host application decides where records
go by calling ``setup_logging()`` once at start-up; the engines never install
handlers themselves.
"""
import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional, TextIO

LOGGER_PREFIX = "carpentry-"

# Batch context attached by the engines, emitted as top-level JSON keys
CONTEXT_FIELDS = ("project_id", "unit_id", "duration_ms")

_engine_loggers: Dict[str, logging.Logger] = {}


def engine_logger(engine: str) -> logging.Logger:
    """Named logger for one engine, e.g. ``engine_logger("costing")`` → ``carpentry-costing``."""
    name = f"{LOGGER_PREFIX}{engine}"
    if name not in _engine_loggers:
        _engine_loggers[name] = logging.getLogger(name)
    return _engine_loggers[name]


def engine_logger_names() -> tuple:
    return tuple(sorted(_engine_loggers))


def log_context(
    project_id: Optional[str] = None,
    unit_id: Optional[str] = None,
    duration_ms: Optional[float] = None,
) -> Dict[str, Any]:
    """``extra=`` payload for a log call. Unset fields are left off the record."""
    context = {"project_id": project_id, "unit_id": unit_id, "duration_ms": duration_ms}
    return {key: value for key, value in context.items() if value is not None}


class JSONFormatter(logging.Formatter):
    """One JSON object per record, with the batch context fields when present."""
    def format(self, record):
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)
        for field in CONTEXT_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                log_entry[field] = value
        return json.dumps(log_entry, default=str)


def setup_logging(
    level: str = "INFO",
    json_output: bool = True,
    stream: Optional[TextIO] = None,
    engine_level: Optional[str] = None,
) -> logging.Handler:
    """
    Install one handler on the root logger and return it.

    ``engine_level`` overrides the level of the carpentry engine loggers only,
    e.g. DEBUG cut/glass detail while the host stays at INFO.
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    handler = logging.StreamHandler(stream or sys.stdout)
    if json_output:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s [%(name)s] %(levelname)s: %(message)s"
        ))

    root.handlers = [handler]

    if engine_level:
        resolved = getattr(logging, engine_level.upper(), logging.INFO)
        for name in engine_logger_names():
            logging.getLogger(name).setLevel(resolved)
    return handler
