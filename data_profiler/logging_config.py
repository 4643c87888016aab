"""
Structured JSON logging for the data profiler.

Every record is emitted as one JSON line carrying the timestamp, level, logger
name and message, the per-call context fields bound in ``LogContext``
(``run_id``, ``file_name``, ``source_type``), any ``extra={...}`` keys, and for
exceptions their type, message, ``code`` and public attributes.

    configure_logging(level=logging.INFO)
    logger = get_logger("services.analysis_service")
    with LogContext.bind(run_id="...", file_name="people.csv"):
        logger.info("analysis started", extra={"adapter": "CsvSourceAdapter"})
"""

__all__ = [
    "StructuredFormatter",
    "LogContext",
    "get_logger",
    "configure_logging",
    "reset_logging",
]

import json
import logging
import sys
import threading
from contextvars import ContextVar, Token
from datetime import UTC, date, datetime
from types import MappingProxyType
from typing import Any, Mapping

# ---------------------------------------------------------------------------
# Context propagation
# ---------------------------------------------------------------------------

_EMPTY: Mapping[str, str] = MappingProxyType({})

_context: ContextVar[Mapping[str, str]] = ContextVar("data_profiler_log_context", default=_EMPTY)


class LogContext:
    """Call-scoped log fields, isolated per thread and per asyncio task."""

    FIELDS = ("run_id", "file_name", "source_type")

    @classmethod
    def _merged(cls, fields: Mapping[str, str | None]) -> Mapping[str, str]:
        current = dict(_context.get())
        for key, value in fields.items():
            if key not in cls.FIELDS:
                raise KeyError(f"Unknown log context field: {key!r}")
            if value is not None:
                current[key] = value
        return MappingProxyType(current)

    @classmethod
    def set(cls, **fields: str | None) -> None:
        """Update the given fields; None values leave a field untouched."""
        _context.set(cls._merged(fields))

    @classmethod
    def get_all(cls) -> dict[str, str]:
        return dict(_context.get())

    @classmethod
    def clear(cls) -> None:
        _context.set(_EMPTY)

    @classmethod
    def bind(cls, **fields: str | None) -> "_BoundContext":
        """Context manager: apply fields on entry, restore the previous set on exit."""
        return _BoundContext(cls._merged(fields))


class _BoundContext:
    def __init__(self, fields: Mapping[str, str]):
        self._fields = fields
        self._token: Token | None = None

    def __enter__(self) -> type[LogContext]:
        self._token = _context.set(self._fields)
        return LogContext

    def __exit__(self, *exc: Any) -> None:
        if self._token is not None:
            _context.reset(self._token)
            self._token = None


# ---------------------------------------------------------------------------
# JSON formatter
# ---------------------------------------------------------------------------

# Attributes every LogRecord has; anything else came from ``extra``
_RESERVED: frozenset[str] = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", (), None))
) | {"message", "taskName"}


def _json_default(obj: Any) -> Any:
    if isinstance(obj, (datetime, date)):
        return obj.isoformat()
    return str(obj)


class StructuredFormatter(logging.Formatter):
    """Formats each log record as a single JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **LogContext.get_all(),
        }
        for key, value in vars(record).items():
            if key not in _RESERVED:
                payload.setdefault(key, value)

        if record.exc_info and record.exc_info[1] is not None:
            payload.update(self._exception_fields(record.exc_info[1]))
            payload["traceback"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=_json_default)

    @staticmethod
    def _exception_fields(exc: BaseException) -> dict[str, Any]:
        fields: dict[str, Any] = {
            "exc_type": type(exc).__name__,
            "exc_message": str(exc),
        }
        code = getattr(exc, "code", None)
        if code is not None:
            fields["exc_code"] = code
        # Structured attributes of ProfilerError subclasses (source_type, errors, ...)
        fields.update(
            (f"exc_{name}", value)
            for name, value in vars(exc).items()
            if not name.startswith("_")
        )
        return fields


# ---------------------------------------------------------------------------
# Setup
# ---------------------------------------------------------------------------

ROOT_LOGGER = "data_profiler"

_setup_lock = threading.Lock()
_handler: logging.Handler | None = None


def get_logger(name: str) -> logging.Logger:
    """Child of the ``data_profiler`` logger, e.g. ``data_profiler.adapters.xml``."""
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


def configure_logging(
    *,
    level: int = logging.INFO,
    stream: Any = None,
    handler: logging.Handler | None = None,
) -> None:
    """Attach one JSON handler to the ``data_profiler`` logger.

    Only the first call has an effect until ``reset_logging``.
    """
    global _handler
    with _setup_lock:
        if _handler is not None:
            return
        _handler = handler or logging.StreamHandler(stream or sys.stderr)
        _handler.setFormatter(StructuredFormatter())

        root = logging.getLogger(ROOT_LOGGER)
        root.setLevel(level)
        root.propagate = False
        root.addHandler(_handler)


def reset_logging() -> None:
    """Undo ``configure_logging``. For tests."""
    global _handler
    with _setup_lock:
        _handler = None
        root = logging.getLogger(ROOT_LOGGER)
        root.handlers.clear()
        root.setLevel(logging.WARNING)
        root.propagate = True
