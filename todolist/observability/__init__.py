from __future__ import annotations

import datetime as dt
import json
import logging
import os
import sys
from collections.abc import Mapping
from typing import Any

STANDARD_EXTRAS = (
    "event",
    "op",
    "position",
    "path",
    "count",
    "attributes",
)


def _iso_now() -> str:
    return dt.datetime.now(dt.UTC).isoformat()


def _build_base_payload(record: logging.LogRecord) -> dict[str, Any]:
    service = getattr(record, "service", None) or os.getenv("SERVICE_NAME") or "todolist"
    return {
        "ts": _iso_now(),
        "level": record.levelname.lower(),
        "service": service,
        "logger": record.name,
        "msg": record.getMessage(),
    }


def _add_standard_extras(payload: dict[str, Any], record: logging.LogRecord) -> None:
    for attr in STANDARD_EXTRAS:
        if hasattr(record, attr):
            payload[attr] = getattr(record, attr)


class JsonLogFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        payload: dict[str, Any] = _build_base_payload(record)
        _add_standard_extras(payload, record)
        if record.exc_info:
            exc_type, exc_value, _ = record.exc_info
            payload["err_type"] = getattr(exc_type, "__name__", str(exc_type))
            if exc_value is not None:
                payload["err"] = str(exc_value)
            payload["stack"] = self.formatException(record.exc_info)
        # default=str keeps dates and paths serializable on a single line
        return json.dumps(payload, ensure_ascii=False, default=str)


class ConsoleLogFormatter(logging.Formatter):
    def __init__(self) -> None:
        super().__init__("%(message)s")

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        ts = _iso_now()[11:19]  # HH:MM:SS
        parts: list[str] = [ts, record.levelname.upper(), record.name]

        event = getattr(record, "event", None)
        if event:
            parts.append(str(event))
        op = getattr(record, "op", None)
        if op:
            parts.append(f"op={op}")
        position = getattr(record, "position", None)
        if position is not None:
            parts.append(f"pos={position}")
        count = getattr(record, "count", None)
        if count is not None:
            parts.append(f"count={count}")
        parts.append("-")
        parts.append(record.getMessage())
        return " ".join(parts)


def _choose_formatter() -> logging.Formatter:
    format_pref = (os.getenv("LOG_FORMAT") or "").strip().lower() or "auto"
    if format_pref == "auto":
        if sys.stderr.isatty():
            return ConsoleLogFormatter()
        return JsonLogFormatter()
    if format_pref == "console":
        return ConsoleLogFormatter()
    return JsonLogFormatter()


def _parse_level(value: str | None, default: int = logging.WARNING) -> int:
    name = (value or "").strip().upper()
    if not name:
        return default
    level = getattr(logging, name, None)
    return level if isinstance(level, int) else default


def _level_for_logger(logger_name: str) -> int:
    """Resolve a logger's level from LOG_LEVEL and LOG_MODULE_LEVELS.

    LOG_MODULE_LEVELS is a comma-separated list of ``prefix=LEVEL`` entries,
    e.g. ``todolist.store=DEBUG,todolist.storage=INFO``. The first matching
    prefix wins.
    """
    base_level = _parse_level(os.getenv("LOG_LEVEL"))
    overrides = (os.getenv("LOG_MODULE_LEVELS") or "").strip()
    if not overrides:
        return base_level
    for entry in overrides.split(","):
        entry = entry.strip()
        if not entry or "=" not in entry:
            continue
        prefix, lvl = entry.split("=", 1)
        prefix = prefix.strip()
        if not prefix:
            continue
        if logger_name == prefix or logger_name.startswith(prefix + "."):
            return _parse_level(lvl, base_level)
    return base_level


def get_json_logger(name: str = "todolist") -> logging.Logger:
    logger = logging.getLogger(name)
    if not logger.handlers:
        # stderr keeps CLI output on stdout clean
        handler = logging.StreamHandler(stream=sys.stderr)
        handler.setFormatter(_choose_formatter())
        logger.addHandler(handler)
        logger.setLevel(_level_for_logger(name))
        logger.propagate = False
    return logger


class Metrics:
    def __init__(self) -> None:
        self._counters: dict[tuple[str, tuple[tuple[str, str], ...]], int] = {}

    def increment(
        self,
        name: str,
        labels: Mapping[str, str] | None = None,
        amount: int = 1,
    ) -> None:
        label_items: tuple[tuple[str, str], ...] = tuple(sorted((labels or {}).items()))
        key = (name, label_items)
        self._counters[key] = self._counters.get(key, 0) + amount

    def value(self, name: str, labels: Mapping[str, str] | None = None) -> int:
        label_items: tuple[tuple[str, str], ...] = tuple(sorted((labels or {}).items()))
        return self._counters.get((name, label_items), 0)

    def snapshot(self) -> list[dict[str, Any]]:
        out: list[dict[str, Any]] = []
        for (name, label_items), value in sorted(self._counters.items()):
            out.append(
                {
                    "name": name,
                    "labels": dict(label_items),
                    "value": value,
                }
            )
        return out


# ----------------------------
# Metrics singleton
# ----------------------------

_metrics_singleton: Metrics | None = None


def get_metrics() -> Metrics:
    global _metrics_singleton
    if _metrics_singleton is None:
        _metrics_singleton = Metrics()
    return _metrics_singleton


def reset_metrics() -> None:
    global _metrics_singleton
    _metrics_singleton = Metrics()


__all__ = [
    "ConsoleLogFormatter",
    "JsonLogFormatter",
    "Metrics",
    "get_json_logger",
    "get_metrics",
    "reset_metrics",
]
