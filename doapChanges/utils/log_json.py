from __future__ import annotations

"""Structured JSON logger used across loading, extraction and output."""

import json
import logging
import re
from datetime import datetime, timezone
from typing import Any, Iterable, Mapping, MutableMapping

EMAIL_RE = re.compile(r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}")
TOKEN_RE = re.compile(r"bearer\s+[A-Za-z0-9\-_=.]+", re.IGNORECASE)
URL_QUERY_RE = re.compile(r"https?://[^\s?]+\?[^\s]+")

_HANDLER_NAME = "doapchanges.stderr"

_LEVEL_MAP = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def _scrub(value: str) -> str:
    value = EMAIL_RE.sub("[redacted]", value)
    value = TOKEN_RE.sub("[redacted]", value)
    value = URL_QUERY_RE.sub(lambda m: m.group(0).split("?")[0], value)
    return value


def _sanitize(obj: Any) -> Any:
    if isinstance(obj, dict):
        return {str(k): _sanitize(v) for k, v in obj.items() if v is not None}
    if isinstance(obj, (list, tuple)):
        return [_sanitize(v) for v in obj]
    if isinstance(obj, (int, float, bool)):
        return obj
    if obj is None:
        return None
    return _scrub(str(obj))


def _truncate(details: Mapping[str, Any] | Iterable[Any], max_bytes: int) -> Any:
    if max_bytes <= 0:
        return details
    serialized = json.dumps(details, ensure_ascii=False, sort_keys=True, separators=(",", ":"))
    blob = serialized.encode("utf-8")
    if len(blob) <= max_bytes:
        return details
    preview = blob[:max_bytes].decode("utf-8", errors="ignore")
    return {"note": "truncated", "preview": preview}


class JsonLogger:
    """Emit structured JSON events with consistent keys."""

    def __init__(
        self,
        service: str,
        *,
        logger: logging.Logger | None = None,
        max_details_bytes: int = 4096,
    ) -> None:
        self._service = service
        self._logger = logger or logging.getLogger(f"doapchanges.{service}.json")
        self._max_details_bytes = max(0, int(max_details_bytes))

    def debug(self, event: str, **fields: Any) -> dict[str, Any] | None:
        return self._emit("DEBUG", event, fields)

    def info(self, event: str, **fields: Any) -> dict[str, Any] | None:
        return self._emit("INFO", event, fields)

    def warning(self, event: str, **fields: Any) -> dict[str, Any] | None:
        return self._emit("WARNING", event, fields)

    def emit(self, level: str, event: str, **fields: Any) -> dict[str, Any] | None:
        return self._emit(level.upper(), event, dict(fields))

    def _emit(self, level: str, event: str, fields: MutableMapping[str, Any]) -> dict[str, Any] | None:
        levelno = _LEVEL_MAP.get(level.upper(), logging.INFO)
        if not self._logger.isEnabledFor(levelno):
            return None
        entry: dict[str, Any] = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "level": level.upper(),
            "service": self._service,
            "event": event,
        }
        details = fields.pop("details", None)
        if details is not None:
            entry["details"] = _truncate(_sanitize(details), self._max_details_bytes)
        if fields:
            residual = _truncate(_sanitize(fields), self._max_details_bytes)
            if "details" in entry and isinstance(entry["details"], dict) and isinstance(residual, dict):
                entry["details"].update(residual)
            else:
                entry["details"] = residual
        payload = json.dumps(entry, ensure_ascii=False, sort_keys=True, separators=(",", ":"))
        self._logger.log(levelno, payload)
        return entry


def configure_logging(level: str = "WARNING") -> None:
    """Attach a message-only stderr handler to the ``doapchanges`` loggers."""

    root = logging.getLogger("doapchanges")
    for existing in list(root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            root.removeHandler(existing)
    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter("%(message)s"))
    root.addHandler(handler)
    root.setLevel(_LEVEL_MAP.get(level.upper(), logging.WARNING))


__all__ = ["JsonLogger", "configure_logging"]
