"""Shared helpers."""

from .log_json import JsonLogger, configure_logging

__all__ = ["JsonLogger", "configure_logging"]
