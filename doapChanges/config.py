from __future__ import annotations

"""Loader for changelog rendering settings."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from doapChanges.detect import HINTS
from doapChanges.render import DEFAULT_WRAP_WIDTH, RenderOptions, RevisionOrder

CONFIG_ENV = "DOAP_CHANGES_CONFIG"
MIN_WRAP_WIDTH = 20


@dataclass(slots=True)
class ChangesConfig:
    """Runtime settings shared by the command line and build helpers."""

    wrap_width: int = DEFAULT_WRAP_WIDTH
    revision_order: str = RevisionOrder.VERSION.value
    descending: bool = True
    vocabulary: str = "auto"
    fetch_timeout: int = 15

    def render_options(self) -> RenderOptions:
        return RenderOptions(
            wrap_width=self.wrap_width,
            revision_order=RevisionOrder(self.revision_order),
            descending=self.descending,
        )


def _coerce_int(value: Any, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _coerce_bool(value: Any, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"1", "true", "yes", "on"}:
            return True
        if lowered in {"0", "false", "no", "off"}:
            return False
    return default


def config_path(path: Path | None = None) -> Path | None:
    if path is not None:
        return Path(path)
    env = os.getenv(CONFIG_ENV)
    if env:
        return Path(env)
    return None


def load_config(path: Path | None = None) -> ChangesConfig:
    """Load settings from YAML with safe defaults.

    ``path`` wins over ``$DOAP_CHANGES_CONFIG``; with neither, or when the
    file does not exist, defaults are returned.
    A file whose top level or ``render`` section is not a mapping raises
    :class:`ValueError`.
    """

    resolved = config_path(path)
    if resolved is None or not resolved.exists():
        return ChangesConfig()
    raw = yaml.safe_load(resolved.read_text(encoding="utf-8")) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"{resolved}: expected a mapping at the top level")
    render = raw.get("render") or {}
    if not isinstance(render, dict):
        raise ValueError(f"{resolved}: 'render' must be a mapping")
    order = str(render.get("revision_order", RevisionOrder.VERSION.value)).lower()
    if order not in {o.value for o in RevisionOrder}:
        order = RevisionOrder.VERSION.value
    vocabulary = str(raw.get("vocabulary", "auto")).lower()
    if vocabulary not in HINTS:
        vocabulary = "auto"
    return ChangesConfig(
        wrap_width=max(MIN_WRAP_WIDTH, _coerce_int(render.get("wrap_width"), DEFAULT_WRAP_WIDTH)),
        revision_order=order,
        descending=_coerce_bool(render.get("descending"), True),
        vocabulary=vocabulary,
        fetch_timeout=max(1, _coerce_int(raw.get("fetch_timeout"), 15)),
    )


__all__ = ["CONFIG_ENV", "ChangesConfig", "config_path", "load_config"]
