from __future__ import annotations

"""Console entrypoint for ``doap-changes``.

The click group lives in ``__main__`` so ``python -m doapChanges.cli`` works;
it is imported lazily here to keep that module from loading twice.
"""

from typing import Any

__all__ = ["main", "cli"]


def __getattr__(name: str) -> Any:  # pragma: no cover - simple delegation
    if name == "cli":
        from .__main__ import cli as _cli

        return _cli
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def main() -> None:  # pragma: no cover - thin wrapper
    from .__main__ import cli as _cli

    _cli()
