from __future__ import annotations

"""Exceptions raised while loading and extracting changelog graphs."""


class ChangesetError(RuntimeError):
    """Base class for fatal changelog failures."""


class ChangesetParseError(ChangesetError):
    """The input document is not valid in the declared serialization."""

    def __init__(self, source: str, fmt: str, reason: str) -> None:
        super().__init__(f"Failed to parse {source} as {fmt}: {reason}")
        self.source = source
        self.fmt = fmt
        self.reason = reason


class ChangesetFetchError(ChangesetError):
    """A remote changelog document could not be retrieved."""


class ChangesetQueryError(ChangesetError):
    """An internal query was rejected by the SPARQL engine."""


__all__ = [
    "ChangesetError",
    "ChangesetParseError",
    "ChangesetFetchError",
    "ChangesetQueryError",
]
