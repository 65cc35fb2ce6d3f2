from __future__ import annotations

"""Decide which changelog vocabulary a graph is written in."""

from enum import Enum

import rdflib

from doapChanges.kg.queries import QUERIES, ask

HINTS = ("auto", "legacy", "current")


class Vocabulary(Enum):
    LEGACY = "legacy"
    CURRENT = "current"


def parse_hint(hint: str | Vocabulary | None) -> Vocabulary | None:
    """Return the vocabulary named by ``hint``; ``None`` means autodetect."""

    if isinstance(hint, Vocabulary):
        return hint
    name = (hint or "auto").strip().lower()
    if name not in HINTS:
        raise ValueError(f"Unknown vocabulary hint {hint!r}; expected one of {', '.join(HINTS)}")
    if name == "auto":
        return None
    return Vocabulary(name)


def detect(graph: rdflib.Graph, hint: str | Vocabulary | None = "auto") -> Vocabulary:
    """Return the vocabulary of ``graph``.

    Autodetection probes only for the legacy ``doap:Version`` predicate: a
    graph using it is legacy, every other graph is treated as current.
    """

    explicit = parse_hint(hint)
    if explicit is not None:
        return explicit
    if ask(graph, QUERIES["legacy_probe"]):
        return Vocabulary.LEGACY
    return Vocabulary.CURRENT


__all__ = ["HINTS", "Vocabulary", "parse_hint", "detect"]
