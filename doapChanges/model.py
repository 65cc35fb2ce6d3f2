from __future__ import annotations

"""In-memory changelog aggregate built by the extractor."""

import re
from dataclasses import dataclass, field
from typing import Dict, Optional, Set

from doapChanges.kg.nodes import GraphNode

DEFAULT_TITLE = "Changes"

_LOCAL_NAME_RE = re.compile(r"[^#/]+$")


@dataclass
class Maintainer:
    name: Optional[str] = None
    mailboxes: Set[str] = field(default_factory=set)

    @property
    def mailbox(self) -> Optional[str]:
        """Lexicographically first mailbox, if any."""
        return min(self.mailboxes) if self.mailboxes else None


@dataclass
class Change:
    label: Optional[str] = None
    type: Optional[str] = None

    @property
    def sigil(self) -> Optional[str]:
        """Local name of the change type, e.g. ``Addition``."""
        if not self.type:
            return None
        match = _LOCAL_NAME_RE.search(self.type)
        return match.group(0) if match else None

    def sort_key(self) -> tuple[str, str]:
        return (self.type or "", self.label or "")


@dataclass
class Release:
    revision: Optional[str] = None
    issued: Optional[str] = None
    name: Optional[str] = None
    changes: Dict[str, Change] = field(default_factory=dict)

    def change(self, key: str) -> Change:
        return self.changes.setdefault(key, Change())


@dataclass
class Project:
    key: str
    name: Optional[str] = None
    created: Optional[str] = None
    homepages: Set[str] = field(default_factory=set)
    bug_databases: Set[str] = field(default_factory=set)
    maintainers: Dict[str, Maintainer] = field(default_factory=dict)
    releases: Dict[str, Release] = field(default_factory=dict)
    node: Optional[GraphNode] = field(default=None, repr=False, compare=False)

    @property
    def display_name(self) -> str:
        return self.name if self.name is not None else self.key

    def maintainer(self, key: str) -> Maintainer:
        return self.maintainers.setdefault(key, Maintainer())

    def release(self, key: str) -> Release:
        return self.releases.setdefault(key, Release())


@dataclass
class ChangesetDocument:
    title: Optional[str] = None
    projects: Dict[str, Project] = field(default_factory=dict)

    def project(self, key: str) -> Project:
        return self.projects.setdefault(key, Project(key))

    def synthesize_title(self) -> str:
        """Return ``title``, or the fallback title when none is asserted.

        The shortest project display name wins, ties going to the project
        whose key sorts first.
        """

        if self.title:
            return self.title
        shortest: Optional[str] = None
        for key in sorted(self.projects):
            name = self.projects[key].display_name
            if shortest is None or len(name) < len(shortest):
                shortest = name
        return f"Changes for {shortest}" if shortest else DEFAULT_TITLE


__all__ = [
    "DEFAULT_TITLE",
    "Maintainer",
    "Change",
    "Release",
    "Project",
    "ChangesetDocument",
]
