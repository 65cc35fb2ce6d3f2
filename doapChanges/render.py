from __future__ import annotations

"""Plain-text rendering of a :class:`ChangesetDocument`."""

import textwrap
from dataclasses import dataclass
from enum import Enum
from typing import List

from packaging.version import InvalidVersion, Version

from doapChanges.model import ChangesetDocument, Project, Release

RULE_WIDTH = 76
TITLE_BUDGET = 72
DEFAULT_WRAP_WIDTH = 76
FIRST_INDENT = " - "
NEXT_INDENT = "   "


class RevisionOrder(Enum):
    VERSION = "version"
    LEXICAL = "lexical"


@dataclass(frozen=True)
class RenderOptions:
    wrap_width: int = DEFAULT_WRAP_WIDTH
    revision_order: RevisionOrder = RevisionOrder.VERSION
    descending: bool = True


def revision_key(revision: str | None) -> tuple:
    """Sort key comparing revisions as versions where possible.

    Revisions that are not valid versions sort below all valid ones and
    compare lexically among themselves.
    """

    text = revision or ""
    try:
        return (1, Version(text), text)
    except InvalidVersion:
        return (0, text)


def sorted_releases(project: Project, options: RenderOptions) -> List[Release]:
    items = sorted(project.releases.items())
    if options.revision_order is RevisionOrder.LEXICAL:
        items.sort(key=lambda kv: kv[1].revision or "", reverse=options.descending)
    else:
        items.sort(key=lambda kv: revision_key(kv[1].revision), reverse=options.descending)
    return [release for _, release in items]


def banner(title: str) -> List[str]:
    rule = "#" * RULE_WIDTH
    padding = "#" * max(0, TITLE_BUDGET - len(title))
    return [rule, f"## {title} {padding}", rule, ""]


def bullet(text: str, width: int) -> List[str]:
    lines = textwrap.wrap(
        text,
        width=width,
        initial_indent=FIRST_INDENT,
        subsequent_indent=NEXT_INDENT,
        break_on_hyphens=False,
    )
    return lines or [FIRST_INDENT]


def _project_lines(project: Project, options: RenderOptions) -> List[str]:
    name = project.display_name
    lines = [name, "=" * len(name), ""]
    header = len(lines)
    if project.created:
        lines.append(f"Created:      {project.created}")
    for url in sorted(project.homepages):
        lines.append(f"Home page:    <{url}>")
    for url in sorted(project.bug_databases):
        lines.append(f"Bug tracker:  <{url}>")
    for key in sorted(project.maintainers):
        maintainer = project.maintainers[key]
        mbox = maintainer.mailbox
        who = maintainer.name if maintainer.name is not None else key
        if mbox is not None:
            lines.append(f"Maintainer:   {who} <{mbox}>")
        else:
            lines.append(f"Maintainer:   {who}")
    if len(lines) > header:
        lines.append("")

    for release in sorted_releases(project, options):
        heading = release.revision or ""
        if release.issued:
            heading += f" [{release.issued}]"
        if release.name:
            heading += f" # {release.name}"
        lines.append(heading)
        for change in sorted(release.changes.values(), key=lambda c: c.sort_key()):
            sigil = change.sigil
            text = f"({sigil}) {change.label or ''}" if sigil else (change.label or "")
            lines.extend(bullet(text, options.wrap_width))
        lines.append("")
    return lines


def render(document: ChangesetDocument, options: RenderOptions | None = None) -> str:
    """Render ``document`` as a human-readable changelog."""

    options = options or RenderOptions()
    lines = banner(document.synthesize_title())
    for key in sorted(document.projects):
        lines.extend(_project_lines(document.projects[key], options))
    return "\n".join(lines) + "\n"


__all__ = [
    "RevisionOrder",
    "RenderOptions",
    "revision_key",
    "sorted_releases",
    "banner",
    "bullet",
    "render",
]
