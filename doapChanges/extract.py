from __future__ import annotations

"""Build a :class:`ChangesetDocument` from a changelog graph.

Extraction runs two passes. The first discovers projects and document-level
metadata, the second collects releases and change items for each project.
Rows are folded in a stable order, so when a fact is asserted more than once
the last row in that order wins.
"""

from enum import Enum
from typing import Iterable, List

import rdflib

from doapChanges.detect import Vocabulary
from doapChanges.kg import queries
from doapChanges.kg.namespaces import ASC_NS, BASE_CHANGE_TYPE, LEGACY_CHANGE_TYPES
from doapChanges.kg.nodes import NodeKind, canonical, literal_value, resource_uri
from doapChanges.model import ChangesetDocument, Project, Release
from doapChanges.utils.log_json import JsonLogger

_logger = JsonLogger("extract")


class DiscoveryScope(Enum):
    """Which projects the first pass considers."""

    SCOPED_TO_DOCUMENT = "scoped"
    UNSCOPED = "unscoped"


def _row_key(row: queries.Row) -> tuple[tuple[str, str], ...]:
    return tuple((name, canonical(row[name])) for name in sorted(row))


def _ordered(rows: Iterable[queries.Row]) -> List[queries.Row]:
    return sorted(rows, key=_row_key)


def _fold_project_row(doc: ChangesetDocument, row: queries.Row) -> None:
    project = doc.project(canonical(row["project"]))
    project.node = row["project"]

    name = literal_value(row.get("distname"))
    if name is not None:
        project.name = name
    created = literal_value(row.get("created"))
    if created is not None:
        project.created = created
    homepage = resource_uri(row.get("homepage"))
    if homepage is not None:
        project.homepages.add(homepage)
    bug_database = resource_uri(row.get("bugdatabase"))
    if bug_database is not None:
        project.bug_databases.add(bug_database)

    maint = row.get("maint")
    if maint is not None:
        maintainer = project.maintainer(canonical(maint))
        maint_name = literal_value(row.get("maintname"))
        if maint_name is not None:
            maintainer.name = maint_name
        mbox = resource_uri(row.get("maintmbox"))
        if mbox is not None:
            maintainer.mailboxes.add(mbox)

    title = literal_value(row.get("title"))
    if title is not None:
        doc.title = title


def _fold_release_row(release: Release, row: queries.Row) -> None:
    revision = literal_value(row.get("revision"))
    if revision is not None:
        release.revision = revision
    issued = literal_value(row.get("issued"))
    if issued is not None:
        release.issued = issued
    vname = literal_value(row.get("vname"))
    if vname is not None:
        release.name = vname


def _fold_current_change(release: Release, row: queries.Row) -> None:
    item = row.get("item")
    if item is None:
        return
    change = release.change(canonical(item))
    label = literal_value(row.get("itemlabel"))
    if label is not None:
        change.label = label
    item_type = resource_uri(row.get("itemtype"))
    if item_type is not None and item_type != BASE_CHANGE_TYPE:
        change.type = item_type


def _fold_legacy_change(release: Release, row: queries.Row) -> None:
    # Changefile items are bare literals hanging off a predicate that names
    # the change type; the literal itself identifies the change.
    label = row.get("itemlabel")
    if label is None or label.kind is not NodeKind.LITERAL:
        return
    change = release.change(canonical(label))
    change.label = label.text
    predicate = resource_uri(row.get("itemtype"))
    if predicate is not None and predicate.startswith(ASC_NS):
        normalised = LEGACY_CHANGE_TYPES.get(predicate[len(ASC_NS):].lower())
        if normalised is not None:
            change.type = normalised


def discover_projects(
    graph: rdflib.Graph,
    document_uri: str,
    *,
    scope: DiscoveryScope = DiscoveryScope.UNSCOPED,
) -> ChangesetDocument:
    """Run the project discovery pass."""

    doc = ChangesetDocument()
    query = queries.project_query(
        document_uri, scoped=scope is DiscoveryScope.SCOPED_TO_DOCUMENT
    )
    for row in _ordered(queries.select(graph, query)):
        _fold_project_row(doc, row)
    return doc


def discover_releases(graph: rdflib.Graph, project: Project, vocabulary: Vocabulary) -> None:
    """Run the release discovery pass for ``project``."""

    legacy = vocabulary is Vocabulary.LEGACY
    fold_change = _fold_legacy_change if legacy else _fold_current_change
    rows = queries.select(
        graph,
        queries.release_query(legacy),
        bindings={"project": project.node},
    )
    for row in _ordered(rows):
        release = project.release(canonical(row["version"]))
        _fold_release_row(release, row)
        fold_change(release, row)


def extract(
    graph: rdflib.Graph,
    vocabulary: Vocabulary,
    document_uri: str,
    *,
    scope: DiscoveryScope = DiscoveryScope.UNSCOPED,
    default_name: str | None = None,
) -> ChangesetDocument:
    """Extract the changelog aggregate from ``graph``.

    Parameters
    ----------
    vocabulary:
        Vocabulary selecting the release query set.
    document_uri:
        URI of the input document; used for the title and, when ``scope`` is
        :attr:`DiscoveryScope.SCOPED_TO_DOCUMENT`, to select projects.
    default_name:
        Display name for projects that assert none. Without it the project's
        canonical node string is shown instead.
    """

    _logger.info(
        "extract.start",
        vocabulary=vocabulary.value,
        scope=scope.value,
        document=document_uri,
    )
    doc = discover_projects(graph, document_uri, scope=scope)
    for key in sorted(doc.projects):
        project = doc.projects[key]
        if project.name is None and default_name:
            project.name = default_name
        discover_releases(graph, project, vocabulary)
    doc.title = doc.synthesize_title()
    _logger.info(
        "extract.complete",
        projects=len(doc.projects),
        releases=sum(len(p.releases) for p in doc.projects.values()),
        title=doc.title,
    )
    return doc


__all__ = ["DiscoveryScope", "discover_projects", "discover_releases", "extract"]
