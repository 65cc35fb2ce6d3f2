from __future__ import annotations

from pathlib import Path

import rdflib

from doapChanges.detect import Vocabulary
from doapChanges.extract import DiscoveryScope, extract
from doapChanges.kg.loader import document_uri, load_graph
from doapChanges.kg.namespaces import DCS_NS

GIZMO = "<http://example.org/gizmo#project>"


def _extract(path: Path, vocabulary: Vocabulary, **kwargs):
    uri = document_uri(path)
    return extract(load_graph(path), vocabulary, uri, **kwargs)


def test_unscoped_discovers_every_project(fixtures_dir: Path) -> None:
    doc = _extract(fixtures_dir / "gizmo.ttl", Vocabulary.CURRENT)
    assert sorted(doc.projects) == [GIZMO, "<http://example.org/other#project>"]


def test_scoped_discovers_document_subjects_only(fixtures_dir: Path) -> None:
    doc = _extract(
        fixtures_dir / "gizmo.ttl",
        Vocabulary.CURRENT,
        scope=DiscoveryScope.SCOPED_TO_DOCUMENT,
    )
    assert list(doc.projects) == [GIZMO]


def test_project_metadata(fixtures_dir: Path) -> None:
    doc = _extract(fixtures_dir / "gizmo.ttl", Vocabulary.CURRENT)
    project = doc.projects[GIZMO]
    assert doc.title == "Gizmo release history"
    assert project.name == "Gizmo"
    assert project.created == "2008-02-14"
    assert project.homepages == {"http://example.org/gizmo/", "http://gizmo.example.net/"}
    assert project.bug_databases == {"http://bugs.example.org/gizmo"}
    alice = project.maintainers["<http://example.org/people#alice>"]
    assert alice.name == "Alice Example"
    assert alice.mailbox == "mailto:a.example@example.net"
    bob = project.maintainers["<http://example.org/people#bob>"]
    assert bob.mailboxes == set()
    assert bob.mailbox is None


def test_optional_attributes_stay_absent(fixtures_dir: Path) -> None:
    doc = _extract(fixtures_dir / "widget.ttl", Vocabulary.CURRENT)
    project = doc.projects["<http://example.org/widget#project>"]
    assert project.created is None
    assert project.bug_databases == set()
    assert project.maintainers == {}


def test_current_releases_and_change_types(fixtures_dir: Path) -> None:
    doc = _extract(fixtures_dir / "gizmo.ttl", Vocabulary.CURRENT)
    releases = doc.projects[GIZMO].releases
    by_revision = {r.revision: r for r in releases.values()}
    assert set(by_revision) == {"0.9", "0.10", "1.0"}
    assert by_revision["0.10"].name == "Tenth"
    assert by_revision["0.10"].issued is None
    assert by_revision["1.0"].changes == {}

    changes = sorted(
        ((c.type, c.label) for c in by_revision["0.9"].changes.values()),
        key=lambda t: (t[0] or "", t[1] or ""),
    )
    assert (None, "Shuffled things around") in changes
    assert (DCS_NS + "Addition", "Same label") in changes
    assert (DCS_NS + "Bugfix", "Same label") in changes


def test_legacy_types_are_normalised(fixtures_dir: Path) -> None:
    doc = _extract(fixtures_dir / "gadget-legacy.ttl", Vocabulary.LEGACY)
    project = doc.projects["<http://example.org/gadget#project>"]
    by_revision = {r.revision: r for r in project.releases.values()}
    assert by_revision["0.2"].issued == "2009-06-01"
    assert by_revision["0.2"].name == "Sprocket"
    types = {c.label: c.type for c in by_revision["0.2"].changes.values()}
    assert types == {
        "Fixed crash on empty input": DCS_NS + "Bugfix",
        "Added frobnicator": DCS_NS + "Addition",
        "Tidied docs": None,
    }
    assert [c.sigil for c in by_revision["0.1"].changes.values()] == ["Addition"]


def test_fallback_name_differs_by_mode(fixtures_dir: Path) -> None:
    path = fixtures_dir / "anonymous.ttl"
    key = "<http://example.org/nameless#project>"

    library = _extract(path, Vocabulary.CURRENT)
    assert library.projects[key].name is None
    assert library.projects[key].display_name == key

    build = _extract(
        path,
        Vocabulary.CURRENT,
        scope=DiscoveryScope.SCOPED_TO_DOCUMENT,
        default_name="My-Dist",
    )
    assert build.projects[key].display_name == "My-Dist"
    assert build.title == "Changes for My-Dist"


def test_empty_graph_yields_fallback_title() -> None:
    doc = extract(rdflib.Graph(), Vocabulary.CURRENT, "http://example.org/Changes.ttl")
    assert doc.projects == {}
    assert doc.title == "Changes"


def test_alternate_name_predicates_and_blank_projects() -> None:
    data = """
@prefix dc: <http://purl.org/dc/terms/> .
@prefix dcs: <http://ontologi.es/doap-changeset#> .
@prefix doap: <http://usefulinc.com/ns/doap#> .
@prefix rdfs: <http://www.w3.org/2000/01/rdf-schema#> .

[] a doap:Project ;
    rdfs:label "Labelled" ;
    doap:release [ doap:revision "3.1" ;
        dcs:changeset [ dcs:item [ rdfs:label "Untyped change" ] ] ] .
"""
    uri = "http://example.org/Changes.ttl"
    doc = extract(load_graph(uri, data=data), Vocabulary.CURRENT, uri)
    (project,) = doc.projects.values()
    assert project.key.startswith("_:")
    assert project.name == "Labelled"
    (release,) = project.releases.values()
    assert release.revision == "3.1"
    (change,) = release.changes.values()
    assert change.label == "Untyped change"
    assert change.type is None


def test_duplicate_facts_fold_deterministically() -> None:
    data = """
@prefix doap: <http://usefulinc.com/ns/doap#> .
<http://example.org/p> a doap:Project ; doap:name "Beta", "Alpha" .
"""
    uri = "http://example.org/Changes.ttl"
    names = {
        extract(load_graph(uri, data=data), Vocabulary.CURRENT, uri)
        .projects["<http://example.org/p>"]
        .name
        for _ in range(3)
    }
    assert names == {"Beta"}
