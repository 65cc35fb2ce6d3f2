from __future__ import annotations

from pathlib import Path

import pytest
import rdflib

from doapChanges.changeset import ChangeSet
from doapChanges.detect import Vocabulary
from doapChanges.errors import ChangesetParseError
from doapChanges.render import RenderOptions, RevisionOrder

WIDGET_BODY = (
    "Widget\n"
    "======\n"
    "\n"
    "1.0 [2020-01-01]\n"
    " - (Addition) Initial release\n"
    "\n"
)


def test_widget_end_to_end(fixtures_dir: Path) -> None:
    changes = ChangeSet(fixtures_dir / "widget.ttl")
    assert changes.is_current
    assert not changes.is_legacy
    text = changes.to_string()
    header = text.splitlines()[:4]
    assert header[1].startswith("## Changes for Widget ")
    assert len(header[1]) == 76
    assert text.endswith(WIDGET_BODY)


def test_round_trip_stability(fixtures_dir: Path) -> None:
    changes = ChangeSet(fixtures_dir / "gizmo.ttl")
    assert changes.to_string() == changes.to_string()


def test_library_mode_lists_all_projects(fixtures_dir: Path) -> None:
    text = ChangeSet(fixtures_dir / "gizmo.ttl").to_string()
    lines = text.splitlines()
    assert "Gizmo" in lines
    assert "Unrelated" in lines
    assert lines[1].startswith("## Gizmo release history ")


def test_library_fallback_name_is_node(fixtures_dir: Path) -> None:
    key = "<http://example.org/nameless#project>"
    lines = ChangeSet(fixtures_dir / "anonymous.ttl").to_string().splitlines()
    assert lines[4] == key
    assert lines[5] == "=" * len(key)
    assert lines[1].startswith(f"## Changes for {key}")


def test_legacy_rendering(fixtures_dir: Path) -> None:
    changes = ChangeSet(fixtures_dir / "gadget-legacy.ttl")
    assert changes.is_legacy
    assert changes.vocabulary is Vocabulary.LEGACY
    text = changes.to_string()
    assert text.endswith(
        "Gadget\n"
        "======\n"
        "\n"
        "0.2 [2009-06-01] # Sprocket\n"
        " - Tidied docs\n"
        " - (Addition) Added frobnicator\n"
        " - (Bugfix) Fixed crash on empty input\n"
        "\n"
        "0.1\n"
        " - (Addition) First cut\n"
        "\n"
    )


def test_vocabulary_override(fixtures_dir: Path) -> None:
    changes = ChangeSet(fixtures_dir / "gadget-legacy.ttl", vocabulary="current")
    assert changes.is_current
    # Legacy releases are invisible to the current query set.
    assert "0.2" not in changes.to_string().splitlines()


def test_preloaded_data_and_accessors() -> None:
    data = """
@prefix doap: <http://usefulinc.com/ns/doap#> .
@prefix dc: <http://purl.org/dc/terms/> .
<> dc:title "Hand made" .
<http://example.org/p> a doap:Project ; doap:name "P" .
"""
    changes = ChangeSet("http://example.org/Changes.ttl", data=data)
    assert changes.uri == "http://example.org/Changes.ttl"
    assert isinstance(changes.graph, rdflib.Graph)
    assert changes.to_string().splitlines()[1].startswith("## Hand made ")


def test_graph_can_be_supplied(fixtures_dir: Path) -> None:
    graph = rdflib.Graph()
    graph.parse(fixtures_dir / "widget.ttl", format="turtle")
    changes = ChangeSet(fixtures_dir / "widget.ttl", data=graph)
    assert changes.graph is graph
    assert "Widget" in changes.to_string().splitlines()


def test_render_options_are_applied(fixtures_dir: Path) -> None:
    options = RenderOptions(revision_order=RevisionOrder.LEXICAL)
    lines = ChangeSet(fixtures_dir / "gizmo.ttl", options=options).to_string().splitlines()
    revisions = [line for line in lines if line[:1].isdigit()]
    assert revisions == ["1.0 [2009-01-01]", "0.9 [2008-03-01]", "0.10 # Tenth"]


def test_to_file(tmp_path: Path, fixtures_dir: Path) -> None:
    changes = ChangeSet(fixtures_dir / "widget.ttl")
    out = changes.to_file(tmp_path / "Changes")
    assert out.read_text(encoding="utf-8") == changes.to_string()


def test_xml_format_hint(tmp_path: Path) -> None:
    xml = tmp_path / "Changes.rdf"
    xml.write_text(
        """<?xml version="1.0"?>
<rdf:RDF xmlns:rdf="http://www.w3.org/1999/02/22-rdf-syntax-ns#"
         xmlns:doap="http://usefulinc.com/ns/doap#">
  <doap:Project rdf:about="http://example.org/x">
    <doap:name>XmlProject</doap:name>
  </doap:Project>
</rdf:RDF>
""",
        encoding="utf-8",
    )
    text = ChangeSet(xml, fmt="RDFXML").to_string()
    assert "XmlProject" in text.splitlines()


def test_parse_error_propagates(tmp_path: Path) -> None:
    bad = tmp_path / "Changes.ttl"
    bad.write_text("@prefix broken", encoding="utf-8")
    with pytest.raises(ChangesetParseError):
        ChangeSet(bad)
