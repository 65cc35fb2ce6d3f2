from __future__ import annotations

"""Registry of the SPARQL queries used to read changelog graphs.

Each vocabulary needs a project discovery query and a per-project release
query; project discovery is shared by both vocabularies and comes in a
document-scoped and an unscoped flavour. Document IRIs are substituted into
the text, the project of a release query is bound at execution time.
"""

from string import Template
from typing import Dict, List, Mapping

import rdflib
from rdflib import URIRef, Variable
from rdflib.plugins.sparql import prepareQuery

from doapChanges.errors import ChangesetQueryError
from doapChanges.kg.namespaces import SPARQL_PREFIXES
from doapChanges.kg.nodes import GraphNode, from_term, to_term

Row = Dict[str, GraphNode]

QUERIES: dict[str, str] = {
    "legacy_probe": """
ASK WHERE { ?a doap:Version ?b . }
""".strip(),
    "projects": """
SELECT ?project ?title ?distname ?created ?homepage ?bugdatabase ?maint ?maintname ?maintmbox
WHERE {
  $scope
  ?project a doap:Project .
  OPTIONAL { $document dc:title ?title . }
  OPTIONAL { $document rdfs:label ?title . }
  OPTIONAL { ?project doap:name ?distname . }
  OPTIONAL { ?project rdfs:label ?distname . }
  OPTIONAL { ?project dc:title ?distname . }
  OPTIONAL { ?project doap:created ?created . }
  OPTIONAL { ?project doap:homepage ?homepage . }
  OPTIONAL { ?project doap:bug-database ?bugdatabase . }
  OPTIONAL {
    ?project doap:maintainer ?maint .
    ?maint foaf:name ?maintname .
    OPTIONAL { ?maint foaf:mbox ?maintmbox . }
  }
}
""".strip(),
    "releases_current": """
SELECT ?version ?revision ?issued ?vname ?item ?itemtype ?itemlabel
WHERE {
  ?project doap:release ?version .
  ?version doap:revision ?revision .
  OPTIONAL { ?version dc:issued ?issued . }
  OPTIONAL { ?version rdfs:label ?vname . }
  OPTIONAL {
    ?version dcs:changeset [ dcs:item ?item ] .
    OPTIONAL { ?item a ?itemtype . }
    OPTIONAL { ?item rdfs:label ?itemlabel . }
  }
}
""".strip(),
    "releases_legacy": """
SELECT ?version ?revision ?issued ?vname ?itemtype ?itemlabel
WHERE {
  ?version dc:isVersionOf ?project .
  ?version doap:Version [ doap:revision ?revision ] .
  OPTIONAL { ?version doap:Version [ doap:created ?issued ] . }
  OPTIONAL { ?version rdfs:label ?vname . }
  OPTIONAL { ?version asc:changes [ ?itemtype ?itemlabel ] . }
}
""".strip(),
}

SCOPE_TO_DOCUMENT = "{ $document dc:subject ?project . } UNION { $document dc:references ?project . }"


def project_query(document: str, *, scoped: bool) -> str:
    """Return the project discovery query for ``document``."""

    iri = URIRef(document).n3()
    scope = Template(SCOPE_TO_DOCUMENT).substitute(document=iri) if scoped else ""
    return Template(QUERIES["projects"]).substitute(document=iri, scope=scope)


def release_query(legacy: bool) -> str:
    return QUERIES["releases_legacy" if legacy else "releases_current"]


def _prepare(query: str):
    try:
        return prepareQuery(f"{SPARQL_PREFIXES}\n{query}")
    except Exception as exc:
        raise ChangesetQueryError(f"Invalid changelog query: {exc}") from exc


def ask(graph: rdflib.Graph, query: str) -> bool:
    """Execute an ``ASK`` query and return the boolean result."""

    result = graph.query(_prepare(query))
    return bool(result.askAnswer)


def select(
    graph: rdflib.Graph,
    query: str,
    bindings: Mapping[str, GraphNode] | None = None,
) -> List[Row]:
    """Execute a ``SELECT`` query and return rows of converted nodes.

    Unbound variables are absent from a row rather than mapped to ``None``.
    """

    init = {Variable(name): to_term(node) for name, node in (bindings or {}).items()}
    result = graph.query(_prepare(query), initBindings=init)
    rows: List[Row] = []
    for row in result:
        rows.append({str(k): from_term(v) for k, v in row.asdict().items() if v is not None})
    return rows


__all__ = [
    "QUERIES",
    "Row",
    "project_query",
    "release_query",
    "ask",
    "select",
]
