from __future__ import annotations

"""Namespaces of the changelog vocabularies.

Both the current DOAP Change Sets vocabulary and the older Changefile
vocabulary are described here; every query and type normalisation step
reads its IRIs from this module.
"""

from rdflib import Namespace
from rdflib.namespace import FOAF, RDF, RDFS

DOAP_NS = "http://usefulinc.com/ns/doap#"
DCS_NS = "http://ontologi.es/doap-changeset#"
ASC_NS = "http://aaronland.info/ns/changefile/"
DCT_NS = "http://purl.org/dc/terms/"

DOAP = Namespace(DOAP_NS)
DCS = Namespace(DCS_NS)
ASC = Namespace(ASC_NS)
DCT = Namespace(DCT_NS)

# Changefile predicates that double as change types, keyed by local name.
LEGACY_CHANGE_TYPES: dict[str, str] = {
    name: DCS_NS + name.capitalize()
    for name in ("addition", "update", "bugfix", "removal")
}

# Generic change class; items typed only with it carry no sigil.
BASE_CHANGE_TYPE = DCS_NS + "Change"

SPARQL_PREFIXES = f"""
PREFIX asc: <{ASC_NS}>
PREFIX dc: <{DCT_NS}>
PREFIX dcs: <{DCS_NS}>
PREFIX doap: <{DOAP_NS}>
PREFIX foaf: <{FOAF}>
PREFIX rdfs: <{RDFS}>
""".strip()


__all__ = [
    "DOAP_NS",
    "DCS_NS",
    "ASC_NS",
    "DCT_NS",
    "DOAP",
    "DCS",
    "ASC",
    "DCT",
    "FOAF",
    "RDF",
    "RDFS",
    "LEGACY_CHANGE_TYPES",
    "BASE_CHANGE_TYPE",
    "SPARQL_PREFIXES",
]
