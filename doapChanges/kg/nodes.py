from __future__ import annotations

"""Closed set of graph node values returned in query bindings.

rdflib hands back its own term classes; extraction only ever needs to know
whether a bound value is a literal, a resource or a blank node, and which
canonical string identifies it. Terms are converted once, at the edge, into
the frozen variants below.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from rdflib import BNode, Literal, URIRef
from rdflib.term import Node


class NodeKind(Enum):
    LITERAL = "literal"
    RESOURCE = "resource"
    BLANK = "blank"


@dataclass(frozen=True)
class LiteralNode:
    text: str
    language: Optional[str] = None
    datatype: Optional[str] = None
    kind: NodeKind = NodeKind.LITERAL


@dataclass(frozen=True)
class ResourceNode:
    uri: str
    kind: NodeKind = NodeKind.RESOURCE


@dataclass(frozen=True)
class BlankNode:
    id: str
    kind: NodeKind = NodeKind.BLANK


GraphNode = Union[LiteralNode, ResourceNode, BlankNode]


def from_term(term: Node) -> GraphNode:
    """Convert an rdflib term into a :data:`GraphNode`."""

    if isinstance(term, Literal):
        datatype = str(term.datatype) if term.datatype is not None else None
        return LiteralNode(str(term), term.language, datatype)
    if isinstance(term, URIRef):
        return ResourceNode(str(term))
    if isinstance(term, BNode):
        return BlankNode(str(term))
    raise TypeError(f"Unsupported graph term: {term!r}")


def to_term(node: GraphNode) -> Node:
    """Return the rdflib term for ``node`` (used when binding query variables)."""

    if node.kind is NodeKind.LITERAL:
        datatype = URIRef(node.datatype) if node.datatype else None
        return Literal(node.text, lang=node.language, datatype=datatype)
    if node.kind is NodeKind.RESOURCE:
        return URIRef(node.uri)
    return BNode(node.id)


def canonical(node: GraphNode) -> str:
    """Return the N-Triples form of ``node``; used as a grouping key."""

    if node.kind is NodeKind.RESOURCE:
        return URIRef(node.uri).n3()
    if node.kind is NodeKind.BLANK:
        return f"_:{node.id}"
    return to_term(node).n3()


def literal_value(node: GraphNode | None) -> str | None:
    if node is not None and node.kind is NodeKind.LITERAL:
        return node.text
    return None


def resource_uri(node: GraphNode | None) -> str | None:
    if node is not None and node.kind is NodeKind.RESOURCE:
        return node.uri
    return None


__all__ = [
    "NodeKind",
    "LiteralNode",
    "ResourceNode",
    "BlankNode",
    "GraphNode",
    "from_term",
    "to_term",
    "canonical",
    "literal_value",
    "resource_uri",
]
