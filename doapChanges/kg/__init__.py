"""Graph loading, node conversion and changelog queries."""

__all__ = [
    "load_graph",
    "document_uri",
    "ask",
    "select",
    "canonical",
    "from_term",
]

from .loader import load_graph, document_uri
from .queries import ask, select
from .nodes import canonical, from_term
