from __future__ import annotations

"""Load changelog documents into an in-memory rdflib graph."""

from pathlib import Path
from urllib.parse import unquote, urlparse

import rdflib
import requests

from doapChanges.errors import ChangesetFetchError, ChangesetParseError
from doapChanges.utils.log_json import JsonLogger

REMOTE_SCHEMES = ("http", "https", "ftp")
DEFAULT_TIMEOUT = 15

# Historical parser names mapped onto rdflib plugin names.
FORMAT_ALIASES = {
    "rdfxml": "xml",
    "rdf/xml": "xml",
    "ntriples": "nt",
    "n-triples": "nt",
    "ttl": "turtle",
}

_logger = JsonLogger("loader")


def normalise_format(fmt: str | None) -> str:
    name = (fmt or "turtle").strip().lower()
    return FORMAT_ALIASES.get(name, name)


def _is_remote(source: str) -> bool:
    return urlparse(source).scheme.lower() in REMOTE_SCHEMES


def _file_path(source: str) -> Path:
    parsed = urlparse(source)
    if parsed.scheme.lower() == "file":
        return Path(unquote(parsed.path))
    return Path(source)


def document_uri(source: str | Path) -> str:
    """Return the URI naming ``source`` inside the graph.

    Local paths become absolute ``file://`` URIs, remote and ``file:`` URIs
    are returned unchanged.
    """

    text = str(source)
    scheme = urlparse(text).scheme.lower()
    if scheme in REMOTE_SCHEMES or scheme == "file":
        return text
    return Path(text).resolve().as_uri()


def fetch_document(uri: str, *, timeout: int = DEFAULT_TIMEOUT) -> bytes:
    """Download ``uri`` and return the raw payload."""

    try:
        resp = requests.get(uri, timeout=timeout)
    except requests.RequestException as exc:
        raise ChangesetFetchError(f"Failed to fetch {uri}: {exc}") from exc
    if resp.status_code != 200:
        raise ChangesetFetchError(f"Failed to fetch {uri}: HTTP {resp.status_code}")
    return resp.content


def load_graph(
    source: str | Path,
    data: rdflib.Graph | str | bytes | None = None,
    fmt: str | None = "turtle",
    base: str | None = None,
    *,
    timeout: int = DEFAULT_TIMEOUT,
) -> rdflib.Graph:
    """Parse the changelog document ``source`` into a graph.

    Parameters
    ----------
    source:
        Path or URI of the document. Also used as the base URI when ``base``
        is not given.
    data:
        Pre-loaded content. An :class:`rdflib.Graph` is returned untouched;
        text or bytes are parsed instead of reading ``source``.
    fmt:
        Serialization hint, any rdflib parser name or a historical alias.
    """

    if isinstance(data, rdflib.Graph):
        return data

    text = str(source)
    base = base or document_uri(text)
    parser = normalise_format(fmt)
    if data is None:
        if _is_remote(text):
            data = fetch_document(text, timeout=timeout)
        else:
            path = _file_path(text)
            if not path.exists():
                raise FileNotFoundError(f"Changelog file not found: {path}")
            data = path.read_bytes()

    graph = rdflib.Graph()
    try:
        graph.parse(data=data, format=parser, publicID=base)
    except Exception as exc:
        raise ChangesetParseError(text, parser, str(exc)) from exc
    _logger.info("graph.loaded", source=text, format=parser, triples=len(graph))
    return graph


__all__ = ["load_graph", "document_uri", "fetch_document", "normalise_format"]
