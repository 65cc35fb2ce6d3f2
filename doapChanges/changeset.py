from __future__ import annotations

"""Standalone library interface for rendering changelogs."""

from pathlib import Path

import rdflib

from doapChanges.detect import Vocabulary, detect
from doapChanges.extract import DiscoveryScope, extract
from doapChanges.kg.loader import DEFAULT_TIMEOUT, document_uri, load_graph
from doapChanges.model import ChangesetDocument
from doapChanges.render import RenderOptions, render
from doapChanges.utils.log_json import JsonLogger

_logger = JsonLogger("changeset")


class ChangeSet:
    """A changelog graph together with its detected vocabulary.

    Parameters
    ----------
    uri:
        Path or URI of the changelog document. Also used to look up the
        document title.
    data:
        Optional pre-loaded content: an :class:`rdflib.Graph`, or the
        serialized document as text or bytes. When omitted the document is
        read from ``uri``.
    vocabulary:
        ``"current"``, ``"legacy"`` or ``"auto"``.
    fmt:
        Parser name for serialized input, ``"turtle"`` by default.

    Projects are discovered anywhere in the graph and a project without a
    name is shown under its node identifier.
    """

    def __init__(
        self,
        uri: str | Path,
        data: rdflib.Graph | str | bytes | None = None,
        vocabulary: str | Vocabulary | None = "auto",
        fmt: str | None = "turtle",
        *,
        options: RenderOptions | None = None,
        timeout: int = DEFAULT_TIMEOUT,
    ) -> None:
        self._uri = document_uri(uri)
        self._graph = load_graph(uri, data, fmt, base=self._uri, timeout=timeout)
        self._vocabulary = detect(self._graph, vocabulary)
        self._options = options or RenderOptions()

    @property
    def uri(self) -> str:
        return self._uri

    @property
    def graph(self) -> rdflib.Graph:
        return self._graph

    @property
    def vocabulary(self) -> Vocabulary:
        return self._vocabulary

    @property
    def is_legacy(self) -> bool:
        return self._vocabulary is Vocabulary.LEGACY

    @property
    def is_current(self) -> bool:
        return not self.is_legacy

    def document(self) -> ChangesetDocument:
        """Extract a fresh aggregate from the graph."""
        return extract(self._graph, self._vocabulary, self._uri, scope=DiscoveryScope.UNSCOPED)

    def to_string(self) -> str:
        return render(self.document(), self._options)

    def to_file(self, path: str | Path) -> Path:
        """Render and write the changelog to ``path`` as UTF-8."""

        text = self.to_string()
        out = Path(path)
        out.write_text(text, encoding="utf-8")
        _logger.info("changeset.written", path=str(out), bytes=len(text.encode("utf-8")))
        return out


__all__ = ["ChangeSet"]
