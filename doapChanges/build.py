from __future__ import annotations

"""Build-step helpers producing ``Changes`` and ``Changes.xml`` files.

These are the operations a packaging workflow calls: the text changelog is
generated from the projects the input document is about, and an RDF/XML
copy of the input can be produced with the external ``rapper`` converter.
"""

import shutil
import subprocess
from pathlib import Path

from doapChanges.detect import Vocabulary, detect
from doapChanges.extract import DiscoveryScope, extract
from doapChanges.kg.loader import DEFAULT_TIMEOUT, document_uri, load_graph, normalise_format
from doapChanges.render import RenderOptions, render
from doapChanges.utils.log_json import JsonLogger

DEFAULT_INPUT = "Changes.ttl"
DEFAULT_OUTPUT = "Changes"
DEFAULT_XML_OUTPUT = "Changes.xml"
DEFAULT_CONVERTER = "rapper"
MISSING_CONVERTER_STATUS = 127

# rdflib parser names mapped onto rapper's input syntax names.
_RAPPER_SYNTAX = {
    "xml": "rdfxml",
    "nt": "ntriples",
}

_logger = JsonLogger("build")


def _write_atomic(out: Path, text: str) -> None:
    out.parent.mkdir(parents=True, exist_ok=True)
    tmp = out.with_suffix(out.suffix + ".tmp")
    try:
        tmp.write_text(text, encoding="utf-8")
        tmp.replace(out)
    except OSError:
        tmp.unlink(missing_ok=True)
        raise


def write_doap_changes(
    in_path: str | Path = DEFAULT_INPUT,
    out_path: str | Path = DEFAULT_OUTPUT,
    fmt: str = "turtle",
    vocabulary: str = "auto",
    *,
    default_name: str | None = None,
    options: RenderOptions | None = None,
    timeout: int = DEFAULT_TIMEOUT,
) -> Path:
    """Render the changelog in ``in_path`` to ``out_path``.

    For the current vocabulary only projects the document declares itself
    about (``dc:subject`` or ``dc:references``) are listed; legacy documents
    list every project. Projects without a name are shown as
    ``default_name``, normally the name of the distribution being built.
    ``out_path`` is left untouched unless rendering succeeds.
    """

    uri = document_uri(in_path)
    graph = load_graph(in_path, None, fmt, base=uri, timeout=timeout)
    detected = detect(graph, vocabulary)
    # Changefile documents carry no subject link to their project.
    scope = DiscoveryScope.SCOPED_TO_DOCUMENT if detected is Vocabulary.CURRENT else DiscoveryScope.UNSCOPED
    doc = extract(
        graph,
        detected,
        uri,
        scope=scope,
        default_name=default_name,
    )
    text = render(doc, options)
    out = Path(out_path)
    _write_atomic(out, text)
    _logger.info("build.changes.written", source=str(in_path), path=str(out), projects=len(doc.projects))
    return out


def converter_command(in_path: str | Path, fmt: str = "turtle", converter: str = DEFAULT_CONVERTER) -> list[str]:
    parser = normalise_format(fmt)
    syntax = _RAPPER_SYNTAX.get(parser, parser)
    return [converter, "-q", "-i", syntax, "-o", "rdfxml-abbrev", str(in_path)]


def write_doap_changes_xml(
    in_path: str | Path = DEFAULT_INPUT,
    out_path: str | Path = DEFAULT_XML_OUTPUT,
    fmt: str = "turtle",
    *,
    converter: str = DEFAULT_CONVERTER,
) -> int:
    """Convert ``in_path`` to RDF/XML with an external converter.

    Failures are reported as warnings and never raised; the return value is
    the converter's exit status. ``out_path`` may be empty or partial when
    the status is non-zero.
    """

    out = Path(out_path)
    executable = shutil.which(converter)
    if executable is None:
        _logger.warning("build.xml.converter_missing", converter=converter, path=str(out))
        return MISSING_CONVERTER_STATUS
    cmd = converter_command(in_path, fmt, executable)
    out.parent.mkdir(parents=True, exist_ok=True)
    with out.open("wb") as fh:
        completed = subprocess.run(cmd, stdout=fh, stderr=subprocess.PIPE, check=False)
    if completed.returncode != 0:
        stderr = completed.stderr.decode("utf-8", errors="replace").strip() if completed.stderr else ""
        _logger.warning(
            "build.xml.converter_failed",
            converter=converter,
            status=completed.returncode,
            error=stderr[:500] or None,
            path=str(out),
        )
    else:
        _logger.info("build.xml.written", source=str(in_path), path=str(out))
    return completed.returncode


__all__ = [
    "DEFAULT_INPUT",
    "DEFAULT_OUTPUT",
    "DEFAULT_XML_OUTPUT",
    "write_doap_changes",
    "write_doap_changes_xml",
    "converter_command",
]
