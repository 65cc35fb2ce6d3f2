from __future__ import annotations

"""Top-level CLI for rendering RDF changelogs."""

from pathlib import Path

import click
import yaml

from doapChanges import __version__
from doapChanges.build import (
    DEFAULT_INPUT,
    DEFAULT_OUTPUT,
    DEFAULT_XML_OUTPUT,
    write_doap_changes,
    write_doap_changes_xml,
)
from doapChanges.changeset import ChangeSet
from doapChanges.config import ChangesConfig, load_config
from doapChanges.detect import HINTS
from doapChanges.errors import ChangesetError
from doapChanges.utils.log_json import configure_logging

_config_option = click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="YAML settings file (defaults to $DOAP_CHANGES_CONFIG).",
)
_format_option = click.option(
    "--format",
    "fmt",
    default="turtle",
    show_default=True,
    help="Serialization of the input document.",
)
_vocabulary_option = click.option(
    "--vocabulary",
    type=click.Choice(HINTS, case_sensitive=False),
    default=None,
    help="Changelog vocabulary; autodetected unless configured.",
)


def _load(config_path: Path | None) -> ChangesConfig:
    try:
        return load_config(config_path)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        raise click.ClickException(f"Invalid config: {exc}") from exc


@click.group()
@click.version_option(__version__)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Level for JSON log events written to stderr.",
)
def cli(log_level: str) -> None:
    """Render human-readable changelogs from DOAP Change Sets data."""
    configure_logging(log_level)


@cli.command(name="write")
@click.option("--in", "in_path", default=DEFAULT_INPUT, show_default=True, help="Input document path or URI.")
@click.option("--out", "out_path", type=click.Path(dir_okay=False, path_type=Path), default=Path(DEFAULT_OUTPUT), show_default=True)
@_format_option
@_vocabulary_option
@click.option("--dist-name", default=None, help="Name shown for projects that do not assert one.")
@_config_option
def write_cmd(
    in_path: str,
    out_path: Path,
    fmt: str,
    vocabulary: str | None,
    dist_name: str | None,
    config_path: Path | None,
) -> None:
    """Write the text changelog for the projects the document describes."""

    cfg = _load(config_path)
    try:
        out = write_doap_changes(
            in_path,
            out_path,
            fmt,
            vocabulary or cfg.vocabulary,
            default_name=dist_name,
            options=cfg.render_options(),
            timeout=cfg.fetch_timeout,
        )
    except (ChangesetError, FileNotFoundError) as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(f"Changelog written to {out}")


@cli.command(name="write-xml")
@click.option("--in", "in_path", default=DEFAULT_INPUT, show_default=True, help="Input document path.")
@click.option("--out", "out_path", type=click.Path(dir_okay=False, path_type=Path), default=Path(DEFAULT_XML_OUTPUT), show_default=True)
@_format_option
@click.option("--converter", default="rapper", show_default=True, help="RDF conversion command.")
def write_xml_cmd(in_path: str, out_path: Path, fmt: str, converter: str) -> None:
    """Convert the input document to RDF/XML."""

    status = write_doap_changes_xml(in_path, out_path, fmt, converter=converter)
    if status != 0:
        click.echo(f"Warning: {converter} exited with status {status}; {out_path} may be incomplete", err=True)
        return
    click.echo(f"RDF/XML written to {out_path}")


@cli.command(name="show")
@click.argument("source")
@_format_option
@_vocabulary_option
@_config_option
def show_cmd(source: str, fmt: str, vocabulary: str | None, config_path: Path | None) -> None:
    """Print the changelog for every project in SOURCE."""

    cfg = _load(config_path)
    try:
        changes = ChangeSet(
            source,
            vocabulary=vocabulary or cfg.vocabulary,
            fmt=fmt,
            options=cfg.render_options(),
            timeout=cfg.fetch_timeout,
        )
        text = changes.to_string()
    except (ChangesetError, FileNotFoundError) as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(text, nl=False)


@cli.command(name="detect")
@click.argument("source")
@_format_option
def detect_cmd(source: str, fmt: str) -> None:
    """Print the vocabulary SOURCE is written in."""

    try:
        changes = ChangeSet(source, fmt=fmt)
    except (ChangesetError, FileNotFoundError) as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(changes.vocabulary.value)


if __name__ == "__main__":  # pragma: no cover
    cli()
