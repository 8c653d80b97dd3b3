"""
Prints the constant attributes, usage comment, or method documentation
embedded in the comments of a source file.
"""

from __future__ import annotations

import json
import logging
import sys
from functools import partial
from pathlib import Path

import click

from . import __version__
from .comment import MethodComment
from .config import ConfigError, DocConfig, build_config
from .document import Document, usage as read_usage
from .exceptions import InvalidAnchorError, LazyCommentsError, SourceReadError
from .filesystem import get_max_file_size, read_source

__all__ = ["cli"]

logger = logging.getLogger(__name__)


def _build_config(filepath: Path, **overrides: object) -> DocConfig:
    try:
        return build_config(filepath.parent, **overrides)
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error


def _build_document(filepath: Path, config: DocConfig) -> Document:
    try:
        max_file_size = get_max_file_size(default=config.max_file_size)
    except ValueError as error:
        raise click.ClickException(str(error)) from error

    return Document(
        filepath,
        default_scope=config.default_scope,
        key_pattern=config.key_pattern,
        reader=partial(read_source, max_file_size=max_file_size),
    )


def _resolve(document: Document) -> None:
    try:
        document.resolve()
    except (SourceReadError, LazyCommentsError) as error:
        raise click.ClickException(str(error)) from error


@click.group()
@click.version_option(version=__version__)
@click.option("-v", "--verbose", is_flag=True, help="Log scanning details to stderr")
def cli(verbose: bool = False):
    """
    Extract documentation embedded in source comments.

    Examples:
        lazy-comments attributes tool.py --key "key|alt"
        lazy-comments usage bin/tool --cols 60
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


@cli.command()
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False))
@click.option("--key", "key_pattern", help="Regular expression of accepted attribute keys")
@click.option("--scope", "default_scope", help="Scope name for declarations without one")
@click.option("--cols", "wrap_cols", type=int, help="Column width for wrapped comments")
@click.option("--json", "as_json", is_flag=True, help="Print records as JSON")
def attributes(
    filepath: str,
    key_pattern: str | None = None,
    default_scope: str | None = None,
    wrap_cols: int | None = None,
    as_json: bool = False,
):
    """
    Print each ``Scope::key value`` declaration with its comment.

    Raises:
        click.BadParameter: If overrides or configuration values are invalid.
        click.ClickException: If the file cannot be read or resolved.
    """
    path = Path(filepath)
    config = _build_config(
        path, key_pattern=key_pattern, default_scope=default_scope, wrap_cols=wrap_cols
    )
    document = _build_document(path, config)
    _resolve(document)

    entries = sorted(
        (
            (comment.line_number, scope_name, key, comment)
            for scope_name, attributes_by_key in document.summarize().items()
            for key, comment in attributes_by_key.items()
        ),
        key=lambda entry: entry[0],
    )
    logger.debug("Found %d attributes in %s", len(entries), path)

    if as_json:
        records = [
            {
                "scope_name": scope_name,
                "key": key,
                "value": comment.subject,
                "line_number": line_number,
                "comment": comment.render(),
            }
            for line_number, scope_name, key, comment in entries
        ]
        click.echo(json.dumps(records, indent=2))
        return

    for index, (_, scope_name, key, comment) in enumerate(entries):
        if index:
            click.echo()
        click.echo(f"{scope_name}::{key} {comment.subject}".rstrip())
        for line in comment.wrap(config.wrap_cols, config.tabsize, line_sep=None):
            click.echo(f"  {line}".rstrip())


@cli.command()
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False))
@click.option("--cols", "wrap_cols", type=int, help="Column width for the wrapped usage")
def usage(filepath: str, wrap_cols: int | None = None):
    """
    Print the first comment of a file, after any ``#!`` line.
    """
    path = Path(filepath)
    config = _build_config(path, wrap_cols=wrap_cols)
    try:
        max_file_size = get_max_file_size(default=config.max_file_size)
        text = read_source(path, max_file_size)
    except (ValueError, SourceReadError) as error:
        raise click.ClickException(str(error)) from error

    click.echo(read_usage(text, config.wrap_cols, config.tabsize))


@cli.command()
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False))
@click.argument("method_name")
@click.option("--cols", "wrap_cols", type=int, help="Column width for the wrapped comment")
def method(filepath: str, method_name: str, wrap_cols: int | None = None):
    """
    Print the signature, trailer, and comment of a method definition.
    """
    path = Path(filepath)
    config = _build_config(path, wrap_cols=wrap_cols)
    document = _build_document(path, config)
    comment = document.register_method(method_name, MethodComment)

    try:
        document.resolve()
    except InvalidAnchorError as error:
        raise click.ClickException(f"No definition of {method_name} in {path}") from error
    except (SourceReadError, LazyCommentsError) as error:
        raise click.ClickException(str(error)) from error

    click.echo(f"{comment.method_name}({', '.join(comment.arguments)})")
    if comment.trailer:
        click.echo(f"# {comment.trailer}")
    wrapped = comment.wrap(config.wrap_cols, config.tabsize)
    if wrapped:
        click.echo()
        click.echo(wrapped)


if __name__ == "__main__":
    cli()
