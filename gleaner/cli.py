"""Gleaner CLI: apply mapping descriptions to saved HTML documents.

Usage:
    gleaner list                                    # List registered mappings
    gleaner extract v2ex-my-topics page.html        # Print the record as JSON
    gleaner extract module.path:MAPPING page.html   # Use an importable mapping
    gleaner extract v2ex-my-topics - < page.html    # Read the document from stdin
    gleaner validate v2ex-notifications page.html   # Exit 1 if the page is invalid
"""

from __future__ import annotations

import importlib
import json
import logging
import sys
from typing import IO

import click

from gleaner.common.exceptions import (
    ExtractionAssumptionException,
    MappingDefinitionError,
)
from gleaner.extractor import extract
from gleaner.mapping import (
    MappingDescription,
    get_mapping,
    registered_mappings,
)
from gleaner.record import Record
from gleaner.validity import is_valid


def _load_builtin_mappings() -> None:
    importlib.import_module("gleaner.v2ex")


def import_mapping(mapping_path: str) -> MappingDescription:
    """Resolve a registered mapping name or a ``module.path:ATTRIBUTE`` path.

    Args:
        mapping_path: Registered name, or ``"module.path:ATTRIBUTE"``.

    Returns:
        The mapping description.

    Raises:
        click.BadParameter: If the name is unknown, the import fails, or
            the module defines an invalid mapping.
    """
    if ":" not in mapping_path:
        _load_builtin_mappings()
        try:
            return get_mapping(mapping_path)
        except KeyError as e:
            raise click.BadParameter(e.args[0]) from e

    module_path, attr_name = mapping_path.rsplit(":", 1)
    try:
        module = importlib.import_module(module_path)
    except ImportError as e:
        raise click.BadParameter(
            f"Could not import module '{module_path}': {e}"
        ) from e
    except MappingDefinitionError as e:
        raise click.BadParameter(
            f"Module '{module_path}' defines an invalid mapping: {e}"
        ) from e

    try:
        mapping = getattr(module, attr_name)
    except AttributeError as e:
        raise click.BadParameter(
            f"Module '{module_path}' has no attribute '{attr_name}'"
        ) from e

    if not isinstance(mapping, MappingDescription):
        raise click.BadParameter(
            f"'{mapping_path}' is a {type(mapping).__name__}, "
            "not a MappingDescription"
        )
    return mapping


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _extract_or_fail(
    document: IO[str], mapping: MappingDescription, url: str
) -> Record:
    try:
        return extract(document.read(), mapping, url)
    except ExtractionAssumptionException as e:
        raise click.ClickException(str(e)) from e


_mapping_argument = click.argument("mapping")
_document_argument = click.argument(
    "document", type=click.File("r", encoding="utf-8")
)
_url_option = click.option(
    "--url",
    default="",
    help="URL the document was fetched from (used in error messages).",
)
_verbose_option = click.option(
    "-v", "--verbose", is_flag=True, help="Verbose logging."
)


@click.group()
@click.version_option(package_name="gleaner")
def cli() -> None:
    """Gleaner: declarative structured extraction from HTML."""


@cli.command("list")
def list_mappings() -> None:
    """List registered mapping descriptions."""
    _load_builtin_mappings()
    mappings = registered_mappings()
    if not mappings:
        click.echo("No mappings registered.")
        return
    for name, mapping in mappings.items():
        root = mapping.root or "(document)"
        click.echo(f"{name}  {mapping.model.__name__}  root={root}")


@cli.command("extract")
@_mapping_argument
@_document_argument
@_url_option
@click.option(
    "--raw",
    is_flag=True,
    help="Only print raw fields, without derived fields.",
)
@click.option(
    "--indent",
    type=int,
    default=2,
    show_default=True,
    help="JSON indentation.",
)
@_verbose_option
def extract_command(
    mapping: str,
    document: IO[str],
    url: str,
    raw: bool,
    indent: int,
    verbose: bool,
) -> None:
    """Extract MAPPING from DOCUMENT and print the record as JSON.

    DOCUMENT is a path to an HTML file, or - for stdin.
    """
    _configure_logging(verbose)
    description = import_mapping(mapping)
    record = _extract_or_fail(document, description, url)
    click.echo(
        json.dumps(
            record.to_dict(include_derived=not raw),
            ensure_ascii=False,
            indent=indent,
        )
    )


@cli.command("validate")
@_mapping_argument
@_document_argument
@_url_option
@_verbose_option
def validate_command(
    mapping: str, document: IO[str], url: str, verbose: bool
) -> None:
    """Check whether DOCUMENT is a valid page for MAPPING.

    Prints "valid" or "invalid"; the exit code is 1 for invalid pages.
    """
    _configure_logging(verbose)
    description = import_mapping(mapping)
    record = _extract_or_fail(document, description, url)
    if is_valid(record):
        click.echo("valid")
        return
    click.echo("invalid")
    sys.exit(1)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
