"""Main CLI application."""

from __future__ import annotations

import logging
from typing import Optional

import typer
from pydantic import ValidationError
from typing_extensions import Annotated

from .. import __version__
from ..core.settings import Settings
from ..manifest import ManifestError
from ..rendering.project import generate_project
from .parsers import parse_destination_dir, parse_log_level, parse_source_dir

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="sire",
    help="Project generation tool for managing template projects.",
    add_completion=False,
)

EXIT_MANIFEST_ERROR = 1
EXIT_ENTRY_FAILURES = 2


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"sire {__version__}")
        raise typer.Exit()


@app.command()
def generate(
    source_dir: Annotated[
        str,
        typer.Option(
            "--source-dir",
            "-s",
            help="Directory to use as template source.",
            metavar="DIR",
        ),
    ],
    destination_dir: Annotated[
        str,
        typer.Option(
            "--destination-dir",
            "-d",
            help="Directory target to apply changes.",
            metavar="DIR",
        ),
    ],
    manifest_name: Annotated[
        Optional[str],
        typer.Option(
            "--manifest-name",
            help="Reserved manifest file name (default: manifest.yml).",
            metavar="NAME",
        ),
    ] = None,
    fail_on_error: Annotated[
        bool,
        typer.Option(
            "--fail-on-error",
            help="Exit with status 2 when any entry fails to materialize.",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose logging.",
        ),
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            help="Show the version and exit.",
            callback=_version_callback,
            is_eager=True,
        ),
    ] = False,
) -> None:
    """Materialize a project from a template directory and its manifest."""
    try:
        settings = Settings()
    except ValidationError as e:
        typer.echo(f"Invalid SIRE_* environment settings: {e}", err=True)
        raise typer.Exit(code=EXIT_MANIFEST_ERROR) from e

    if manifest_name:
        settings = settings.model_copy(update={"manifest_file_name": manifest_name})

    # Configure logging
    logging.basicConfig(
        level=logging.DEBUG if verbose else parse_log_level(settings.log_level),
        format="[%(levelname)s] %(message)s",
    )

    logger.debug("Starting sire")

    source = parse_source_dir(source_dir)
    destination = parse_destination_dir(destination_dir)

    try:
        report = generate_project(source, destination, settings=settings)
    except ManifestError as e:
        typer.echo(f"Configuration failed to load: {e}", err=True)
        raise typer.Exit(code=EXIT_MANIFEST_ERROR) from e

    for failure in report.failures:
        typer.echo(
            f"Failed ({failure.stage.value}): {failure.path}: {failure.message}",
            err=True,
        )

    logger.debug(
        f"Completed: {len(report.written_files)} file(s) written, "
        f"{len(report.failures)} failure(s)"
    )

    if fail_on_error and not report.ok:
        raise typer.Exit(code=EXIT_ENTRY_FAILURES)


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
