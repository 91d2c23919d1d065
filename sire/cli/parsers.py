"""CLI argument parsers and validators."""

from __future__ import annotations

import logging
from pathlib import Path

import typer


def parse_source_dir(value: str) -> Path:
    """Parse the template directory, which must already exist."""
    path = Path(value)
    if not path.is_dir():
        raise typer.BadParameter(f"Not a directory: {value!r}")
    return path


def parse_destination_dir(value: str) -> Path:
    """Parse the destination directory, which may not exist yet."""
    path = Path(value)
    if path.exists() and not path.is_dir():
        raise typer.BadParameter(f"Destination exists and is not a directory: {value!r}")
    return path


def parse_log_level(value: str) -> int:
    """Parse a logging level name such as INFO or debug."""
    level = logging.getLevelName(value.strip().upper())
    if not isinstance(level, int):
        raise typer.BadParameter(f"Invalid log level: {value!r}")
    return level
