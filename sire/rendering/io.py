"""Filesystem operations for materializing rendered output."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_FILE_MODE = 0o644


class MaterializeError(OSError):
    """Raised when a destination directory or file cannot be created."""


def ensure_directory(path: Path, *, parents: bool = False) -> bool:
    """Create a directory if it is missing.

    Args:
        path: Directory to create
        parents: Also create missing parent directories

    Returns:
        True when the directory was created, False when it already existed
    """
    if path.is_dir():
        logger.debug(f"Directory already exists: {path}")
        return False

    try:
        path.mkdir(parents=parents)
    except FileExistsError as e:
        if path.is_dir():
            return False
        raise MaterializeError(f"Cannot create directory {path}: {e}") from e
    except OSError as e:
        raise MaterializeError(f"Cannot create directory {path}: {e}") from e

    logger.info(f"Created directory: {path}")
    return True


def atomic_write_text(path: Path, text: str, mode: int = DEFAULT_FILE_MODE) -> None:
    """Write text to a file atomically using a temporary file.

    Line endings are written as given. The parent directory must exist.

    Args:
        path: Destination file path
        text: Text content to write
        mode: File permissions (octal)
    """
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=str(path.parent))
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as tmp:
            tmp.write(text)
            tmp.flush()
            os.fsync(tmp.fileno())
        os.chmod(tmp_name, mode)
        os.replace(tmp_name, path)
    finally:
        if os.path.exists(tmp_name):
            os.remove(tmp_name)


def write_file(path: Path, content: str, *, mode: int | None = None) -> None:
    """Write rendered content, replacing any existing file.

    Args:
        path: Destination file path
        content: Rendered text
        mode: File permissions; defaults to 0644
    """
    try:
        atomic_write_text(path, content, DEFAULT_FILE_MODE if mode is None else mode)
    except OSError as e:
        raise MaterializeError(f"Cannot create file {path}: {e}") from e

    logger.info(f"Created file: {path}")
