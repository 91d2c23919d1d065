"""Pre-order traversal of a template directory."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable, Iterator

from ..core.models import EntryKind, SourceEntry

logger = logging.getLogger(__name__)


def _classify(entry: os.DirEntry[str]) -> EntryKind | None:
    try:
        if entry.is_dir(follow_symlinks=False):
            return EntryKind.DIRECTORY
        if entry.is_file():
            return EntryKind.FILE
    except OSError as e:
        logger.debug(f"Cannot classify {entry.path}: {e}")
    return None


def _list_dir(path: Path) -> list[os.DirEntry[str]]:
    try:
        with os.scandir(path) as it:
            return sorted(it, key=lambda entry: entry.name)
    except OSError as e:
        logger.debug(f"Cannot list {path}: {e}")
        return []


def walk_source_dir(
    root: Path, *, exclude: Iterable[Path] = ()
) -> Iterator[SourceEntry]:
    """Yield every directory and file under ``root`` in pre-order.

    The root comes first and siblings are ordered by name. Entries that are
    neither a directory nor a regular file, or cannot be inspected, are
    skipped. Symlinked directories are not followed.

    Args:
        root: Template root directory
        exclude: Paths pruned from the traversal along with their subtrees

    Yields:
        Classified source entries
    """
    excluded = {Path(p).absolute() for p in exclude}

    if not root.is_dir():
        logger.debug(f"Source root is not a directory: {root}")
        return

    yield SourceEntry(path=root, kind=EntryKind.DIRECTORY)

    stack: list[Iterator[os.DirEntry[str]]] = [iter(_list_dir(root))]
    while stack:
        entry = next(stack[-1], None)
        if entry is None:
            stack.pop()
            continue

        path = Path(entry.path)
        if path.absolute() in excluded:
            logger.debug(f"Excluded from traversal: {path}")
            continue

        kind = _classify(entry)
        if kind is None:
            continue

        yield SourceEntry(path=path, kind=kind)
        if kind is EntryKind.DIRECTORY:
            stack.append(iter(_list_dir(path)))
