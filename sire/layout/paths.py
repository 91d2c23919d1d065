"""Destination path resolution for template entries."""

from __future__ import annotations

import os
from pathlib import Path, PurePath

from ..core.models import TemplateContext
from ..core.settings import PLACEHOLDER_TOKEN

_FORBIDDEN_SEGMENTS = {"", ".", ".."}
_SEPARATORS = tuple(sep for sep in (os.sep, os.altsep) if sep)


class PathResolutionError(ValueError):
    """Raised when a template entry cannot be mapped to a destination."""


def substitute_segment(segment: str, slug: str, token: str = PLACEHOLDER_TOKEN) -> str:
    """Replace every occurrence of ``token`` in one path segment with ``slug``."""
    if token not in segment:
        return segment

    replaced = segment.replace(token, slug)
    if replaced in _FORBIDDEN_SEGMENTS or any(sep in replaced for sep in _SEPARATORS):
        raise PathResolutionError(
            f"Segment {segment!r} resolves to invalid name {replaced!r}"
        )
    return replaced


def is_root_entry(entry_path: Path, source_root: Path) -> bool:
    return PurePath(entry_path) == PurePath(source_root)


def resolve_destination(
    entry_path: Path,
    source_root: Path,
    destination_root: Path,
    context: TemplateContext,
    *,
    token: str = PLACEHOLDER_TOKEN,
) -> Path:
    """Compute where a template entry lands in the destination tree.

    The entry is re-rooted under ``destination_root`` and the placeholder
    token is replaced literally in each relative segment. The destination
    root itself is left untouched.

    Args:
        entry_path: Path of the entry under the template root
        source_root: Template root directory
        destination_root: Target directory
        context: Template context providing the slug
        token: Placeholder token substituted in path segments

    Returns:
        Destination path
    """
    if is_root_entry(entry_path, source_root):
        return destination_root

    try:
        relative = PurePath(entry_path).relative_to(source_root)
    except ValueError as e:
        raise PathResolutionError(
            f"{entry_path} is not inside template root {source_root}"
        ) from e

    segments = [
        substitute_segment(part, context.project_name, token)
        for part in relative.parts
    ]
    return destination_root.joinpath(*segments)
