"""Manifest discovery and parsing."""

from .loader import (
    ManifestError,
    ManifestNotFoundError,
    ManifestValidationError,
    find_manifest,
    load_manifest,
)

__all__ = [
    "ManifestError",
    "ManifestNotFoundError",
    "ManifestValidationError",
    "find_manifest",
    "load_manifest",
]
