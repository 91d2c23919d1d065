"""YAML manifest loading into a template context."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from ..core.models import TemplateContext
from ..core.settings import MANIFEST_FILE_NAME

logger = logging.getLogger(__name__)

_TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"


class _ManifestLoader(yaml.SafeLoader):
    """Safe loader keeping timestamps as strings and mapping keys as ``str``."""

    def construct_mapping(self, node, deep=False):
        mapping = super().construct_mapping(node, deep=deep)
        return {str(key): value for key, value in mapping.items()}


_ManifestLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != _TIMESTAMP_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


class ManifestError(Exception):
    """Raised when the manifest cannot be turned into a template context."""


class ManifestNotFoundError(ManifestError, FileNotFoundError):
    """Raised when the manifest file does not exist."""


class ManifestValidationError(ManifestError, ValueError):
    """Raised when the manifest is not valid YAML or misses required fields."""


def find_manifest(source_root: Path, file_name: str = MANIFEST_FILE_NAME) -> Path:
    """Locate the manifest at the root of a template directory.

    Args:
        source_root: Template root directory
        file_name: Reserved manifest file name

    Returns:
        Path to the manifest file
    """
    manifest_path = source_root / file_name
    if not manifest_path.is_file():
        logger.error(f"No manifest file found: {manifest_path}")
        raise ManifestNotFoundError(f"Manifest not found: {manifest_path}")
    return manifest_path


def _format_validation_error(error: ValidationError) -> str:
    problems = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"]) or "<root>"
        problems.append(f"{location}: {item['msg']}")
    return "; ".join(problems)


def load_manifest(manifest_path: Path) -> TemplateContext:
    """Load and validate a manifest file.

    Args:
        manifest_path: Path to the YAML manifest

    Returns:
        Immutable template context
    """
    try:
        raw = manifest_path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        logger.error(f"No manifest file found: {manifest_path}")
        raise ManifestNotFoundError(f"Manifest not found: {manifest_path}") from e
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Cannot read manifest: {manifest_path}")
        raise ManifestValidationError(
            f"Cannot read manifest {manifest_path}: {e}"
        ) from e

    try:
        data = yaml.load(raw, Loader=_ManifestLoader)
    except yaml.YAMLError as e:
        logger.error(f"Cannot deserialize manifest: {manifest_path}")
        raise ManifestValidationError(f"Invalid YAML in {manifest_path}: {e}") from e

    if not isinstance(data, dict):
        logger.error(f"Cannot deserialize manifest: {manifest_path}")
        raise ManifestValidationError(
            f"Manifest {manifest_path} must be a mapping, got {type(data).__name__}"
        )

    try:
        context = TemplateContext.model_validate(data)
    except ValidationError as e:
        logger.error(f"Cannot deserialize manifest: {manifest_path}")
        raise ManifestValidationError(
            f"Invalid manifest {manifest_path}: {_format_validation_error(e)}"
        ) from e

    logger.info(f"Loaded manifest: {manifest_path}")
    return context
