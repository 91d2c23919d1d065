"""Shared fixtures for sire tests."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

import pytest
import yaml

from sire.core.models import TemplateContext

DATA_DIR = Path(__file__).parent / "data"
MANIFEST_DIR = DATA_DIR / "manifests"


@pytest.fixture
def manifest_data() -> dict[str, Any]:
    """Minimal valid manifest payload for a project called ``demo``."""
    return {
        "project_name": "demo",
        "project_description": "A demo project.",
        "repository": "https://github.com/namespace/demo",
        "homepage": "http://example.com",
        "full_name": "Jane Doe",
        "license": "MIT",
        "version": "0.1.0",
        "email": "jane@example.com",
    }


@pytest.fixture
def context(manifest_data: dict[str, Any]) -> TemplateContext:
    return TemplateContext.model_validate(manifest_data)


@pytest.fixture
def make_template(tmp_path: Path) -> Callable[..., Path]:
    """Build a template tree under ``tmp_path/template``.

    ``files`` maps relative paths to text content; a value of ``None``
    creates an empty directory. ``manifest`` is dumped to ``manifest.yml``
    at the root when given.
    """

    def _make(
        files: dict[str, str | None],
        manifest: dict[str, Any] | None = None,
        root_name: str = "template",
    ) -> Path:
        root = tmp_path / root_name
        root.mkdir()
        if manifest is not None:
            (root / "manifest.yml").write_text(yaml.safe_dump(manifest), encoding="utf-8")
        for relative, content in files.items():
            path = root / relative
            if content is None:
                path.mkdir(parents=True, exist_ok=True)
                continue
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        return root

    return _make
