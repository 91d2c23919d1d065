"""Tests for manifest loading (sire.manifest.loader)."""

from __future__ import annotations

import pytest

from sire.manifest import (
    ManifestNotFoundError,
    ManifestValidationError,
    find_manifest,
    load_manifest,
)

from .conftest import MANIFEST_DIR

pytestmark = pytest.mark.unit


def _assert_common_fields(result):
    assert result.project_name == "test-project"
    assert result.project_description == "A description."
    assert result.repository == "https://github.com/namespace/repo"
    assert result.homepage == "http://example.com"
    assert result.full_name == "Jane Doe"
    assert result.license == "MIT"
    assert result.version == "0.1.0"
    assert result.email == "foo.bar@example.com"


def test_parse_manifest_success():
    result = load_manifest(MANIFEST_DIR / "complete_sample.yml")

    _assert_common_fields(result)
    extras = result.extensions["extras"]
    assert extras["organization"] == "Fizz Buzz"
    assert extras["build_mode"] == ["foo", "bar"]
    assert extras["debug"] is True


def test_parse_simple_manifest_success():
    result = load_manifest(MANIFEST_DIR / "simple_manifest.yml")

    _assert_common_fields(result)
    assert len(result.extensions) == 0


def test_missing_project_name():
    with pytest.raises(ManifestValidationError, match="project_name"):
        load_manifest(MANIFEST_DIR / "missing_project_name.yml")


def test_non_string_version_rejected():
    with pytest.raises(ManifestValidationError, match="version"):
        load_manifest(MANIFEST_DIR / "non_string_version.yml")


def test_missing_file(tmp_path):
    with pytest.raises(ManifestNotFoundError):
        load_manifest(tmp_path / "manifest.yml")


def test_invalid_yaml(tmp_path):
    path = tmp_path / "manifest.yml"
    path.write_text("project_name: [unclosed\n", encoding="utf-8")

    with pytest.raises(ManifestValidationError, match="Invalid YAML"):
        load_manifest(path)


def test_non_mapping_document(tmp_path):
    path = tmp_path / "manifest.yml"
    path.write_text("- just\n- a list\n", encoding="utf-8")

    with pytest.raises(ManifestValidationError, match="must be a mapping"):
        load_manifest(path)


def test_empty_document(tmp_path):
    path = tmp_path / "manifest.yml"
    path.write_text("", encoding="utf-8")

    with pytest.raises(ManifestValidationError):
        load_manifest(path)


class TestFindManifest:
    def test_found(self, tmp_path):
        (tmp_path / "manifest.yml").write_text("{}", encoding="utf-8")
        assert find_manifest(tmp_path) == tmp_path / "manifest.yml"

    def test_custom_name(self, tmp_path):
        (tmp_path / "sire.manifest.yml").write_text("{}", encoding="utf-8")
        assert (
            find_manifest(tmp_path, "sire.manifest.yml")
            == tmp_path / "sire.manifest.yml"
        )

    def test_missing(self, tmp_path):
        with pytest.raises(ManifestNotFoundError):
            find_manifest(tmp_path)

    def test_directory_with_manifest_name(self, tmp_path):
        (tmp_path / "manifest.yml").mkdir()
        with pytest.raises(ManifestNotFoundError):
            find_manifest(tmp_path)


def test_timestamps_kept_as_strings(tmp_path, manifest_data):
    path = tmp_path / "manifest.yml"
    lines = [f"{key}: '{value}'" for key, value in manifest_data.items()]
    lines.append("released: 2024-01-01")
    lines.append("history:")
    lines.append("  - 2023-06-30 12:00:00")
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")

    result = load_manifest(path)

    assert result.extensions["released"] == "2024-01-01"
    assert result.extensions["history"] == ["2023-06-30 12:00:00"]


def test_non_string_keys_become_strings(tmp_path, manifest_data):
    path = tmp_path / "manifest.yml"
    lines = [f"{key}: '{value}'" for key, value in manifest_data.items()]
    lines.append("ports:")
    lines.append("  80: http")
    lines.append("  true: flag")
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")

    result = load_manifest(path)

    assert result.extensions["ports"] == {"80": "http", "True": "flag"}
