"""Tests for reading and whitelisting the plugin manifest."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from plugin_release import ManifestError, StagingIOError, sanitize_manifest
from plugin_release.config import MANIFEST_FIELDS
from plugin_release.manifest import (
    ArchiveMetadata,
    read_archive_metadata,
    read_manifest,
    write_manifest,
)


def test_sanitize_drops_development_fields() -> None:
    """Only whitelisted keys should survive sanitisation."""

    manifest = {
        "name": "p",
        "version": "1.0.0",
        "devDependency": "x",
        "peerDependencies": {"host": "^1"},
    }

    sanitized = sanitize_manifest(manifest, MANIFEST_FIELDS)

    assert sanitized == {
        "name": "p",
        "version": "1.0.0",
        "peerDependencies": {"host": "^1"},
    }


def test_sanitize_keys_are_subset_of_whitelist() -> None:
    """Arbitrary extra fields must never reach the staged manifest."""

    manifest = {f"extra{index}": index for index in range(20)} | {
        "main": "index.js",
        "scripts": {"test": "jest"},
    }

    sanitized = sanitize_manifest(manifest, MANIFEST_FIELDS)

    assert set(sanitized) <= set(MANIFEST_FIELDS)
    assert sanitized == {"main": "index.js"}


def test_sanitize_follows_whitelist_order() -> None:
    """Staged manifests should list fields in whitelist order."""

    manifest = {"license": "MIT", "poiPlugin": {}, "name": "p"}

    assert list(sanitize_manifest(manifest, MANIFEST_FIELDS)) == [
        "name",
        "license",
        "poiPlugin",
    ]


def test_write_manifest_uses_two_space_indent(tmp_path: Path) -> None:
    """Written manifests should be indented JSON ending in a newline."""

    path = tmp_path / "dist" / "package.json"
    write_manifest(path, {"name": "p", "version": "1.0.0"})

    text = path.read_text(encoding="utf-8")
    assert text == '{\n  "name": "p",\n  "version": "1.0.0"\n}\n'


def test_read_manifest_missing_file(tmp_path: Path) -> None:
    """A missing manifest should surface as ``StagingIOError``."""

    with pytest.raises(StagingIOError, match="Failed to read manifest"):
        read_manifest(tmp_path / "package.json")


@pytest.mark.parametrize(
    ("content", "expected_match"),
    [
        pytest.param("{not json", "not valid JSON", id="invalid_json"),
        pytest.param("[1, 2]", "must contain a JSON object", id="not_object"),
    ],
)
def test_read_manifest_rejects_bad_content(
    tmp_path: Path, content: str, expected_match: str
) -> None:
    """Malformed manifests should raise ``ManifestError``."""

    path = tmp_path / "package.json"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(ManifestError, match=expected_match):
        read_manifest(path)


def test_read_archive_metadata(tmp_path: Path) -> None:
    """Archive metadata should come from the manifest's name and version."""

    path = tmp_path / "package.json"
    path.write_text(json.dumps({"name": "p", "version": "2.0.0"}), encoding="utf-8")

    assert read_archive_metadata(path) == ArchiveMetadata("p", "2.0.0")


def test_read_archive_metadata_requires_version(tmp_path: Path) -> None:
    """A manifest without a version cannot name an archive."""

    path = tmp_path / "package.json"
    path.write_text(json.dumps({"name": "p"}), encoding="utf-8")

    with pytest.raises(ManifestError, match="version is missing"):
        read_archive_metadata(path)
