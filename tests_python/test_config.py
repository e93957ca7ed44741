"""Tests for loading the packaging configuration."""

from __future__ import annotations

from pathlib import Path
from textwrap import dedent

import pytest

from plugin_release import CopySpec, ExclusionRule, InputKind, StageError, load_config
from plugin_release.config import CONFIG_FILE_NAME, archive_file_name
from plugin_release.exclusion import DEFAULT_EXCLUSIONS


def test_load_config_defaults(workspace: Path) -> None:
    """Without a config file the built-in inputs and rules apply."""

    config = load_config(workspace)

    assert config.staging_dir() == workspace / "dist"
    assert config.entry_point_path() == workspace / "index.js"
    assert [spec.path for spec in config.inputs] == [
        "index.js",
        "views",
        "utils",
        "services",
        "i18n",
        "assets",
        "package.json",
    ]
    assert all(spec.required for spec in config.inputs)
    assert config.exclusions == list(DEFAULT_EXCLUSIONS)


def test_load_config_reads_overrides(workspace: Path) -> None:
    """A checked-in TOML file should override the defaults."""

    (workspace / CONFIG_FILE_NAME).write_text(
        dedent(
            """
            [common]
            dist_dir = "build"
            entry_point = "main.js"

            [[common.inputs]]
            path = "main.js"

            [[common.inputs]]
            path = "docs"
            kind = "directory"
            required = false

            [common.exclude]
            suffix = [".map"]
            contains = ["__tests__"]
            """
        ),
        encoding="utf-8",
    )

    config = load_config(workspace)

    assert config.staging_dir() == workspace / "build"
    assert config.entry_point == "main.js"
    assert config.inputs == [
        CopySpec("main.js"),
        CopySpec("docs", InputKind.DIRECTORY, required=False),
    ]
    assert config.exclusions == [
        ExclusionRule.suffix(".map"),
        ExclusionRule.substring("__tests__"),
    ]


def test_load_config_missing_explicit_file(workspace: Path) -> None:
    """An explicit config path that does not exist should raise."""

    with pytest.raises(FileNotFoundError, match="Configuration file not found"):
        load_config(workspace, workspace / "absent.toml")


@pytest.mark.parametrize(
    ("content", "expected_match"),
    [
        pytest.param("[common\n", "Invalid TOML", id="invalid_toml"),
        pytest.param(
            "[[common.inputs]]\nkind = 'file'\n",
            "Missing required input key 'path' in entry #1",
            id="missing_path",
        ),
        pytest.param(
            "[[common.inputs]]\npath = 'x'\nkind = 'socket'\n",
            "Unknown input kind 'socket'",
            id="unknown_kind",
        ),
        pytest.param(
            "[common.exclude]\nsuffix = '.es'\n",
            "Exclusion 'suffix' must be a list of strings",
            id="scalar_exclusion",
        ),
        pytest.param(
            "[common]\ndist_dir = ''\n",
            "Key 'dist_dir' must be a non-empty string",
            id="empty_dist_dir",
        ),
    ],
)
def test_load_config_rejects_invalid_entries(
    workspace: Path, content: str, expected_match: str
) -> None:
    """Malformed configuration should fail with a descriptive ``StageError``."""

    (workspace / CONFIG_FILE_NAME).write_text(content, encoding="utf-8")

    with pytest.raises(StageError, match=expected_match):
        load_config(workspace)


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        pytest.param("poi-plugin-demo", "poi-plugin-demo-1.0.0.zip", id="plain"),
        pytest.param("@poi/demo", "poi-demo-1.0.0.zip", id="scoped"),
    ],
)
def test_archive_file_name(name: str, expected: str) -> None:
    """Archive names should follow ``<name>-<version>.zip``."""

    assert archive_file_name(name, "1.0.0") == expected


def test_load_config_wraps_read_errors(
    workspace: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """An unreadable config file should raise ``StageError``, not ``OSError``."""

    (workspace / CONFIG_FILE_NAME).write_text("[common]\n", encoding="utf-8")

    def deny(handle: object) -> dict[str, object]:
        raise PermissionError(13, "Permission denied", CONFIG_FILE_NAME)

    monkeypatch.setattr("plugin_release.config.tomllib.load", deny)

    with pytest.raises(StageError, match="Failed to read .*Permission denied") as exc:
        load_config(workspace)

    assert isinstance(exc.value.__cause__, PermissionError)
