"""Shared fixtures for the release pipeline test suite."""

from __future__ import annotations

from pathlib import Path

import pytest
from stage_test_helpers import write_plugin_inputs

from plugin_release import PackagingConfig
from plugin_release.environment import WORKSPACE_ENV


@pytest.fixture
def workspace(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Create an isolated workspace and set ``PLUGIN_RELEASE_WORKSPACE``."""
    root = tmp_path / "workspace"
    root.mkdir()
    monkeypatch.setenv(WORKSPACE_ENV, str(root))
    return root


@pytest.fixture
def plugin_workspace(workspace: Path) -> Path:
    """Populate ``workspace`` with a buildable plugin source tree."""

    write_plugin_inputs(workspace)
    return workspace


@pytest.fixture
def config(plugin_workspace: Path) -> PackagingConfig:
    """Return the default configuration for ``plugin_workspace``."""

    return PackagingConfig(workspace=plugin_workspace)
