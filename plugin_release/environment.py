"""Environment helpers shared by the release commands."""

from __future__ import annotations

import os
from pathlib import Path

__all__ = ["WORKSPACE_ENV", "workspace_path"]

WORKSPACE_ENV = "PLUGIN_RELEASE_WORKSPACE"


def workspace_path(name: str = WORKSPACE_ENV) -> Path:
    """Return the workspace named by ``name`` or the current directory.

    Parameters
    ----------
    name:
        Name of the environment variable holding the project root.

    Returns
    -------
    Path
        Absolute path to the plugin project root.
    """
    value = os.environ.get(name)
    if not value:
        return Path.cwd()
    return Path(value).resolve()
