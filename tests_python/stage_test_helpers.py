"""Shared helpers for the release pipeline test suites."""

from __future__ import annotations

import json
import typing as typ
from pathlib import Path

__all__ = ["SOURCE_MANIFEST", "tree_snapshot", "write_plugin_inputs"]

SOURCE_MANIFEST: dict[str, typ.Any] = {
    "name": "poi-plugin-leveling-plan",
    "version": "1.2.3",
    "description": "Plan ship levelling",
    "main": "index.js",
    "author": "poi contributors",
    "license": "MIT",
    "repository": {"type": "git", "url": "https://example.com/plugin.git"},
    "scripts": {"build": "node scripts/build.js"},
    "devDependencies": {"archiver": "^6.0.0"},
    "peerDependencies": {"poi": "^10"},
    "poiPlugin": {"title": "Leveling Plan", "priority": 10},
}


def write_plugin_inputs(
    root: Path, manifest: dict[str, typ.Any] | None = None
) -> None:
    """Populate ``root`` with a transpiled plugin source tree.

    Parameters
    ----------
    root : Path
        Workspace root directory to populate.
    manifest : dict[str, Any] | None, optional
        Contents of ``package.json``; defaults to :data:`SOURCE_MANIFEST`.
    """
    files = {
        "index.js": "module.exports = {}\n",
        "index.es": "export default {}\n",
        "views/index.js": "view\n",
        "views/index.es": "view source\n",
        "views/components/panel.js": "panel\n",
        "views/components/.DS_Store": "meta",
        "utils/format.js": "format\n",
        "utils/node_modules/dep/index.js": "dependency\n",
        "services/store.js": "store\n",
        "i18n/en-US.json": '{"Title": "Title"}\n',
        "assets/icon.svg": "<svg/>\n",
        "scripts/build.js": "// build script\n",
        "README.md": "# plugin\n",
    }
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    (root / "assets" / "empty").mkdir()
    (root / "package.json").write_text(
        json.dumps(manifest or SOURCE_MANIFEST, indent=2), encoding="utf-8"
    )


def tree_snapshot(root: Path) -> dict[str, bytes | None]:
    """Map every path below ``root`` to its bytes (``None`` for directories)."""

    return {
        path.relative_to(root).as_posix(): (
            None if path.is_dir() else path.read_bytes()
        )
        for path in sorted(root.rglob("*"))
    }
