"""Command-line entry point for the plugin release pipeline.

Examples
--------
Stage the plugin checked out in the current directory, then package it::

    plugin-release stage
    plugin-release package

Point the commands at another checkout::

    export PLUGIN_RELEASE_WORKSPACE="$HOME/src/poi-plugin-leveling-plan"
    plugin-release stage
"""

from __future__ import annotations

import sys
import traceback
import typing as typ

import cyclopts

from .archive import build_archive
from .config import load_config
from .environment import workspace_path
from .errors import ArchiveError, PreconditionError, StageError, StagingIOError
from .manifest import read_archive_metadata
from .staging import package_summary, stage_plugin, stage_summary

app = cyclopts.App(
    name="plugin-release",
    help="Stage a plugin source tree and package it into a release archive.",
)


def _fail(title: str, exc: BaseException) -> typ.NoReturn:
    print(f"::error title={title}::{exc}", file=sys.stderr)
    if isinstance(exc, (StagingIOError, ArchiveError)):
        traceback.print_exception(exc, file=sys.stderr)
    raise SystemExit(1) from exc


@app.command
def stage() -> None:
    """Copy the plugin's release inputs into the staging directory."""
    print("Building plugin release...\n")
    try:
        config = load_config(workspace_path())
        result = stage_plugin(config)
    except (FileNotFoundError, StageError) as exc:
        _fail("Staging Failure", exc)

    print()
    for line in stage_summary(result):
        print(line)


@app.command
def package() -> None:
    """Create ``<name>-<version>.zip`` from the staging directory."""
    print("Creating ZIP package...\n")
    try:
        config = load_config(workspace_path())
        staging_dir = config.staging_dir()
        if not staging_dir.is_dir():
            message = (
                f"{config.dist_dir}/ directory not found. "
                'Please run "plugin-release stage" first.'
            )
            raise PreconditionError(message)
        if not config.staged_manifest_path().is_file():
            message = (
                f"{config.dist_dir}/{config.manifest_name} not found; the last "
                'stage run did not complete. Please run "plugin-release stage".'
            )
            raise PreconditionError(message)
        metadata = read_archive_metadata(config.staged_manifest_path())
        output_path = config.archive_path(metadata.name, metadata.version)
        print(f"Creating: {output_path.name}")
        result = build_archive(staging_dir, output_path, metadata, config)
    except (FileNotFoundError, StageError) as exc:
        _fail("Packaging Failure", exc)

    print()
    for line in package_summary(result, config):
        print(line)


if __name__ == "__main__":
    app()
