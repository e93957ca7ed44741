"""Core staging pipeline: clean, verify, copy, rewrite the manifest, measure."""

from __future__ import annotations

import dataclasses
import shutil
import sys
import typing as typ
from pathlib import Path

from ..config import InputKind
from ..errors import (
    MissingRequiredInputError,
    OptionalInputSkipped,
    PreconditionError,
    StagingIOError,
)
from ..fs_utils import CopyReport, DirectoryStats, copy_with_filter, directory_stats
from ..manifest import read_manifest, sanitize_manifest, write_manifest

if typ.TYPE_CHECKING:
    from ..config import CopySpec, PackagingConfig

__all__ = ["StageResult", "stage_plugin"]


@dataclasses.dataclass(slots=True)
class StageResult:
    """Outcome of :func:`stage_plugin`."""

    staging_dir: Path
    copied: list[CopyReport]
    skipped: list[OptionalInputSkipped]
    manifest_path: Path
    stats: DirectoryStats


def _initialize_staging_dir(staging_dir: Path) -> None:
    """Create a clean staging directory ready to receive inputs.

    Parameters
    ----------
    staging_dir : Path
        Absolute path to the directory that will hold the staged tree.

    Raises
    ------
    StagingIOError
        Raised when the previous tree cannot be removed or the directory
        cannot be created.

    Examples
    --------
    >>> staging_dir = Path("/tmp/stage")
    >>> (staging_dir / "old").mkdir(parents=True, exist_ok=True)
    >>> _initialize_staging_dir(staging_dir)
    >>> list(staging_dir.iterdir())
    []
    """

    try:
        if staging_dir.exists():
            shutil.rmtree(staging_dir)
        staging_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        message = f"Failed to reset staging directory {staging_dir}: {exc}"
        raise StagingIOError(message) from exc


def _require_entry_point(config: PackagingConfig) -> None:
    entry_point = config.entry_point_path()
    if not entry_point.is_file():
        message = (
            f"{config.entry_point} not found in {config.workspace.as_posix()}. "
            "Please run the transpile step first to compile the .es sources."
        )
        raise PreconditionError(message)


def _input_present(source: Path, spec: CopySpec) -> bool:
    if spec.kind is InputKind.DIRECTORY:
        return source.is_dir()
    return source.is_file()


def _ensure_input_available(source: Path, spec: CopySpec) -> bool:
    """Return ``True`` when ``source`` exists, otherwise handle the miss."""

    if _input_present(source, spec):
        return True
    if spec.required:
        raise MissingRequiredInputError(spec)
    return False


def stage_plugin(config: PackagingConfig) -> StageResult:
    """Copy the configured inputs into ``config``'s staging directory.

    Parameters
    ----------
    config : PackagingConfig
        Fully resolved configuration describing the inputs to stage.

    Returns
    -------
    StageResult
        Summary of the copied and skipped inputs, the staged manifest, and
        the size of the staged tree.

    Raises
    ------
    PreconditionError
        Raised when the transpiled entry point is missing.
    MissingRequiredInputError
        Raised when a required input is absent. No manifest is written to
        the staging directory in that case, whatever the input order.
    StagingIOError
        Raised when a filesystem operation fails.
    """

    staging_dir = config.staging_dir()
    _initialize_staging_dir(staging_dir)
    _require_entry_point(config)

    copied: list[CopyReport] = []
    skipped: list[OptionalInputSkipped] = []
    for spec in config.inputs:
        source = config.source_path(spec.path)
        if not _ensure_input_available(source, spec):
            skip = OptionalInputSkipped(spec)
            print(f"::warning title=Input Skipped::{skip}", file=sys.stderr)
            skipped.append(skip)
            continue
        if spec.path == config.manifest_name:
            # Written last, sanitized; a failed run must not leave a manifest.
            continue
        report = copy_with_filter(
            source, staging_dir / spec.path, config.workspace, config.exclusions
        )
        print(f"  {report}")
        copied.append(report)

    manifest = read_manifest(config.manifest_path())
    manifest_path = config.staged_manifest_path()
    write_manifest(manifest_path, sanitize_manifest(manifest, config.manifest_fields))

    return StageResult(
        staging_dir=staging_dir,
        copied=copied,
        skipped=skipped,
        manifest_path=manifest_path,
        stats=directory_stats(staging_dir),
    )
