"""Build the distributable ZIP archive from a staged plugin tree."""

from __future__ import annotations

import dataclasses
import sys
import typing as typ
import zipfile
from pathlib import Path

from .errors import ArchiveError, ArchiveWarning, StageError
from .fs_utils import scan_sorted
from .template_utils import render_install_readme

if typ.TYPE_CHECKING:
    from .config import PackagingConfig
    from .manifest import ArchiveMetadata

__all__ = ["COMPRESSION_LEVEL", "ArchiveResult", "build_archive"]

COMPRESSION_LEVEL = 9


@dataclasses.dataclass(slots=True)
class ArchiveResult:
    """Outcome of :func:`build_archive`."""

    archive_path: Path
    total_bytes: int
    warnings: list[ArchiveWarning]


def _remove_previous(output_path: Path) -> None:
    if not output_path.exists():
        return
    try:
        output_path.unlink()
    except OSError as exc:
        message = f"Failed to remove previous archive {output_path}: {exc}"
        raise ArchiveError(message) from exc
    print(f"Removed old: {output_path.name}")


def _record_missing(
    warnings: list[ArchiveWarning], staged_dir: Path, path: Path, exc: OSError
) -> None:
    warning = ArchiveWarning(
        path.relative_to(staged_dir), exc.strerror or str(exc)
    )
    print(f"::warning title=Archive Entry Missing::{warning}", file=sys.stderr)
    warnings.append(warning)


def _add_tree(
    archive: zipfile.ZipFile,
    staged_dir: Path,
    root_name: str,
    warnings: list[ArchiveWarning],
) -> None:
    """Mirror ``staged_dir`` into ``archive`` beneath ``root_name``.

    Entries that disappear while being visited are recorded in ``warnings``;
    every other error propagates. Symlinked directories are archived as real
    directories unless they loop back to an ancestor.
    """

    pending: list[tuple[Path, frozenset[Path]]] = [(staged_dir, frozenset())]
    while pending:
        directory, ancestors = pending.pop()
        real_dir = directory.resolve()
        if real_dir in ancestors:
            continue
        ancestors = ancestors | {real_dir}
        arc_dir = Path(root_name, directory.relative_to(staged_dir)).as_posix()
        try:
            entries = scan_sorted(directory)
            archive.write(directory, arc_dir)
        except FileNotFoundError as exc:
            _record_missing(warnings, staged_dir, directory, exc)
            continue
        subdirs: list[tuple[Path, frozenset[Path]]] = []
        for entry in entries:
            entry_path = Path(entry.path)
            try:
                if entry.is_dir():
                    subdirs.append((entry_path, ancestors))
                    continue
                archive.write(entry_path, f"{arc_dir}/{entry.name}")
            except FileNotFoundError as exc:
                _record_missing(warnings, staged_dir, entry_path, exc)
        pending.extend(reversed(subdirs))


def build_archive(
    staged_dir: Path,
    output_path: Path,
    metadata: ArchiveMetadata,
    config: PackagingConfig,
) -> ArchiveResult:
    """Write ``staged_dir`` and an installation document to ``output_path``.

    Parameters
    ----------
    staged_dir : Path
        Directory produced by the stage step.
    output_path : Path
        Archive to create. An existing file is removed first; archives are
        never appended to.
    metadata : ArchiveMetadata
        Name and version embedded in the installation document.
    config : PackagingConfig
        Supplies the archive root name, README name, and host details.

    Returns
    -------
    ArchiveResult
        Final archive size, measured after the archive has been closed, and
        any warnings for staged entries that vanished during traversal.

    Raises
    ------
    ArchiveError
        Raised for any failure other than a missing staged entry. The
        partially written archive is removed.
    """

    _remove_previous(output_path)
    warnings: list[ArchiveWarning] = []
    try:
        with zipfile.ZipFile(
            output_path,
            "w",
            compression=zipfile.ZIP_DEFLATED,
            compresslevel=COMPRESSION_LEVEL,
            strict_timestamps=False,
        ) as archive:
            _add_tree(archive, staged_dir, config.archive_root, warnings)
            archive.writestr(
                config.readme_name, render_install_readme(metadata, config)
            )
    except (OSError, ValueError, zipfile.LargeZipFile, StageError) as exc:
        output_path.unlink(missing_ok=True)
        message = f"Failed to create {output_path.name}: {exc}"
        raise ArchiveError(message) from exc

    return ArchiveResult(
        archive_path=output_path,
        total_bytes=output_path.stat().st_size,
        warnings=warnings,
    )
