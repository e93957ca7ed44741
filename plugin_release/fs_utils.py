"""Filesystem helpers for staging: filtered copying and size accounting."""

from __future__ import annotations

import dataclasses
import os
import shutil
import typing as typ
from pathlib import Path

from .errors import StagingIOError
from .exclusion import ExclusionRule, is_excluded

__all__ = [
    "CopyReport",
    "DirectoryStats",
    "copy_with_filter",
    "directory_stats",
    "scan_sorted",
]


@dataclasses.dataclass(slots=True)
class CopyReport:
    """Outcome of a single :func:`copy_with_filter` call."""

    relative_path: str
    is_directory: bool
    files_copied: int = 0
    excluded: list[str] = dataclasses.field(default_factory=list)

    def __str__(self) -> str:
        if self.is_directory:
            return f"Copied directory: {self.relative_path}/"
        return f"Copied file: {self.relative_path}"


@dataclasses.dataclass(slots=True, frozen=True)
class DirectoryStats:
    """Aggregate size of a directory tree (directories are not counted)."""

    total_bytes: int
    file_count: int


def scan_sorted(directory: Path) -> list[os.DirEntry[str]]:
    """Return the entries of ``directory`` sorted by name."""
    with os.scandir(directory) as entries:
        return sorted(entries, key=lambda entry: entry.name)


def copy_with_filter(
    source: Path,
    destination: Path,
    workspace: Path,
    rules: typ.Sequence[ExclusionRule],
) -> CopyReport:
    """Copy ``source`` to ``destination``, skipping excluded directory entries.

    Parameters
    ----------
    source : Path
        File or directory inside ``workspace``.
    destination : Path
        Target path; missing parent directories are created.
    workspace : Path
        Root that exclusion rules are evaluated against.
    rules : Sequence[ExclusionRule]
        Rules consulted for every entry visited below a directory ``source``.
        A single-file ``source`` is copied verbatim. Symbolic links are
        dereferenced, so the copy holds only regular files and directories.

    Returns
    -------
    CopyReport
        Number of files copied and the workspace-relative paths excluded.

    Raises
    ------
    StagingIOError
        Raised when ``source`` is missing or unreadable, or ``destination``
        cannot be written.

    Examples
    --------
    >>> report = copy_with_filter(  # doctest: +SKIP
    ...     Path("/w/views"), Path("/w/dist/views"), Path("/w"), []
    ... )
    >>> str(report)  # doctest: +SKIP
    'Copied directory: views/'
    """
    relative = source.relative_to(workspace).as_posix()
    try:
        if not source.is_dir():
            destination.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(source, destination)
            return CopyReport(relative, is_directory=False, files_copied=1)
        return _copy_tree(source, destination, workspace, rules)
    except OSError as exc:
        message = f"Failed to copy '{relative}': {exc}"
        raise StagingIOError(message) from exc


def _copy_tree(
    source: Path,
    destination: Path,
    workspace: Path,
    rules: typ.Sequence[ExclusionRule],
) -> CopyReport:
    report = CopyReport(source.relative_to(workspace).as_posix(), is_directory=True)
    pending: list[tuple[Path, Path, frozenset[Path]]] = [
        (source, destination, frozenset())
    ]
    while pending:
        src_dir, dest_dir, ancestors = pending.pop()
        real_dir = src_dir.resolve()
        if real_dir in ancestors:
            # symlink cycle
            continue
        ancestors = ancestors | {real_dir}
        dest_dir.mkdir(parents=True, exist_ok=True)
        subdirs: list[tuple[Path, Path, frozenset[Path]]] = []
        for entry in scan_sorted(src_dir):
            entry_path = Path(entry.path)
            relative = entry_path.relative_to(workspace).as_posix()
            if is_excluded(relative, rules):
                report.excluded.append(relative)
                continue
            target = dest_dir / entry.name
            if entry.is_dir():
                subdirs.append((entry_path, target, ancestors))
            else:
                shutil.copy2(entry_path, target)
                report.files_copied += 1
        pending.extend(reversed(subdirs))
    return report


def directory_stats(root: Path) -> DirectoryStats:
    """Return the byte total and leaf file count below ``root``.

    Symlinked directories are followed unless they loop back to an ancestor.

    Raises
    ------
    StagingIOError
        Raised when ``root`` or one of its entries cannot be read.
    """
    total = 0
    files = 0
    pending: list[tuple[Path, frozenset[Path]]] = [(root, frozenset())]
    try:
        while pending:
            directory, ancestors = pending.pop()
            real_dir = directory.resolve()
            if real_dir in ancestors:
                continue
            ancestors = ancestors | {real_dir}
            for entry in scan_sorted(directory):
                if entry.is_dir():
                    pending.append((Path(entry.path), ancestors))
                else:
                    total += entry.stat().st_size
                    files += 1
    except OSError as exc:
        message = f"Failed to measure '{root}': {exc}"
        raise StagingIOError(message) from exc
    return DirectoryStats(total_bytes=total, file_count=files)
