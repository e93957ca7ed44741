"""Human-readable summaries printed after staging and packaging."""

from __future__ import annotations

import typing as typ

if typ.TYPE_CHECKING:
    from ..archive import ArchiveResult
    from ..config import PackagingConfig
    from .pipeline import StageResult

__all__ = ["format_bytes", "package_summary", "stage_summary"]

_UNITS = ("B", "KB", "MB")


def format_bytes(size: int) -> str:
    """Return ``size`` in 1024-based units with at most two decimals.

    Examples
    --------
    >>> format_bytes(0)
    '0 B'
    >>> format_bytes(1536)
    '1.5 KB'
    >>> format_bytes(3 * 1024 * 1024)
    '3 MB'
    """

    if size == 0:
        return "0 B"
    exponent = 0
    while exponent < len(_UNITS) - 1 and size >= 1024 ** (exponent + 1):
        exponent += 1
    value = round(size / 1024**exponent, 2)
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return f"{text} {_UNITS[exponent]}"


def stage_summary(result: StageResult) -> list[str]:
    """Return the report lines describing a finished staging run."""

    return [
        "Build completed successfully!",
        "",
        "Build summary:",
        f"   Size: {format_bytes(result.stats.total_bytes)}",
        f"   Files: {result.stats.file_count}",
        f"   Location: {result.staging_dir.as_posix()}",
        "",
        "Next steps:",
        '   - Run "plugin-release package" to create the .zip package',
    ]


def package_summary(result: ArchiveResult, config: PackagingConfig) -> list[str]:
    """Return the report lines describing a finished archive."""

    archive = result.archive_path
    return [
        "ZIP package created successfully!",
        "",
        "Package summary:",
        f"   File: {archive.name}",
        f"   Size: {result.total_bytes / 1024:.2f} KB ({result.total_bytes} bytes)",
        f"   Location: {archive.as_posix()}",
        "",
        "Installation:",
        "   1. Unzip the package",
        f"   2. Copy {config.archive_root}/ contents to the {config.host_name} "
        "plugins directory",
    ]
