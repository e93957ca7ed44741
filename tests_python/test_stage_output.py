"""Tests for the summaries printed after staging and packaging."""

from __future__ import annotations

from pathlib import Path

import pytest

from plugin_release import ArchiveResult, DirectoryStats, PackagingConfig, StageResult
from plugin_release.staging import format_bytes, package_summary, stage_summary


@pytest.mark.parametrize(
    ("size", "expected"),
    [
        pytest.param(0, "0 B", id="zero"),
        pytest.param(512, "512 B", id="bytes"),
        pytest.param(1024, "1 KB", id="one_kib"),
        pytest.param(1536, "1.5 KB", id="fractional"),
        pytest.param(1024 * 1024, "1 MB", id="one_mib"),
        pytest.param(5 * 1024**3, "5120 MB", id="capped_at_mb"),
    ],
)
def test_format_bytes(size: int, expected: str) -> None:
    """Sizes should be rendered with 1024-based units."""

    assert format_bytes(size) == expected


def test_stage_summary_reports_stats(tmp_path: Path) -> None:
    """The stage summary should include size, file count, and location."""

    result = StageResult(
        staging_dir=tmp_path / "dist",
        copied=[],
        skipped=[],
        manifest_path=tmp_path / "dist" / "package.json",
        stats=DirectoryStats(total_bytes=2048, file_count=7),
    )

    lines = stage_summary(result)

    assert "   Size: 2 KB" in lines
    assert "   Files: 7" in lines
    assert f"   Location: {(tmp_path / 'dist').as_posix()}" in lines


def test_package_summary_reports_size(tmp_path: Path) -> None:
    """The package summary should report the size in KB and bytes."""

    archive = tmp_path / "p-1.0.0.zip"
    result = ArchiveResult(archive_path=archive, total_bytes=3072, warnings=[])

    lines = package_summary(result, PackagingConfig(workspace=tmp_path))

    assert "   File: p-1.0.0.zip" in lines
    assert "   Size: 3.00 KB (3072 bytes)" in lines
    assert "   2. Copy dist/ contents to the poi plugins directory" in lines
