"""Staging pipeline package exposing the stage step and its reports."""

from .output import format_bytes, package_summary, stage_summary
from .pipeline import StageResult, stage_plugin

__all__ = [
    "StageResult",
    "format_bytes",
    "package_summary",
    "stage_plugin",
    "stage_summary",
]
