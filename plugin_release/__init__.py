"""Stage and package host-application plugins for release."""

from .archive import ArchiveResult, build_archive
from .config import CopySpec, InputKind, PackagingConfig, load_config
from .errors import (
    ArchiveError,
    ArchiveWarning,
    ManifestError,
    MissingRequiredInputError,
    OptionalInputSkipped,
    PreconditionError,
    StageError,
    StagingIOError,
)
from .exclusion import ExclusionRule, is_excluded
from .fs_utils import DirectoryStats, copy_with_filter, directory_stats
from .manifest import ArchiveMetadata, sanitize_manifest
from .staging import StageResult, stage_plugin

__all__ = [
    "ArchiveError",
    "ArchiveMetadata",
    "ArchiveResult",
    "ArchiveWarning",
    "CopySpec",
    "DirectoryStats",
    "ExclusionRule",
    "InputKind",
    "ManifestError",
    "MissingRequiredInputError",
    "OptionalInputSkipped",
    "PackagingConfig",
    "PreconditionError",
    "StageError",
    "StageResult",
    "StagingIOError",
    "build_archive",
    "copy_with_filter",
    "directory_stats",
    "is_excluded",
    "load_config",
    "sanitize_manifest",
    "stage_plugin",
]
