"""Exception types and event records raised by the release pipeline."""

from __future__ import annotations

import dataclasses
import typing as typ
from pathlib import Path

if typ.TYPE_CHECKING:
    from .config import CopySpec

__all__ = [
    "ArchiveError",
    "ArchiveWarning",
    "ManifestError",
    "MissingRequiredInputError",
    "OptionalInputSkipped",
    "PreconditionError",
    "StageError",
    "StagingIOError",
]


class StageError(RuntimeError):
    """Base class for fatal staging and packaging failures."""


class PreconditionError(StageError):
    """Raised when an upstream artefact has not been produced yet."""


class MissingRequiredInputError(StageError):
    """Raised when a required input is absent from the workspace."""

    def __init__(self, spec: CopySpec) -> None:
        self.spec = spec
        message = f"Required {spec.kind.value} not found: {spec.path}"
        super().__init__(message)


class StagingIOError(StageError):
    """Raised when copying, reading, or writing a staged file fails."""


class ManifestError(StageError):
    """Raised when the project manifest cannot be interpreted."""


class ArchiveError(StageError):
    """Raised when the release archive cannot be written."""


@dataclasses.dataclass(slots=True, frozen=True)
class OptionalInputSkipped:
    """An optional input that was absent and therefore not staged."""

    spec: CopySpec

    def __str__(self) -> str:
        return f"Skipped (not found): {self.spec.path}"


@dataclasses.dataclass(slots=True, frozen=True)
class ArchiveWarning:
    """A staged entry that vanished while the archive was being written."""

    path: Path
    message: str

    def __str__(self) -> str:
        return f"{self.path.as_posix()}: {self.message}"
