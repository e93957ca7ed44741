"""Read, whitelist, and write the plugin's ``package.json`` manifest."""

from __future__ import annotations

import dataclasses
import json
import typing as typ
from pathlib import Path

from .errors import ManifestError, StagingIOError

__all__ = [
    "ArchiveMetadata",
    "read_archive_metadata",
    "read_manifest",
    "sanitize_manifest",
    "write_manifest",
]


@dataclasses.dataclass(slots=True, frozen=True)
class ArchiveMetadata:
    """Name and version used to label the release archive."""

    name: str
    version: str


def read_manifest(path: Path) -> dict[str, typ.Any]:
    """Load and return the JSON manifest at ``path``.

    Parameters
    ----------
    path : Path
        Path to the ``package.json`` file.

    Returns
    -------
    dict[str, Any]
        Parsed manifest fields.

    Raises
    ------
    StagingIOError
        If the manifest cannot be read.
    ManifestError
        If the manifest is not valid JSON or is not a JSON object.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        message = f"Failed to read manifest {path}: {exc}"
        raise StagingIOError(message) from exc
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        message = f"Manifest {path} is not valid JSON: {exc}"
        raise ManifestError(message) from exc
    if not isinstance(data, dict):
        message = f"Manifest {path} must contain a JSON object"
        raise ManifestError(message)
    return data


def sanitize_manifest(
    manifest: typ.Mapping[str, typ.Any], fields: typ.Iterable[str]
) -> dict[str, typ.Any]:
    """Project ``manifest`` onto ``fields``, dropping everything else.

    Fields missing from ``manifest`` are omitted rather than defaulted, and
    the result follows the order of ``fields``.

    Examples
    --------
    >>> sanitize_manifest(
    ...     {"name": "p", "version": "1.0.0", "devDependencies": {"x": "1"}},
    ...     ("name", "version", "main"),
    ... )
    {'name': 'p', 'version': '1.0.0'}
    """
    return {field: manifest[field] for field in fields if field in manifest}


def write_manifest(path: Path, manifest: typ.Mapping[str, typ.Any]) -> None:
    """Write ``manifest`` to ``path`` as two-space indented JSON."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            json.dumps(manifest, indent=2, ensure_ascii=False) + "\n",
            encoding="utf-8",
        )
    except OSError as exc:
        message = f"Failed to write manifest {path}: {exc}"
        raise StagingIOError(message) from exc


def read_archive_metadata(path: Path) -> ArchiveMetadata:
    """Return the name and version recorded in the manifest at ``path``.

    Raises
    ------
    ManifestError
        If ``name`` or ``version`` is missing or blank.
    """
    manifest = read_manifest(path)
    values: dict[str, str] = {}
    for field in ("name", "version"):
        value = manifest.get(field, "")
        if not isinstance(value, str) or not value:
            message = f"{field} is missing from manifest {path}"
            raise ManifestError(message)
        values[field] = value
    return ArchiveMetadata(**values)
