"""Configuration models and loader for the release pipeline.

Every path the pipeline touches is derived from a single
:class:`PackagingConfig` so the stages can be pointed at any workspace,
including temporary trees in tests.

Usage
-----
Load the configuration for the plugin checked out in the current directory::

    from pathlib import Path
    from plugin_release.config import load_config

    config = load_config(Path.cwd())
    print(f"Staging directory: {config.staging_dir()}")

A project may check in a ``release-packaging.toml`` file to override the
defaults::

    [common]
    dist_dir = "build"

    [[common.inputs]]
    path = "docs"
    kind = "directory"
    required = false

    [common.exclude]
    suffix = [".es", ".map"]
    contains = [".DS_Store", "node_modules"]
"""

from __future__ import annotations

import dataclasses
import enum
import typing as typ
from pathlib import Path

import tomllib

from .errors import StageError
from .exclusion import DEFAULT_EXCLUSIONS, ExclusionRule

__all__ = [
    "CONFIG_FILE_NAME",
    "MANIFEST_FIELDS",
    "CopySpec",
    "InputKind",
    "PackagingConfig",
    "archive_file_name",
    "load_config",
]

CONFIG_FILE_NAME = "release-packaging.toml"

MANIFEST_FIELDS: tuple[str, ...] = (
    "name",
    "version",
    "description",
    "main",
    "author",
    "license",
    "repository",
    "peerDependencies",
    "poiPlugin",
)

DEFAULT_HOST_PLUGIN_DIRS: dict[str, str] = {
    "Windows": (
        "C:\\Users\\[YourName]\\AppData\\Local\\Programs\\poi\\resources"
        "\\app.asar.unpacked\\node_modules"
    ),
    "macOS": "/Applications/poi.app/Contents/Resources/app.asar.unpacked/node_modules",
    "Linux": "/opt/poi/resources/app.asar.unpacked/node_modules",
}


class InputKind(enum.Enum):
    """Filesystem kind a :class:`CopySpec` expects to find."""

    FILE = "file"
    DIRECTORY = "directory"


@dataclasses.dataclass(slots=True, frozen=True)
class CopySpec:
    """Describe one workspace path to stage.

    Parameters
    ----------
    path : str
        Workspace-relative path, mirrored 1:1 into the staging directory.
    kind : InputKind
        Whether ``path`` names a single file or a directory tree.
    required : bool, default=True
        When ``True`` the staging run fails if ``path`` is missing.
    """

    path: str
    kind: InputKind = InputKind.FILE
    required: bool = True


def _default_inputs() -> list[CopySpec]:
    return [
        CopySpec("index.js"),
        CopySpec("views", InputKind.DIRECTORY),
        CopySpec("utils", InputKind.DIRECTORY),
        CopySpec("services", InputKind.DIRECTORY),
        CopySpec("i18n", InputKind.DIRECTORY),
        CopySpec("assets", InputKind.DIRECTORY),
        CopySpec("package.json"),
    ]


@dataclasses.dataclass(slots=True)
class PackagingConfig:
    """Concrete configuration produced by :func:`load_config`.

    Parameters
    ----------
    workspace : Path
        Root of the plugin source tree.
    dist_dir : str, default="dist"
        Directory beneath :attr:`workspace` that receives the staged tree.
    entry_point : str, default="index.js"
        Transpiled entry point that must exist before staging.
    manifest_name : str, default="package.json"
        Project manifest read from the workspace and rewritten when staged.
    inputs : list[CopySpec]
        Ordered inputs copied into the staging directory.
    exclusions : list[ExclusionRule]
        Rules applied to every entry visited while copying directories.
    manifest_fields : tuple[str, ...]
        Whitelist of manifest keys kept in the staged manifest.
    archive_root : str, default="dist"
        Directory name the staged tree is stored under inside the archive.
    readme_name : str, default="README.txt"
        Name of the generated installation document inside the archive.
    host_name : str, default="poi"
        Host application the plugin is installed into.
    host_homepage : str
        Link printed at the end of the installation document.
    host_plugin_dirs : dict[str, str]
        Typical host plugin directories keyed by operating system.

    Examples
    --------
    >>> config = PackagingConfig(workspace=Path("/tmp/plugin"))
    >>> config.staging_dir()
    PosixPath('/tmp/plugin/dist')
    >>> config.archive_path("poi-plugin-demo", "1.0.0").name
    'poi-plugin-demo-1.0.0.zip'
    """

    workspace: Path
    dist_dir: str = "dist"
    entry_point: str = "index.js"
    manifest_name: str = "package.json"
    inputs: list[CopySpec] = dataclasses.field(default_factory=_default_inputs)
    exclusions: list[ExclusionRule] = dataclasses.field(
        default_factory=lambda: list(DEFAULT_EXCLUSIONS)
    )
    manifest_fields: tuple[str, ...] = MANIFEST_FIELDS
    archive_root: str = "dist"
    readme_name: str = "README.txt"
    host_name: str = "poi"
    host_homepage: str = "https://github.com/poooi/poi"
    host_plugin_dirs: dict[str, str] = dataclasses.field(
        default_factory=lambda: dict(DEFAULT_HOST_PLUGIN_DIRS)
    )

    def staging_dir(self) -> Path:
        """Return the absolute staging directory path."""
        return self.workspace / self.dist_dir

    def source_path(self, relative: str) -> Path:
        return self.workspace / relative

    def entry_point_path(self) -> Path:
        return self.workspace / self.entry_point

    def manifest_path(self) -> Path:
        return self.workspace / self.manifest_name

    def staged_manifest_path(self) -> Path:
        return self.staging_dir() / self.manifest_name

    def archive_path(self, name: str, version: str) -> Path:
        """Return where the archive for ``name`` at ``version`` is written."""
        return self.workspace / archive_file_name(name, version)


def archive_file_name(name: str, version: str, ext: str = "zip") -> str:
    """Return ``<name>-<version>.<ext>`` with npm-style scope flattening.

    Examples
    --------
    >>> archive_file_name("@poi/plugin", "2.0.1")
    'poi-plugin-2.0.1.zip'
    """
    flat_name = name.removeprefix("@").replace("/", "-")
    return f"{flat_name}-{version}.{ext}"


def load_config(workspace: Path, config_file: Path | None = None) -> PackagingConfig:
    """Load the packaging configuration for ``workspace``.

    Parameters
    ----------
    workspace : Path
        Root of the plugin source tree.
    config_file : Path | None, optional
        TOML file with overrides. When omitted, ``release-packaging.toml`` in
        ``workspace`` is used if present and the defaults otherwise.

    Returns
    -------
    PackagingConfig
        Configuration with every path anchored at ``workspace``.

    Raises
    ------
    FileNotFoundError
        Raised when an explicit ``config_file`` does not exist.
    StageError
        Raised when the configuration file contains invalid entries.
    """
    workspace = Path(workspace)
    if config_file is None:
        candidate = workspace / CONFIG_FILE_NAME
        if not candidate.is_file():
            return PackagingConfig(workspace=workspace)
        config_file = candidate
    elif not config_file.is_file():
        message = f"Configuration file not found at {config_file}"
        raise FileNotFoundError(message)

    common = _load_toml(config_file).get("common", {})
    if not isinstance(common, dict):
        message = f"[common] must be a table in {config_file}"
        raise StageError(message)

    config = PackagingConfig(workspace=workspace)
    for key in ("dist_dir", "entry_point", "archive_root", "host_name"):
        if key in common:
            setattr(config, key, _require_str(common[key], key, config_file))
    if "inputs" in common:
        config.inputs = _make_inputs(common["inputs"], config_file)
    if "exclude" in common:
        config.exclusions = _make_exclusions(common["exclude"], config_file)
    return config


def _load_toml(path: Path) -> dict[str, typ.Any]:
    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        message = f"Invalid TOML in {path}: {exc}"
        raise StageError(message) from exc
    except OSError as exc:
        message = f"Failed to read {path}: {exc}"
        raise StageError(message) from exc


def _require_str(value: object, key: str, config_path: Path) -> str:
    if not isinstance(value, str) or not value:
        message = f"Key '{key}' must be a non-empty string in {config_path}"
        raise StageError(message)
    return value


def _make_inputs(entries: object, config_path: Path) -> list[CopySpec]:
    if not isinstance(entries, list) or not entries:
        message = f"No inputs configured to stage in {config_path}"
        raise StageError(message)
    inputs: list[CopySpec] = []
    for index, entry in enumerate(entries, start=1):
        if not isinstance(entry, dict):
            message = (
                "Input entries must be tables of key/value pairs "
                f"(entry #{index} in {config_path})"
            )
            raise StageError(message)
        path = entry.get("path")
        if not isinstance(path, str) or not path:
            message = (
                "Missing required input key 'path' "
                f"in entry #{index} of {config_path}"
            )
            raise StageError(message)
        try:
            kind = InputKind(entry.get("kind", InputKind.FILE.value))
        except ValueError as exc:
            message = (
                f"Unknown input kind {entry.get('kind')!r} "
                f"(entry #{index} in {config_path})"
            )
            raise StageError(message) from exc
        inputs.append(CopySpec(path, kind, bool(entry.get("required", True))))
    return inputs


def _make_exclusions(table: object, config_path: Path) -> list[ExclusionRule]:
    if not isinstance(table, dict):
        message = f"[common.exclude] must be a table in {config_path}"
        raise StageError(message)
    rules: list[ExclusionRule] = []
    for key, factory in (
        ("suffix", ExclusionRule.suffix),
        ("contains", ExclusionRule.substring),
    ):
        patterns = table.get(key, [])
        if not isinstance(patterns, list) or not all(
            isinstance(pattern, str) and pattern for pattern in patterns
        ):
            message = (
                f"Exclusion '{key}' must be a list of strings in {config_path}"
            )
            raise StageError(message)
        rules.extend(factory(pattern) for pattern in patterns)
    return rules
