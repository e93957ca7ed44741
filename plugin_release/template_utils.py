"""Installation document bundled with every release archive."""

from __future__ import annotations

import typing as typ

from .config import archive_file_name
from .errors import StageError

if typ.TYPE_CHECKING:
    from .config import PackagingConfig
    from .manifest import ArchiveMetadata

__all__ = ["INSTALL_README_TEMPLATE", "render_install_readme", "render_template"]

INSTALL_README_TEMPLATE = """\
# {name} v{version}

## Installation

### Manual Installation

1. Extract this ZIP file
2. Copy the contents of the `{root}/` directory to your {host} plugins directory:

```bash
# macOS / Linux
cp -r {root}/* /path/to/{host}/node_modules/{name}/

# Windows
xcopy {root}\\* \\path\\to\\{host}\\node_modules\\{windows_name}\\ /E /I
```

3. Restart {host}

### Finding {host} plugins directory

The plugins directory is typically located at:
{plugin_dirs}

If you installed {host} from source or npm, the path might be different.

## Alternative: npm Installation

If you have the .tgz file instead, you can install via npm:

```bash
cd /path/to/{host}
npm install /path/to/{tarball}
```

---

For more information, visit: {homepage}
"""


def render_template(template: str, context: dict[str, typ.Any]) -> str:
    """Return ``template`` formatted with ``context``."""

    try:
        return template.format(**context)
    except KeyError as exc:
        message = f"Invalid template key {exc} in installation document"
        raise StageError(message) from exc


def render_install_readme(metadata: ArchiveMetadata, config: PackagingConfig) -> str:
    """Return the installation instructions for ``metadata``.

    Examples
    --------
    >>> from pathlib import Path
    >>> from plugin_release.config import PackagingConfig
    >>> from plugin_release.manifest import ArchiveMetadata
    >>> text = render_install_readme(
    ...     ArchiveMetadata("poi-plugin-demo", "1.0.0"),
    ...     PackagingConfig(workspace=Path(".")),
    ... )
    >>> text.splitlines()[0]
    '# poi-plugin-demo v1.0.0'
    """

    plugin_dirs = "\n".join(
        f"- **{system}**: `{path}`" for system, path in config.host_plugin_dirs.items()
    )
    context = {
        "name": metadata.name,
        "windows_name": metadata.name.replace("/", "\\"),
        "version": metadata.version,
        "root": config.archive_root,
        "host": config.host_name,
        "plugin_dirs": plugin_dirs,
        "tarball": archive_file_name(metadata.name, metadata.version, "tgz"),
        "homepage": config.host_homepage,
    }
    return render_template(INSTALL_README_TEMPLATE, context)
