"""Manifest reading for profile entries.

A project manifest (package.json) sitting in a task's working directory
names the package the task belongs to. The name is display-only, so a
missing manifest is not an error.
"""

import json
from pathlib import Path

from core.trace.errors import ManifestError
from observability.logger import get_logger

logger = get_logger(__name__)

DEFAULT_MANIFEST_NAME = "package.json"


def read_package_name(
    directory: str | Path,
    manifest_name: str = DEFAULT_MANIFEST_NAME,
    strict: bool = False,
) -> str | None:
    """Read the package name from the manifest in a directory.

    Args:
        directory: Directory expected to hold the manifest.
        manifest_name: File name of the manifest.
        strict: Raise on unreadable or invalid manifests instead of
            logging a warning.

    Returns:
        The manifest's "name" string, or None if there is no manifest
        or it carries no string name.

    Raises:
        ManifestError: If strict and the manifest cannot be read or parsed.
    """
    path = Path(directory) / manifest_name
    if not path.is_file():
        return None

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        if strict:
            raise ManifestError(f"Invalid manifest {path}: {e}", path) from e
        logger.warning(f"Ignoring unreadable manifest {path}: {e}")
        return None

    if not isinstance(data, dict):
        return None
    name = data.get("name")
    return name if isinstance(name, str) else None
