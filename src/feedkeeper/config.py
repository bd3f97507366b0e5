"""Configuration utilities for feedkeeper.

This module provides project-root discovery and the default location of
the feed cache.
"""

from __future__ import annotations

from pathlib import Path

from feedkeeper.core.cache_policy import DEFAULT_MAX_CACHE_AGE_DAYS
from feedkeeper.core.exceptions import ConfigurationError


STORE_PATH_ENVVAR = "FEEDKEEPER_STORE"
STORE_DIRNAME = ".feedkeeper"
STORE_FILENAME = "feed.json"

__all__ = [
    "DEFAULT_MAX_CACHE_AGE_DAYS",
    "STORE_DIRNAME",
    "STORE_FILENAME",
    "STORE_PATH_ENVVAR",
    "default_store_path",
    "find_project_root",
    "resolve_store_path",
]


def find_project_root(start: Path | None = None) -> Path:
    """Find the project root directory by walking up from start directory.

    Searches for marker files in the following priority order:
    1. .feedkeeper - Explicit project marker (directory holding the cache)
    2. pyproject.toml - Python project root
    3. .git - Version control root

    Args:
        start: Directory to start searching from. If None, uses current directory.

    Returns:
        Path to project root directory. Returns start directory if no markers found.
    """
    if start is None:
        start = Path.cwd()

    markers = [STORE_DIRNAME, "pyproject.toml", ".git"]
    current = start.resolve()

    for parent in [current, *current.parents]:
        for marker in markers:
            if (parent / marker).exists():
                return parent

    return start.resolve()


def default_store_path(root: Path | None = None) -> Path:
    """Default snapshot file for a project.

    Args:
        root: Project root. If None, discovered from the current directory.

    Returns:
        ``<root>/.feedkeeper/feed.json``
    """
    if root is None:
        root = find_project_root()
    return root / STORE_DIRNAME / STORE_FILENAME


def resolve_store_path(
    value: str | Path | None = None, root: Path | None = None
) -> Path:
    """Resolve a user-supplied store path, falling back to the default.

    Args:
        value: Explicit path (from --store or FEEDKEEPER_STORE), or None.
        root: Project root used for the default location.

    Returns:
        Path of the snapshot file.

    Raises:
        ConfigurationError: If value is blank or names a directory.
    """
    if value is None:
        return default_store_path(root)
    if not str(value).strip():
        raise ConfigurationError("Store path cannot be empty")

    path = Path(value).expanduser()
    if path.is_dir():
        raise ConfigurationError(f"Store path {path} is a directory, expected a file")
    return path
