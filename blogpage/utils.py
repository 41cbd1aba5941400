"""Utility functions for blogpage."""

import os
import posixpath
import re
from pathlib import Path
from typing import Any, Generator, List, Optional

from slugify import slugify


def normalize_path(path: str) -> str:
    """Normalize a destination path.

    Collapses duplicate slashes, resolves ``.`` and ``..`` segments (never
    above the root) and guarantees a single leading slash. A trailing slash
    is kept because it marks a directory-style permalink.

    Args:
        path: Path string to normalize

    Returns:
        Normalized path string
    """
    if not path:
        return "/"

    path = path.replace("\\", "/")
    keep_trailing_slash = path.endswith("/")

    normalized = posixpath.normpath("/" + path.lstrip("/"))
    # normpath leaves a leading "//" alone
    normalized = "/" + normalized.lstrip("/")

    if keep_trailing_slash and normalized != "/":
        normalized += "/"
    return normalized


def parameterize(value: Any) -> str:
    """Convert a front matter value to a URL-safe permalink component.

    Args:
        value: Value to convert, stringified when it is not a string

    Returns:
        Lowercase slug with non-alphanumeric runs collapsed to "-"
    """
    return slugify(str(value))


def yield_files(
    dir_path: Path,
    excludes: Optional[List[str]] = None,
) -> Generator[Path, None, None]:
    """Yield files from a directory, recursively.

    Args:
        dir_path: Directory path to scan
        excludes: List of regex patterns to exclude

    Yields:
        Path objects for each matching file, in sorted order
    """
    if excludes is None:
        excludes = []

    for entry in sorted(os.scandir(dir_path), key=lambda e: e.name):
        if _should_exclude_path(entry.name, excludes):
            continue

        if entry.is_file():
            yield Path(entry.path)

        elif entry.is_dir():
            yield from yield_files(Path(entry.path), excludes)


def _should_exclude_path(name: str, exclude_patterns: List[str]) -> bool:
    """Check if a path should be excluded based on patterns.

    Args:
        name: Path name to check
        exclude_patterns: List of regex patterns

    Returns:
        True if path should be excluded
    """
    return any(re.search(pattern, name) for pattern in exclude_patterns)
