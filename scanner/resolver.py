"""Path utilities for mapping scanned files to paths relative to the basepath."""

import os
from pathlib import Path
from typing import Optional, Union


PathLike = Union[str, Path]


class PathError(ValueError):
    """Raised when a path does not exist or lies outside of the basepath."""


def normalize_path_separator(path: PathLike) -> str:
    """Ensure that Unix-style path separators ("/") are used in the path."""
    return str(path).replace("\\", "/")


def real_path(path: PathLike) -> Optional[str]:
    """
    Resolve a path to its absolute, symlink-free form.

    Args:
        path: The path to resolve.

    Returns:
        Normalized absolute path, or None if nothing exists at that path.
    """
    if not os.path.exists(path):
        return None
    return normalize_path_separator(os.path.realpath(path))


def get_short_path(path: PathLike, basepath: str) -> str:
    """
    Get the part of a path following the basepath.

    The check is a plain prefix test on normalized paths, so the result
    keeps its leading "/" (e.g. "/includes/Foo.php").

    Args:
        path: The path of a file inside the basepath.
        basepath: Normalized root path of the project.

    Returns:
        The path relative to the basepath.

    Raises:
        PathError: If the path does not start with the basepath.
    """
    normalized = normalize_path_separator(path)
    if not normalized.startswith(basepath):
        raise PathError(f"Path is not within basepath: {path}")
    return normalized[len(basepath):]
