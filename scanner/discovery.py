"""Discovery of PHP source files below a directory."""

from pathlib import Path
from typing import Iterator, Optional, Set


# Some older files in MediaWiki use .inc
PHP_EXTENSIONS = {".php", ".inc"}
DEFAULT_EXCLUDE_DIRS = {".git", ".hg", ".svn"}


def is_excluded(name: str, exclude_dirs: Set[str]) -> bool:
    """
    Check a directory name against exclusion patterns.

    A pattern starting with "*" matches any name ending in the rest of the
    pattern; other patterns match the whole name.
    """
    for pattern in exclude_dirs:
        if pattern.startswith("*"):
            if name.endswith(pattern[1:]):
                return True
        elif name == pattern:
            return True
    return False


def iter_files(root: Path, exclude_dirs: Optional[Set[str]] = None) -> Iterator[Path]:
    """
    Iterate over .php and .inc files in a directory tree.

    Entries are visited in sorted order, so the same tree always yields the
    same sequence. Directories that cannot be listed are skipped.

    Args:
        root: Root directory to scan.
        exclude_dirs: Directory names to skip. If None, uses
                     DEFAULT_EXCLUDE_DIRS.
    """
    if exclude_dirs is None:
        exclude_dirs = DEFAULT_EXCLUDE_DIRS

    try:
        entries = sorted(Path(root).iterdir())
    except PermissionError:
        return

    for entry in entries:
        if entry.is_dir():
            if not is_excluded(entry.name, exclude_dirs):
                yield from iter_files(entry, exclude_dirs)
        elif entry.is_file() and entry.suffix.lower() in PHP_EXTENSIONS:
            yield entry
