"""Class map builder that orchestrates file discovery and class detection."""

import glob
import logging
import os
from pathlib import Path
from typing import Dict, Iterable, Optional, Set

from classmap.model import ClassMap
from .collector import get_classes
from .discovery import iter_files, DEFAULT_EXCLUDE_DIRS
from .resolver import PathError, get_short_path, normalize_path_separator, real_path

logger = logging.getLogger(__name__)

# Sources of the MediaWiki core autoloader, relative to the basepath
MEDIAWIKI_DEFAULT_DIRS = ("includes", "languages", "maintenance", "mw-config")


def create_class_map(basepath, local: bool = False) -> ClassMap:
    """
    Create an empty class map for a project.

    Args:
        basepath: Root path of the project being scanned for classes.
        local: Build $wgAutoloadLocalClasses instead of $wgAutoloadClasses.

    Raises:
        PathError: If the basepath does not exist.
    """
    resolved = real_path(basepath)
    if resolved is None:
        raise PathError(f"Invalid path: {basepath}")
    return ClassMap(resolved, local=local)


def read_file(class_map: ClassMap, input_path) -> None:
    """
    Detect the classes in a PHP file and add them to the class map.

    The path is deliberately not expanded with realpath: it is perfectly
    reasonable for LocalSettings.php and similar files to be symlinks to
    files outside of the basepath.

    Raises:
        PathError: If the path is not within the basepath.
    """
    input_path = normalize_path_separator(input_path)
    shortpath = get_short_path(input_path, class_map.basepath)
    code = Path(input_path).read_text(encoding="utf-8", errors="replace")
    result = get_classes(code)
    logger.debug("%s: %d classes", shortpath, len(result))
    if result:
        class_map.add_file(shortpath, result)


def read_dir(
    class_map: ClassMap,
    directory,
    exclude_dirs: Optional[Set[str]] = None,
) -> None:
    """
    Recursively read every .php and .inc file below a directory.

    Raises:
        PathError: If the directory does not exist or lies outside the basepath.
    """
    resolved = real_path(directory)
    if resolved is None:
        raise PathError(f"Invalid path: {directory}")
    for file_path in iter_files(Path(resolved), exclude_dirs=exclude_dirs):
        read_file(class_map, file_path)


def force_class_path(class_map: ClassMap, fqcn: str, input_path) -> None:
    """
    Force a class to be autoloaded from a specific path, regardless of where
    or if it was detected.

    Args:
        class_map: The class map to update.
        fqcn: FQCN to force the location of.
        input_path: Path to the file containing the class.

    Raises:
        PathError: If the path does not exist or is not within the basepath.
    """
    path = real_path(input_path)
    if path is None:
        raise PathError(f"Invalid path: {input_path}")
    try:
        shortpath = get_short_path(path, class_map.basepath)
    except PathError:
        raise PathError(f"Path is not within basepath: {input_path}") from None
    class_map.add_override(fqcn, shortpath)


def init_mediawiki_default(class_map: ClassMap, exclude_dirs: Optional[Set[str]] = None) -> None:
    """
    Read the sources used for the MediaWiki default autoloader in
    {mw-base-dir}/autoload.php: includes/, languages/, maintenance/,
    mw-config/ and /*.php.
    """
    for name in MEDIAWIKI_DEFAULT_DIRS:
        directory = os.path.join(class_map.basepath, name)
        if not os.path.isdir(directory):
            logger.warning("Skipping missing directory: %s", directory)
            continue
        read_dir(class_map, directory, exclude_dirs=exclude_dirs)
    for file_path in sorted(glob.glob(os.path.join(class_map.basepath, "*.php"))):
        read_file(class_map, file_path)


def build_class_map(
    basepath,
    dirs: Iterable = (),
    files: Iterable = (),
    overrides: Optional[Dict[str, str]] = None,
    local: bool = False,
    mediawiki_default: bool = False,
    exclude_dirs: Optional[Set[str]] = None,
) -> ClassMap:
    """
    Scan a project and build its class map.

    Relative directory, file and override paths are taken relative to the
    basepath.

    Args:
        basepath: Root path of the project.
        dirs: Directories to scan recursively.
        files: Individual PHP files to scan.
        overrides: FQCN -> path of classes with a forced location.
        local: Build $wgAutoloadLocalClasses instead of $wgAutoloadClasses.
        mediawiki_default: Also read the MediaWiki core default sources.
        exclude_dirs: Directory names to skip while scanning directories.

    Returns:
        ClassMap containing every detected class and override.

    Raises:
        PathError: If a path does not exist or lies outside the basepath.
    """
    class_map = create_class_map(basepath, local=local)
    root = Path(class_map.basepath)
    if exclude_dirs is None:
        exclude_dirs = DEFAULT_EXCLUDE_DIRS

    if mediawiki_default:
        init_mediawiki_default(class_map, exclude_dirs=exclude_dirs)
    for directory in dirs:
        read_dir(class_map, root / directory, exclude_dirs=exclude_dirs)
    for file_path in files:
        read_file(class_map, root / file_path)
    for fqcn, file_path in (overrides or {}).items():
        force_class_path(class_map, fqcn, root / file_path)

    logger.debug("Built %r", class_map)
    return class_map
