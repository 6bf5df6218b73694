"""Scanner module for PHP file discovery and class detection."""

from .discovery import iter_files
from .lexer import tokenize
from .collector import collect_classes, get_classes
from .resolver import PathError
from .builder import build_class_map, read_file, read_dir, force_class_path

__all__ = [
    "iter_files",
    "tokenize",
    "collect_classes",
    "get_classes",
    "PathError",
    "build_class_map",
    "read_file",
    "read_dir",
    "force_class_path",
]
