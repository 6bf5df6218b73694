"""Exporters for converting a class map to autoload files."""

from .php_exporter import to_php
from .json_exporter import to_json, ExportError
from .target import get_autoload, get_target_fileinfo, FILETYPE_JSON, FILETYPE_PHP

__all__ = [
    "to_php",
    "to_json",
    "ExportError",
    "get_autoload",
    "get_target_fileinfo",
    "FILETYPE_JSON",
    "FILETYPE_PHP",
]
