"""Selection of the file an autoload map is written to."""

import os
from typing import NamedTuple

from classmap.model import ClassMap
from .json_exporter import to_json
from .php_exporter import to_php


FILETYPE_JSON = "json"
FILETYPE_PHP = "php"

# Registration files checked in order before falling back to autoload.php
REGISTRATION_FILES = ("extension.json", "skin.json")


class TargetFile(NamedTuple):
    filename: str
    type: str


def get_target_fileinfo(basepath: str) -> TargetFile:
    """
    Find the file the autoload information belongs in.

    Returns extension.json or skin.json if the project has one, otherwise
    the autoload.php file in the basepath.
    """
    for name in REGISTRATION_FILES:
        filename = os.path.join(basepath, name)
        if os.path.exists(filename):
            return TargetFile(filename, FILETYPE_JSON)
    return TargetFile(os.path.join(basepath, "autoload.php"), FILETYPE_PHP)


def get_autoload(class_map: ClassMap, command_name: str = "AutoloadGenerator") -> str:
    """
    Render all known classes for the project's target file.

    Args:
        class_map: The class map to render.
        command_name: Value used in the file comment to direct developers
                      towards the appropriate way to update the autoload.

    Returns:
        New contents of the target file.
    """
    fileinfo = get_target_fileinfo(class_map.basepath)
    if fileinfo.type == FILETYPE_JSON:
        return to_json(class_map, fileinfo.filename)
    return to_php(class_map, command_name)
