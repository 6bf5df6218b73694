"""JSON exporter updating extension.json and skin.json registration files."""

import json
from pathlib import Path
from typing import Any, Dict

from classmap.model import ClassMap


AUTOLOAD_KEY = "AutoloadClasses"


class ExportError(ValueError):
    """Raised when an existing registration file cannot be updated."""


def to_json(class_map: ClassMap, filename: Path) -> str:
    """
    Update the AutoloadClasses field of a registration file.

    The existing field is dropped and rebuilt from the class map, mapping
    class names to paths relative to the file (without a leading "/").

    Args:
        class_map: The class map to export.
        filename: Path of the extension.json or skin.json file.

    Returns:
        The whole updated JSON document.

    Raises:
        ExportError: If the file does not hold a JSON object.
    """
    try:
        data = json.loads(Path(filename).read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ExportError(f"Invalid JSON in {filename}: {e}") from e
    if not isinstance(data, dict):
        raise ExportError(f"Expected a JSON object in {filename}")

    data.pop(AUTOLOAD_KEY, None)
    autoload: Dict[str, Any] = {
        fqcn: path[1:] if path.startswith("/") else path
        for fqcn, path in class_map.entries().items()
    }
    if autoload:
        data[AUTOLOAD_KEY] = autoload

    return json.dumps(data, indent="\t", ensure_ascii=False) + "\n"
