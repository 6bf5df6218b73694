"""Generator configuration files (YAML, TOML or JSON)."""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

try:
    import yaml
    HAS_YAML = True
except ImportError:
    HAS_YAML = False

try:
    import tomllib
except ImportError:
    try:
        import toml as tomllib  # type: ignore
        HAS_TOML = True
    except ImportError:
        HAS_TOML = False
else:
    HAS_TOML = True


DEFAULT_COMMAND_NAME = "AutoloadGenerator"

LIST_KEYS = {"dirs", "files", "exclude_dirs"}
BOOL_KEYS = {"local", "mediawiki_default"}


class ConfigError(ValueError):
    """Raised when a configuration file cannot be read or is invalid."""


@dataclass
class GeneratorConfig:
    """Sources and options for one generator run."""

    dirs: List[str] = field(default_factory=list)
    files: List[str] = field(default_factory=list)
    overrides: Dict[str, str] = field(default_factory=dict)
    exclude_dirs: List[str] = field(default_factory=list)
    local: bool = False
    mediawiki_default: bool = False
    command_name: str = DEFAULT_COMMAND_NAME

    def has_sources(self) -> bool:
        """Check if any directory, file or default set is configured."""
        return bool(self.dirs or self.files or self.mediawiki_default)


def _load_yaml(content: str) -> Optional[Any]:
    if not HAS_YAML:
        return None
    return yaml.safe_load(content)


def _load_toml(content: str) -> Optional[Any]:
    if not HAS_TOML:
        return None
    return tomllib.loads(content)


def _load_json_or_yaml(content: str) -> Optional[Any]:
    try:
        return json.loads(content)
    except json.JSONDecodeError:
        return _load_yaml(content)


LOADERS = {
    ".yaml": _load_yaml,
    ".yml": _load_yaml,
    ".toml": _load_toml,
    ".json": json.loads,
}

# Decode errors of json, tomllib and toml all derive from ValueError
PARSE_ERRORS = (ValueError, yaml.YAMLError) if HAS_YAML else (ValueError,)


def parse_file(file_path: Path) -> Optional[Any]:
    """
    Parse a configuration file, choosing the format by suffix.

    Files with any other suffix are tried as JSON, then as YAML.

    Returns:
        Parsed data structure, or None if the file cannot be read or parsed.
    """
    loader = LOADERS.get(file_path.suffix.lower(), _load_json_or_yaml)
    try:
        return loader(file_path.read_text(encoding="utf-8"))
    except (OSError, *PARSE_ERRORS):
        return None


def load_config(file_path: Path) -> GeneratorConfig:
    """
    Load generator options from a configuration file.

    Example (YAML)::

        dirs: [includes, maintenance]
        files: [index.php]
        local: true
        overrides:
          Foo\\Bar: includes/compat/Bar.php

    Args:
        file_path: Path to a .yaml, .yml, .toml or .json file.

    Returns:
        The parsed configuration.

    Raises:
        ConfigError: If the file cannot be parsed or holds invalid options.
    """
    data = parse_file(file_path)
    if data is None:
        raise ConfigError(f"Cannot parse configuration file: {file_path}")
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration must be a mapping: {file_path}")

    config = GeneratorConfig()
    for key, value in data.items():
        if key in LIST_KEYS:
            if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                raise ConfigError(f"'{key}' must be a list of strings")
            setattr(config, key, list(value))
        elif key in BOOL_KEYS:
            if not isinstance(value, bool):
                raise ConfigError(f"'{key}' must be true or false")
            setattr(config, key, value)
        elif key == "overrides":
            if not isinstance(value, dict) or not all(
                isinstance(k, str) and isinstance(v, str) for k, v in value.items()
            ):
                raise ConfigError("'overrides' must map class names to paths")
            config.overrides = dict(value)
        elif key == "command_name":
            if not isinstance(value, str):
                raise ConfigError("'command_name' must be a string")
            config.command_name = value
        else:
            raise ConfigError(f"Unknown configuration key: '{key}'")

    return config
