"""Configuration management for the CLI."""

import os
from pathlib import Path
from typing import Any

import yaml

from bibsift.core.models import MAX_YEAR

DEFAULTS: dict[str, Any] = {
    "project": None,
    "format": "pretty",
    "languages": ["eng"],
    "ocr_languages": "eng",
    "search": {"start": 1, "end": MAX_YEAR},
}


class Config:
    """Configuration management for the CLI application."""

    @staticmethod
    def from_file(path: Path) -> dict[str, Any]:
        """Load configuration from a YAML file."""
        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in config file: {e}")
        except OSError as e:
            raise ValueError(f"Error reading config file: {e}")

        if not isinstance(data, dict):
            raise ValueError(f"Config file must contain a mapping: {path}")
        return data

    @staticmethod
    def get_config_paths() -> list[Path]:
        """Get the default configuration file paths to check."""
        paths = []

        # User config
        xdg_config_home = Path(
            os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")
        )
        paths.append(xdg_config_home / "bibsift" / "config.yaml")

        # Project config
        paths.append(Path(".bibsift.yaml"))
        paths.append(Path("bibsift.yaml"))

        return paths

    @staticmethod
    def merge_configs(*configs: dict[str, Any]) -> dict[str, Any]:
        """Merge multiple configuration dictionaries."""
        result: dict[str, Any] = {}
        for config in configs:
            result = _deep_merge(result, config)
        return result


def load_config(explicit: Path | None = None) -> dict[str, Any]:
    """Load configuration from defaults, files, and environment variables.

    Precedence, lowest first: built-in defaults, the default config paths,
    ``explicit``, then ``BIBSIFT_PROJECT`` / ``BIBSIFT_FORMAT``.

    Raises:
        ValueError: ``explicit`` cannot be read or parsed.
    """
    config = Config.merge_configs(DEFAULTS)

    for path in Config.get_config_paths():
        if path.exists():
            config = Config.merge_configs(config, Config.from_file(path))

    if explicit is not None:
        config = Config.merge_configs(config, Config.from_file(explicit))

    env_overrides: dict[str, Any] = {}
    if project := os.environ.get("BIBSIFT_PROJECT"):
        env_overrides["project"] = project
    if output_format := os.environ.get("BIBSIFT_FORMAT"):
        env_overrides["format"] = output_format

    return Config.merge_configs(config, env_overrides)


def get_setting(config: dict[str, Any], dotted_key: str, default: Any = None) -> Any:
    """Look up a dotted key such as ``search.start``."""
    value: Any = config
    for part in dotted_key.split("."):
        if not isinstance(value, dict) or part not in value:
            return default
        value = value[part]
    return value


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries."""
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value

    return result
