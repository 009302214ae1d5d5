"""
Parse Options Configuration Loader
==================================

Loads ParseOptions from a project's config file. Supports JSON and YAML.

Configuration files searched in order:
1. requiredeps.json
2. requiredeps.yaml
3. requiredeps.yml

Project configuration merges with defaults, with project settings
taking precedence.

Usage:
    from requiredeps.config import load_parse_options

    options = load_parse_options(project_dir=Path("/path/to/project"))
    if options.comment_require:
        ...
"""

from __future__ import annotations

import json
import logging
from dataclasses import replace
from pathlib import Path
from typing import Any

import yaml

from .models import ParseOptions

logger = logging.getLogger(__name__)


# =============================================================================
# CONFIG FILE NAMES
# =============================================================================

CONFIG_FILENAMES = [
    "requiredeps.json",
    "requiredeps.yaml",
    "requiredeps.yml",
]


# =============================================================================
# CONFIG LOADER
# =============================================================================

class ParseConfigLoader:
    """
    Loads ParseOptions from a project directory.

    Attributes:
        project_dir: Directory searched for a config file
        config_file: Path to the config file (if found)
        options: Loaded options
    """

    def __init__(self, project_dir: Path | str):
        """
        Initialize config loader.

        Args:
            project_dir: Directory searched for a config file
        """
        self.project_dir = Path(project_dir).resolve()
        self.config_file: Path | None = None
        self.options: ParseOptions | None = None

    def load(self) -> ParseOptions:
        """
        Load options, falling back to defaults when no config file exists.

        Returns:
            ParseOptions with defaults merged with project config

        Raises:
            ValueError: If the config file is unreadable, malformed or invalid
        """
        self.config_file = self._find_config_file()

        if self.config_file is None:
            logger.debug("No config file in %s, using defaults", self.project_dir)
            self.options = ParseOptions()
            return self.options

        config_data = self._read_config_file(self.config_file)

        validation_errors = self._validate_config(config_data)
        if validation_errors:
            error_msg = f"Config validation errors in {self.config_file.name}:\n"
            error_msg += "\n".join(f"  - {err}" for err in validation_errors)
            raise ValueError(error_msg)

        self.options = ParseOptions.from_dict(config_data)
        logger.debug("Loaded options from %s", self.config_file)
        return self.options

    def has_config_file(self) -> bool:
        """Check if a config file was found."""
        return self.config_file is not None

    def _find_config_file(self) -> Path | None:
        """Find the first existing config file."""
        for filename in CONFIG_FILENAMES:
            config_path = self.project_dir / filename
            if config_path.is_file():
                return config_path
        return None

    def _read_config_file(self, config_path: Path) -> Any:
        """
        Read and parse config file based on extension.

        Raises:
            ValueError: If the file cannot be read or parsed
        """
        suffix = config_path.suffix.lower()

        try:
            with open(config_path, encoding="utf-8") as f:
                if suffix == ".json":
                    return json.load(f)
                return yaml.safe_load(f) or {}
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise ValueError(f"Invalid {suffix.lstrip('.').upper()} in {config_path.name}: {e}") from e
        except OSError as e:
            raise ValueError(f"Failed to read {config_path.name}: {e}") from e

    def _validate_config(self, config_data: Any) -> list[str]:
        """
        Validate config data.

        Returns:
            List of validation error messages (empty if valid)
        """
        if not isinstance(config_data, dict):
            return ["Config must be an object"]

        errors = []

        valid_keys = set(ParseOptions.option_names())
        unknown_keys = set(config_data.keys()) - valid_keys
        if unknown_keys:
            errors.append(f"Unknown keys: {', '.join(sorted(map(str, unknown_keys)))}")

        for key in ParseOptions.option_names():
            if key in config_data and not isinstance(config_data[key], bool):
                errors.append(f"'{key}' must be a boolean")

        return errors


# =============================================================================
# CONFIG CACHE
# =============================================================================

_config_cache: dict[str, ParseOptions] = {}


def load_parse_options(project_dir: Path | str) -> ParseOptions:
    """
    Load options for a project, cached by resolved directory.

    Raises:
        ValueError: If the config file is invalid
    """
    cache_key = str(Path(project_dir).resolve())
    if cache_key not in _config_cache:
        _config_cache[cache_key] = ParseConfigLoader(cache_key).load()
    return replace(_config_cache[cache_key])


def clear_config_cache() -> None:
    """Forget every cached project configuration."""
    _config_cache.clear()
