# Copyright 2026 restfile Contributors
# SPDX-License-Identifier: Apache-2.0

"""Data model and YAML loader for the optional ``.restfile.yaml`` configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml

from restfile.parser.parser import REST_FILE_EXTENSIONS
from restfile.parser.render import DEFAULT_SEPARATOR_WIDTH

# ###############
# Public Interface
# ###############

CONFIG_FILE_NAME = ".restfile.yaml"


class ConfigError(Exception):
    """Raised when a configuration file is invalid or cannot be loaded."""


@dataclass
class RestfileConfig:
    """Settings for discovering request files and rendering diagnostics.

    Attributes:
        file_extensions: Extensions (without dot) recognised as request files.
        separator_width: Width of the line between rendered diagnostics.
        color: Whether the CLI colorizes diagnostics.
    """

    file_extensions: list[str] = field(default_factory=lambda: list(REST_FILE_EXTENSIONS))
    separator_width: int = DEFAULT_SEPARATOR_WIDTH
    color: bool = True


def load_config(path: Path) -> RestfileConfig:
    """Load and parse a configuration file.

    Raises:
        ConfigError: If the file cannot be read or the configuration is invalid.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ConfigError(f"Config file not found: {path}") from None
    except OSError as exc:
        raise ConfigError(f"Cannot read config file: {exc}") from exc

    return _parse_config(text, source_label=str(path))


def find_config(directory: Path) -> RestfileConfig:
    """Return the configuration in *directory*, or the defaults if there is none.

    Raises:
        ConfigError: If a configuration file exists but is invalid.
    """
    path = directory / CONFIG_FILE_NAME
    if not path.exists():
        return RestfileConfig()
    return load_config(path)


# ################
# Implementation
# ################

_KNOWN_KEYS = frozenset({"file-extensions", "separator-width", "color"})


def _parse_config(text: str, source_label: str = "<string>") -> RestfileConfig:
    """Parse configuration YAML text into a RestfileConfig.

    An empty document yields the defaults.

    Raises:
        ConfigError: If the YAML is invalid or a field has the wrong type.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {source_label}: {exc}") from exc

    if data is None:
        return RestfileConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"{source_label}: config must be a YAML mapping")

    unknown = sorted(str(key) for key in data if key not in _KNOWN_KEYS)
    if unknown:
        raise ConfigError(f"{source_label}: unknown field(s) {', '.join(repr(key) for key in unknown)}")

    config = RestfileConfig()
    if "file-extensions" in data:
        config.file_extensions = _parse_extensions(data["file-extensions"], source_label)
    if "separator-width" in data:
        width = data["separator-width"]
        if isinstance(width, bool) or not isinstance(width, int) or width < 0:
            raise ConfigError(f"{source_label}: 'separator-width' must be a non-negative integer")
        config.separator_width = width
    if "color" in data:
        if not isinstance(data["color"], bool):
            raise ConfigError(f"{source_label}: 'color' must be a boolean")
        config.color = data["color"]
    return config


def _parse_extensions(value: object, source_label: str) -> list[str]:
    """Validate the extension list; a leading dot is accepted and dropped."""
    if not isinstance(value, list) or not value:
        raise ConfigError(f"{source_label}: 'file-extensions' must be a non-empty list")
    extensions: list[str] = []
    for index, entry in enumerate(value):
        if not isinstance(entry, str) or not entry.strip(".").strip():
            raise ConfigError(f"{source_label}: file-extensions[{index}] must be a non-empty string")
        extensions.append(entry.strip().lstrip("."))
    return extensions
