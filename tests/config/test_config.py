# Copyright 2026 restfile Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the restfile configuration module."""

from pathlib import Path

import pytest

from restfile.config import CONFIG_FILE_NAME, ConfigError, RestfileConfig, find_config, load_config

# ###############
# Helpers
# ###############


def _write_config(tmp_path: Path, content: str) -> Path:
    """Write a config file and return its path."""
    config_file = tmp_path / CONFIG_FILE_NAME
    config_file.write_text(content, encoding="utf-8")
    return config_file


# ###############
# Normal Cases
# ###############


def test_defaults() -> None:
    config = RestfileConfig()
    assert config.file_extensions == ["http", "rest"]
    assert config.separator_width == 50
    assert config.color is True


def test_full_config(tmp_path: Path) -> None:
    content = """\
file-extensions: [http, rest, req]
separator-width: 72
color: false
"""
    config = load_config(_write_config(tmp_path, content))
    assert config.file_extensions == ["http", "rest", "req"]
    assert config.separator_width == 72
    assert config.color is False


def test_partial_config_keeps_defaults(tmp_path: Path) -> None:
    config = load_config(_write_config(tmp_path, "color: false\n"))
    assert config.file_extensions == ["http", "rest"]
    assert config.separator_width == 50
    assert config.color is False


def test_empty_file_yields_defaults(tmp_path: Path) -> None:
    assert load_config(_write_config(tmp_path, "")) == RestfileConfig()


def test_leading_dot_in_extension_is_dropped(tmp_path: Path) -> None:
    config = load_config(_write_config(tmp_path, "file-extensions: ['.http']\n"))
    assert config.file_extensions == ["http"]


def test_find_config_without_file(tmp_path: Path) -> None:
    assert find_config(tmp_path) == RestfileConfig()


def test_find_config_with_file(tmp_path: Path) -> None:
    _write_config(tmp_path, "separator-width: 10\n")
    assert find_config(tmp_path).separator_width == 10


# ###############
# Error Cases
# ###############


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="not found"):
        load_config(tmp_path / "missing.yaml")


def test_invalid_yaml(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="Invalid YAML"):
        load_config(_write_config(tmp_path, "color: [unclosed\n"))


def test_not_a_mapping(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="mapping"):
        load_config(_write_config(tmp_path, "- http\n- rest\n"))


def test_unknown_key(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="unknown field"):
        load_config(_write_config(tmp_path, "colour: true\n"))


@pytest.mark.parametrize(
    "content",
    [
        "file-extensions: http\n",
        "file-extensions: []\n",
        "file-extensions: ['']\n",
        "file-extensions: [1]\n",
    ],
)
def test_invalid_extensions(tmp_path: Path, content: str) -> None:
    with pytest.raises(ConfigError, match="file-extensions"):
        load_config(_write_config(tmp_path, content))


@pytest.mark.parametrize("content", ["separator-width: -1\n", "separator-width: wide\n", "separator-width: true\n"])
def test_invalid_separator_width(tmp_path: Path, content: str) -> None:
    with pytest.raises(ConfigError, match="separator-width"):
        load_config(_write_config(tmp_path, content))


def test_invalid_color(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="color"):
        load_config(_write_config(tmp_path, "color: yes please\n"))
