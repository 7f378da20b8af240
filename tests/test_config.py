"""Tests for config file loading and merging."""

from __future__ import annotations

from pathlib import Path

import pytest

from codestitch.config import (
    CodestitchConfig,
    Settings,
    find_config_file,
    load_config,
    load_settings,
)
from codestitch.discovery.defaults import SUPPORTED_EXTENSIONS
from codestitch.errors import ConfigParseError


def test_find_config_codestitch_toml(tmp_path: Path) -> None:
    config_file = tmp_path / "codestitch.toml"
    config_file.write_text("[discovery]\nmax-depth = 5\n")
    result = find_config_file(tmp_path)
    assert result == config_file


def test_find_config_dot_codestitch_toml_takes_precedence(tmp_path: Path) -> None:
    (tmp_path / "codestitch.toml").write_text("[discovery]\nmax-depth = 5\n")
    dot_config = tmp_path / ".codestitch.toml"
    dot_config.write_text("[discovery]\nmax-depth = 3\n")
    result = find_config_file(tmp_path)
    assert result == dot_config


def test_find_config_pyproject_toml(tmp_path: Path) -> None:
    config_file = tmp_path / "pyproject.toml"
    config_file.write_text("[tool.codestitch]\nmax-files = 100\n")
    result = find_config_file(tmp_path)
    assert result == config_file


def test_find_config_pyproject_without_section_skipped(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text("[tool.ruff]\nline-length = 100\n")
    result = find_config_file(tmp_path)
    assert result is None


def test_find_config_walks_up(tmp_path: Path) -> None:
    config_file = tmp_path / "codestitch.toml"
    config_file.write_text("[discovery]\nmax-depth = 5\n")
    subdir = tmp_path / "sub" / "deep"
    subdir.mkdir(parents=True)
    result = find_config_file(subdir)
    assert result == config_file


def test_find_config_none_when_missing(tmp_path: Path) -> None:
    result = find_config_file(tmp_path)
    assert result is None


def test_load_config_codestitch_toml(tmp_path: Path) -> None:
    config_file = tmp_path / "codestitch.toml"
    config_file.write_text('[discovery]\nmax-depth = 5\npresets = ["tests", "configs"]\n')
    config = load_config(config_file)
    assert config.max_depth == 5
    assert config.presets == ["tests", "configs"]
    # Unset fields should be None (not set)
    assert config.ignore is None
    assert config.chars_per_token is None


def test_load_config_pyproject_toml(tmp_path: Path) -> None:
    config_file = tmp_path / "pyproject.toml"
    config_file.write_text('[tool.codestitch]\nmax-files = 100\nignore = ["*.stories.tsx"]\n')
    config = load_config(config_file)
    assert config.max_files == 100
    assert config.ignore == ["*.stories.tsx"]


def test_load_config_kebab_case_sections(tmp_path: Path) -> None:
    config_file = tmp_path / "codestitch.toml"
    config_file.write_text(
        "[discovery]\n"
        'extensions = ["ts", ".TSX"]\n'
        "respect-gitignore = false\n"
        "\n"
        "[resolution]\n"
        'source-root-prefix = "app/"\n'
        "\n"
        "[stats]\n"
        "chars-per-token = 3\n"
        "cost-per-1k-tokens = 0.01\n"
    )
    config = load_config(config_file)
    assert config.extensions == ["ts", ".TSX"]
    assert config.respect_gitignore is False
    assert config.source_root_prefix == "app/"
    assert config.chars_per_token == 3
    assert config.cost_per_1k_tokens == 0.01


def test_load_config_unknown_keys_ignored(tmp_path: Path) -> None:
    config_file = tmp_path / "codestitch.toml"
    config_file.write_text("width = 88\n[discovery]\nmax-depth = 4\n")
    config = load_config(config_file)
    assert config == CodestitchConfig(max_depth=4)


def test_load_config_invalid_toml(tmp_path: Path) -> None:
    config_file = tmp_path / "codestitch.toml"
    config_file.write_text("[discovery\nmax-depth = \n")
    with pytest.raises(ConfigParseError):
        load_config(config_file)


def test_settings_defaults() -> None:
    settings = Settings.from_config(None)
    assert settings.extensions == list(SUPPORTED_EXTENSIONS)
    assert settings.respect_gitignore is True
    assert settings.max_depth == 20
    assert settings.max_files == 10_000
    assert settings.source_root_prefix == "src/"
    assert settings.chars_per_token == 4


def test_settings_config_overrides_defaults() -> None:
    config = CodestitchConfig(max_depth=3, extensions=["TS", "js"], presets=["tests"])
    settings = Settings.from_config(config)
    assert settings.max_depth == 3
    assert settings.extensions == [".ts", ".js"]
    assert settings.presets == ["tests"]
    # Unset fields keep their defaults
    assert settings.max_files == 10_000
    assert settings.respect_gitignore is True


def test_load_settings(tmp_path: Path) -> None:
    (tmp_path / ".codestitch.toml").write_text("[discovery]\nrespect-gitignore = false\n")
    nested = tmp_path / "pkg"
    nested.mkdir()
    settings = load_settings(nested)
    assert settings.respect_gitignore is False
    assert settings.max_depth == 20
