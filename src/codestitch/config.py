"""
TOML-based config file loading for codestitch.

Searches for `.codestitch.toml`, `codestitch.toml`, or `pyproject.toml
[tool.codestitch]` walking up from a start directory. Configured values are
overlaid on built-in defaults to give the effective `Settings`.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, cast

from codestitch.discovery.defaults import (
    MAX_WALK_DEPTH,
    MAX_WALK_FILES,
    SOURCE_ROOT_PREFIX,
    SUPPORTED_EXTENSIONS,
)
from codestitch.errors import ConfigParseError
from codestitch.stats import CHARS_PER_TOKEN, COST_PER_1K_TOKENS

if sys.version_info >= (3, 11):
    import tomllib  # pyright: ignore[reportUnreachable]
else:
    import tomli as tomllib  # type: ignore[no-redef]  # pyright: ignore[reportUnreachable]


@dataclass
class CodestitchConfig:
    """
    Parsed config from a TOML file. Fields are `None` when not set in the config,
    so "not configured" can be told apart from "explicitly set to the default".
    """

    # Discovery
    extensions: list[str] | None = None
    ignore: list[str] | None = None
    presets: list[str] | None = None
    respect_gitignore: bool | None = None
    max_depth: int | None = None
    max_files: int | None = None
    # Resolution
    source_root_prefix: str | None = None
    # Stats
    chars_per_token: int | None = None
    cost_per_1k_tokens: float | None = None


@dataclass
class Settings:
    """Effective settings for a run: built-in defaults overlaid with config."""

    extensions: list[str] = field(default_factory=lambda: list(SUPPORTED_EXTENSIONS))
    ignore: list[str] = field(default_factory=list)
    presets: list[str] = field(default_factory=list)
    respect_gitignore: bool = True
    max_depth: int = MAX_WALK_DEPTH
    max_files: int = MAX_WALK_FILES
    source_root_prefix: str = SOURCE_ROOT_PREFIX
    chars_per_token: int = CHARS_PER_TOKEN
    cost_per_1k_tokens: float = COST_PER_1K_TOKENS

    @classmethod
    def from_config(cls, config: CodestitchConfig | None) -> Settings:
        settings = cls()
        if config is None:
            return settings
        for cfg_field in fields(CodestitchConfig):
            value = getattr(config, cfg_field.name)
            if value is not None:
                setattr(settings, cfg_field.name, value)
        settings.extensions = [_normalize_extension(ext) for ext in settings.extensions]
        return settings


# Config file search order (first match wins within each directory level)
_CONFIG_FILENAMES = [".codestitch.toml", "codestitch.toml", "pyproject.toml"]

_VALID_FIELDS = {f.name for f in fields(CodestitchConfig)}


def _normalize_extension(ext: str) -> str:
    ext = ext.strip().lower()
    return ext if ext.startswith(".") else f".{ext}"


def find_config_file(start_dir: Path) -> Path | None:
    """
    Walk up from `start_dir` looking for a config file. Returns the first
    found, or `None`. Search order per directory: `.codestitch.toml` >
    `codestitch.toml` > `pyproject.toml` (only if it has `[tool.codestitch]`).
    """
    current = start_dir.resolve()
    while True:
        for filename in _CONFIG_FILENAMES:
            candidate = current / filename
            if candidate.is_file():
                if filename == "pyproject.toml":
                    if _pyproject_has_codestitch_section(candidate):
                        return candidate
                else:
                    return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


def _pyproject_has_codestitch_section(path: Path) -> bool:
    """Check if a pyproject.toml has a [tool.codestitch] section."""
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
        return "codestitch" in data.get("tool", {})
    except (tomllib.TOMLDecodeError, OSError):
        return False


def load_config(config_path: Path) -> CodestitchConfig:
    """
    Load a `CodestitchConfig` from a TOML file, either standalone or the
    `[tool.codestitch]` table of a `pyproject.toml`. Kebab-case keys are
    mapped to snake_case. Raises `ConfigParseError` for invalid TOML.
    """
    try:
        data = tomllib.loads(config_path.read_text(encoding="utf-8"))
    except (tomllib.TOMLDecodeError, OSError, UnicodeDecodeError) as e:
        raise ConfigParseError(f"Could not parse {config_path}: {e}") from e

    if config_path.name == "pyproject.toml":
        data = data.get("tool", {}).get("codestitch", {})

    return _parse_config_data(data)


def _parse_config_data(data: dict[str, Any]) -> CodestitchConfig:
    """Parse a flat or sectioned TOML dict into CodestitchConfig."""
    # Flatten sections: [discovery], [resolution], [stats] merge into top level
    flat: dict[str, Any] = {}
    for key, value in data.items():
        if isinstance(value, dict):
            for sub_key, sub_value in cast(dict[str, Any], value).items():
                flat[sub_key] = sub_value
        else:
            flat[key] = value

    mapped: dict[str, Any] = {}
    for key, value in flat.items():
        snake_key = key.replace("-", "_")
        if snake_key in _VALID_FIELDS:
            mapped[snake_key] = value

    return CodestitchConfig(**mapped)


def load_settings(start_dir: Path) -> Settings:
    """Effective settings for a run started in `start_dir`."""
    config_path = find_config_file(start_dir)
    config = load_config(config_path) if config_path else None
    return Settings.from_config(config)
