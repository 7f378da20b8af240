"""
Project boundary detection.

Walks up from an entry file looking for the first directory that looks like a
project root, and collects the dependency names declared in `package.json` so
imports of installed packages can be told apart from project files.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from codestitch.errors import ConfigParseError, ProjectRootConflictError

logger = logging.getLogger(__name__)

PACKAGE_DESCRIPTOR = "package.json"
TYPE_CONFIG_MARKER = "tsconfig.json"
SOURCE_DIR = "src"

DEPENDENCY_SECTIONS = ("dependencies", "devDependencies", "peerDependencies")


@dataclass
class ProjectContext:
    """
    Per-run project state. The root is fixed once; dependency names only grow.
    """

    _root: Path | None = None
    dependency_names: set[str] = field(default_factory=set)

    @property
    def root(self) -> Path | None:
        return self._root

    @root.setter
    def root(self, value: Path) -> None:
        value = Path(value)
        if self._root is not None and self._root != value:
            raise ProjectRootConflictError(
                f"Project root already set to {self._root}, cannot change to {value}"
            )
        self._root = value


def _parse_descriptor(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ConfigParseError(f"Could not parse {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigParseError(f"Could not parse {path}: expected a JSON object")
    return data


def _dependency_names(descriptor: dict[str, Any]) -> set[str]:
    names: set[str] = set()
    for section in DEPENDENCY_SECTIONS:
        deps = descriptor.get(section)
        if isinstance(deps, dict):
            names.update(str(name) for name in deps)
    return names


def read_dependency_names(root: Path) -> set[str]:
    """
    Dependency names declared in `<root>/package.json`, or an empty set if
    there is no descriptor. Raises `ConfigParseError` if it is malformed.
    """
    descriptor = Path(root) / PACKAGE_DESCRIPTOR
    if not descriptor.is_file():
        return set()
    return _dependency_names(_parse_descriptor(descriptor))


class ProjectRootLocator:
    """Infers the project root for an entry file and records its dependencies."""

    def __init__(self, context: ProjectContext) -> None:
        self.context = context

    def detect(self, entry_file_path: str | Path) -> Path:
        """
        Walk upward from the entry file's directory. The first ancestor with a
        `package.json` (whose dependencies are merged into the context), a
        `tsconfig.json`, or a `src/` directory is the root. Falls back to the
        entry file's parent.
        """
        entry = Path(os.path.abspath(entry_file_path))
        current = entry.parent

        while current.parent != current:
            descriptor = current / PACKAGE_DESCRIPTOR
            if descriptor.is_file():
                names = _dependency_names(_parse_descriptor(descriptor))
                logger.debug("Read %d dependency names from %s", len(names), descriptor)
                self.context.dependency_names.update(names)
                return current

            if (current / TYPE_CONFIG_MARKER).is_file():
                return current

            src = current / SOURCE_DIR
            if src.is_dir() and not src.is_symlink():
                return current

            current = current.parent

        return entry.parent
