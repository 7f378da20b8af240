"""
Mapping import specifiers to files on disk.

Only relative (`./`, `../`) and source-root (`src/...`) specifiers are
followed. Bare package names are never looked up in an installed-package
directory.
"""

from __future__ import annotations

import os
from collections.abc import Sequence
from pathlib import Path

from codestitch.discovery.defaults import SOURCE_ROOT_PREFIX, SUPPORTED_EXTENSIONS
from codestitch.imports.extractor import root_segment
from codestitch.imports.types import ImportKind, ImportReference
from codestitch.project import ProjectContext


def is_relative(specifier: str) -> bool:
    return specifier.startswith("./") or specifier.startswith("../")


def locate_source(path: str, extensions: Sequence[str] = SUPPORTED_EXTENSIONS) -> Path | None:
    """
    Find the file a computed import path refers to.

    If the path has no extension, try each extension as a direct suffix, then
    `index.<ext>` inside the path as a directory, both in `extensions` order.
    Otherwise the path must itself be an existing file.
    """
    if not os.path.splitext(path)[1]:
        for ext in extensions:
            candidate = path + ext
            if os.path.isfile(candidate):
                return Path(candidate)
        for ext in extensions:
            candidate = os.path.join(path, f"index{ext}")
            if os.path.isfile(candidate):
                return Path(candidate)
    if os.path.isfile(path):
        return Path(path)
    return None


class ImportResolver:
    """Resolves specifiers found in a file to absolute file paths."""

    def __init__(
        self,
        context: ProjectContext,
        extensions: Sequence[str] = SUPPORTED_EXTENSIONS,
        source_root_prefix: str = SOURCE_ROOT_PREFIX,
    ) -> None:
        self.context = context
        self.extensions = tuple(extensions)
        self.source_root_prefix = source_root_prefix

    def is_rooted(self, specifier: str) -> bool:
        return bool(self.source_root_prefix) and specifier.startswith(self.source_root_prefix)

    def resolve(self, base_path: str | Path, specifier: str) -> Path | None:
        """Absolute path of the file `specifier` names when imported from `base_path`, or `None`."""
        if is_relative(specifier):
            target = os.path.join(os.path.dirname(os.path.abspath(base_path)), specifier)
        elif self.is_rooted(specifier):
            if self.context.root is None:
                return None
            target = os.path.join(self.context.root, specifier)
        else:
            return None
        return locate_source(os.path.normpath(target), self.extensions)

    def reference(self, base_path: str | Path, specifier: str) -> ImportReference:
        """Resolve and classify a specifier."""
        if root_segment(specifier) in self.context.dependency_names:
            return ImportReference(specifier, None, ImportKind.external)
        resolved = self.resolve(base_path, specifier)
        if resolved is None:
            return ImportReference(specifier, None, ImportKind.unresolved)
        kind = ImportKind.relative if is_relative(specifier) else ImportKind.rooted
        return ImportReference(specifier, resolved, kind)
