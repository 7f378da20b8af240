"""
Gitignore-compatible include/exclude decisions for project paths.

Patterns are evaluated with `pathspec` using gitignore semantics: the last
matching pattern wins, `!` negates an earlier exclusion, and a trailing `/`
restricts a pattern to directories.
"""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Iterable
from pathlib import Path

import pathspec

from codestitch.discovery.gitignore import load_gitignore
from codestitch.discovery.presets import PRESETS

logger = logging.getLogger(__name__)


def _literal_pattern(text: str) -> pathspec.RegexPattern:
    """Exclude any path with a component equal to `text`, plus its descendants."""
    regex = re.compile(rf"^(?:.+/)?{re.escape(text.strip('/'))}(?:/.*)?$")
    return pathspec.RegexPattern(regex, include=True)


def _compile(patterns: list[str]) -> pathspec.PathSpec:
    """
    Compile patterns in order, keeping last-match-wins across all of them.

    Patterns with no path text (`!`, `/`, `!/`) match nothing, as in Git. A
    pattern `pathspec` rejects is matched as literal text, so a bad entry never
    breaks the whole rule set.
    """
    compiled: list[pathspec.Pattern] = []
    for pattern in patterns:
        if not pattern.strip().lstrip("!").strip("/"):
            logger.debug("Ignoring empty ignore pattern: %r", pattern)
            continue
        try:
            compiled.extend(pathspec.PathSpec.from_lines("gitignore", [pattern]).patterns)
        except ValueError:
            logger.debug("Treating malformed ignore pattern as literal: %r", pattern)
            compiled.append(_literal_pattern(pattern.strip()))
    return pathspec.PathSpec(compiled)


class IgnoreEngine:
    """
    Ordered gitignore rule set with a fast path when no rules are loaded.

    Decisions depend only on the path, the project root, and the current
    rules, so the same query always gives the same answer until the rules
    change.
    """

    def __init__(self) -> None:
        self._patterns: list[str] = []
        self._spec: pathspec.PathSpec | None = None
        self.has_patterns: bool = False

    @property
    def patterns(self) -> list[str]:
        return list(self._patterns)

    @property
    def has_negations(self) -> bool:
        """Whether any pattern re-includes paths with `!`."""
        return any(p.strip().startswith("!") for p in self._patterns)

    def add_patterns(self, patterns: Iterable[str]) -> None:
        """Union patterns into the rule set, preserving first-added order."""
        added = False
        for pattern in patterns:
            if not pattern or not pattern.strip():
                continue
            if pattern in self._patterns:
                continue
            self._patterns.append(pattern)
            added = True
        if added:
            self._spec = _compile(self._patterns)
            self.has_patterns = True

    def load_from_descriptor(self, root: Path) -> bool:
        """
        Add the patterns of `<root>/.gitignore`, if present.
        Returns whether any patterns were loaded.
        """
        lines = load_gitignore(Path(root))
        if not lines:
            return False
        self.add_patterns(lines)
        return True

    def add_preset(self, name: str) -> None:
        """Add one of the named preset catalogs. Unknown names are ignored."""
        preset = PRESETS.get(name)
        if preset is None:
            logger.debug("Unknown ignore preset: %s", name)
            return
        self.add_patterns(preset.patterns)

    def should_ignore(self, path: str | Path, root: str | Path, is_dir: bool | None = None) -> bool:
        """
        Check whether `path` is excluded relative to `root`.

        `is_dir` says whether the path is a directory; when `None` the
        filesystem is asked. Paths outside `root` are never ignored.
        """
        if not self.has_patterns or self._spec is None:
            return False

        relative = os.path.relpath(os.path.abspath(path), os.path.abspath(root))
        relative = relative.replace(os.sep, "/")
        if relative == "." or relative == ".." or relative.startswith("../"):
            return False

        if is_dir is None:
            is_dir = os.path.isdir(path)
        if is_dir:
            relative += "/"
        return self._spec.match_file(relative)

    def filter_files(self, files: Iterable[Path], root: Path) -> list[Path]:
        """Keep the files that are not ignored, in their original order."""
        return [f for f in files if not self.should_ignore(f, root, is_dir=False)]

    def clear(self) -> None:
        self._patterns = []
        self._spec = None
        self.has_patterns = False
