"""
Bounded recursive directory scan for candidate source files.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Collection
from pathlib import Path

from codestitch.discovery.defaults import (
    DENIED_DIRECTORIES,
    MAX_WALK_DEPTH,
    MAX_WALK_FILES,
    SUPPORTED_EXTENSIONS,
)
from codestitch.discovery.ignore import IgnoreEngine

logger = logging.getLogger(__name__)


def enumerate_files(
    root_dir: str | Path,
    allowed_extensions: Collection[str] = SUPPORTED_EXTENSIONS,
    ignore_engine: IgnoreEngine | None = None,
    project_root: str | Path | None = None,
    max_depth: int = MAX_WALK_DEPTH,
    max_files: int = MAX_WALK_FILES,
) -> list[Path]:
    """
    Walk `root_dir` in pre-order and return files with an allowed extension.

    Entries are visited in the order the OS lists them (not sorted). Denied
    directories are pruned before ignore rules are consulted; ignore rules
    apply only when both `ignore_engine` and `project_root` are given.
    Directories deeper than `max_depth` are not entered and collection stops
    once `max_files` files have been found.
    """
    allowed = {ext.lower() for ext in allowed_extensions}
    files: list[Path] = []

    def is_ignored(path: str, is_dir: bool) -> bool:
        if ignore_engine is None or project_root is None:
            return False
        return ignore_engine.should_ignore(path, project_root, is_dir=is_dir)

    def walk(current: str, depth: int) -> None:
        if depth > max_depth or len(files) >= max_files:
            return
        try:
            with os.scandir(current) as it:
                entries = list(it)
        except OSError as e:
            logger.warning("Could not list directory %s: %s", current, e)
            return

        for entry in entries:
            if len(files) >= max_files:
                return
            if entry.is_dir():
                if entry.name in DENIED_DIRECTORIES:
                    continue
                # A `!` rule may re-include files below an ignored directory.
                if is_ignored(entry.path, is_dir=True) and not (
                    ignore_engine is not None and ignore_engine.has_negations
                ):
                    continue
                walk(entry.path, depth + 1)
            elif entry.is_file():
                if is_ignored(entry.path, is_dir=False):
                    continue
                if os.path.splitext(entry.name)[1].lower() in allowed:
                    files.append(Path(entry.path))
                    if len(files) >= max_files:
                        logger.warning("File limit of %d reached under %s", max_files, root_dir)

    walk(os.fspath(root_dir), 0)
    return files
