"""
Import-following aggregation of source files.

`AggregationEngine` starts from entry files, follows their relative and
source-root imports, and produces either one combined text with every
reachable file exactly once (dependencies before the files that import them),
or a `DependencyNode` tree.

Both traversals use an explicit work stack, so deep import chains are not
limited by the interpreter's recursion limit. Create one engine per request;
an engine must not be shared by runs that overlap.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from codestitch.discovery.defaults import SOURCE_ROOT_PREFIX, SUPPORTED_EXTENSIONS
from codestitch.discovery.ignore import IgnoreEngine
from codestitch.errors import EmptyEntrySetError
from codestitch.graph import DependencyNode
from codestitch.imports.extractor import ImportExtractor
from codestitch.imports.resolver import ImportResolver
from codestitch.minify import minify
from codestitch.project import ProjectContext, ProjectRootLocator

logger = logging.getLogger(__name__)

SEPARATOR = "=" * 80


class OutputMode(str, Enum):
    """
    How aggregated files are serialized.

    - `verbose`: a banner with the absolute path, then the file unchanged.
    - `compact`: a short path tag, then the file with comments and extra
      whitespace removed.
    """

    verbose = "verbose"
    compact = "compact"


def _normalize(path: str | Path) -> Path:
    return Path(os.path.abspath(path))


@dataclass
class AggregationOutput:
    """Files in emission order with their raw content."""

    mode: OutputMode
    root: Path | None
    entries: list[tuple[Path, str]] = field(default_factory=list)

    @property
    def files(self) -> list[Path]:
        return [path for path, _ in self.entries]

    def _tag(self, path: Path) -> str:
        if self.root is not None:
            try:
                return path.relative_to(self.root).as_posix()
            except ValueError:
                pass
        return path.as_posix()

    def render(self, mode: OutputMode | None = None) -> str:
        """Combined text in `mode` (defaults to the mode the output was built with)."""
        mode = mode or self.mode
        parts: list[str] = []
        for path, content in self.entries:
            if mode == OutputMode.compact:
                parts.append(f"\n// {self._tag(path)}")
                parts.append(minify(content))
            else:
                parts.append(f"\n{SEPARATOR}")
                parts.append(f"File: {path}")
                parts.append(SEPARATOR)
                parts.append(content)
        return "\n".join(parts)


class VisitationRecord:
    """Normalized paths already visited in this run, in first-visit order."""

    def __init__(self) -> None:
        self._paths: dict[Path, None] = {}

    def add(self, path: Path) -> None:
        self._paths.setdefault(path, None)

    def __contains__(self, path: object) -> bool:
        return path in self._paths

    def __iter__(self) -> Iterator[Path]:
        return iter(self._paths)

    def __len__(self) -> int:
        return len(self._paths)


@dataclass
class _Frame:
    path: Path
    content: str
    pending: Iterator[Path]


class AggregationEngine:
    """
    Orchestrates root detection, import extraction and resolution, and ignore
    filtering over a traversal of the import graph.

    Ignore rules live on `ignore_engine` and survive `reset()`; everything else
    is per run.
    """

    def __init__(
        self,
        ignore_engine: IgnoreEngine | None = None,
        extensions: Sequence[str] = SUPPORTED_EXTENSIONS,
        source_root_prefix: str = SOURCE_ROOT_PREFIX,
    ) -> None:
        self.ignore_engine = ignore_engine if ignore_engine is not None else IgnoreEngine()
        self.extensions = tuple(extensions)
        self.source_root_prefix = source_root_prefix
        self.reset()

    def reset(self) -> None:
        """Drop all per-run state: project context, visited files, and output."""
        self.context = ProjectContext()
        self.visited = VisitationRecord()
        self._entries: list[tuple[Path, str]] = []
        self.extractor = ImportExtractor(self.context)
        self.resolver = ImportResolver(self.context, self.extensions, self.source_root_prefix)

    @property
    def processed_files(self) -> list[Path]:
        return list(self.visited)

    @property
    def root(self) -> Path | None:
        return self.context.root

    def _ensure_root(self, path: Path) -> Path:
        if self.context.root is None:
            self.context.root = ProjectRootLocator(self.context).detect(path)
            logger.info("Project root detected at: %s", self.context.root)
        return self.context.root

    def _read(self, path: Path) -> str | None:
        if not path.is_file():
            logger.warning("File not found: %s", path)
            return None
        try:
            return path.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            logger.warning("Could not read %s: %s", path, e)
            return None

    def _dependencies(self, path: Path, content: str) -> list[Path]:
        """Resolved imports of a file, de-duplicated, in first-seen order."""
        resolved: dict[Path, None] = {}
        for specifier in self.extractor.extract(content):
            target = self.resolver.resolve(path, specifier)
            if target is None:
                logger.debug("Unresolved import %r in %s", specifier, path)
                continue
            resolved.setdefault(_normalize(target), None)
        return list(resolved)

    def _is_ignored(self, path: Path) -> bool:
        root = self.context.root
        if root is None or not self.ignore_engine.should_ignore(path, root, is_dir=False):
            return False
        logger.debug("Ignoring file: %s", path)
        return True

    def _enter(self, path: Path) -> _Frame | None:
        if path in self.visited or self._is_ignored(path):
            return None
        content = self._read(path)
        if content is None:
            return None
        self.visited.add(path)
        return _Frame(path, content, iter(self._dependencies(path, content)))

    def _traverse(self, entry: Path) -> None:
        frame = self._enter(entry)
        if frame is None:
            return
        stack = [frame]
        while stack:
            top = stack[-1]
            dependency = next(top.pending, None)
            if dependency is None:
                stack.pop()
                self._entries.append((top.path, top.content))
                continue
            child = self._enter(dependency)
            if child is not None:
                stack.append(child)

    def aggregate(
        self, entry_paths: Iterable[str | Path], mode: OutputMode = OutputMode.verbose
    ) -> AggregationOutput:
        """
        Collect every file reachable from `entry_paths`.

        Each file is emitted once, after all of its not-yet-visited resolved
        dependencies. Ignored files are skipped without following their
        imports; missing or unreadable files are skipped with a warning.
        """
        self.reset()
        entries = [_normalize(p) for p in entry_paths]
        if not entries:
            raise EmptyEntrySetError("No files selected or found in the folder")

        self._ensure_root(entries[0])
        for entry in entries:
            self._traverse(entry)
        return AggregationOutput(mode=OutputMode(mode), root=self.context.root, entries=list(self._entries))

    def build_graph(self, entry_path: str | Path) -> DependencyNode:
        """
        Dependency tree rooted at `entry_path`.

        A dependency that is already on the path from the root to the current
        file closes a cycle and is added as a `circular` leaf. Only the active
        path counts, so a file shared by sibling branches (a diamond) is
        expanded under each of them. Ignored dependencies are left out.
        """
        self.reset()
        entry = _normalize(entry_path)
        self._ensure_root(entry)

        root_node = DependencyNode.for_path(entry)
        content = self._read(entry)
        if content is None:
            root_node.missing = True
            return root_node
        self.visited.add(entry)

        active: set[Path] = {entry}
        stack: list[tuple[DependencyNode, Iterator[Path]]] = [
            (root_node, iter(self._dependencies(entry, content)))
        ]
        while stack:
            node, pending = stack[-1]
            dependency = next(pending, None)
            if dependency is None:
                stack.pop()
                active.discard(node.absolute_path)
                continue
            if dependency in active:
                node.children.append(DependencyNode.for_path(dependency, circular=True))
                continue
            if self._is_ignored(dependency):
                continue
            dep_content = self._read(dependency)
            if dep_content is None:
                node.children.append(DependencyNode.for_path(dependency, missing=True))
                continue
            self.visited.add(dependency)
            child = DependencyNode.for_path(dependency)
            node.children.append(child)
            active.add(dependency)
            stack.append((child, iter(self._dependencies(dependency, dep_content))))
        return root_node
