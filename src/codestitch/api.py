"""
Run-level operations for host applications.

Each function builds a fresh `AggregationEngine`, does one unit of work, and
returns a result object with `success` and `error` instead of raising, so a
host UI can show the message as is.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from codestitch.aggregate import AggregationEngine, OutputMode
from codestitch.config import Settings, load_settings
from codestitch.discovery.ignore import IgnoreEngine
from codestitch.discovery.walker import enumerate_files
from codestitch.errors import EmptyEntrySetError
from codestitch.graph import DependencyNode
from codestitch.output import ClipboardWriter, OutputTarget, deliver
from codestitch.project import read_dependency_names
from codestitch.stats import Stats, StatsCalculator
from codestitch.transform import (
    Minifier,
    TransformRequest,
    Transformer,
    build_externals,
    find_tsconfig,
    run_minify,
    run_transform,
)

logger = logging.getLogger(__name__)


@dataclass
class ProcessResult:
    success: bool
    error: str | None = None
    mode: OutputTarget | None = None
    content: str = ""
    stats: Stats | None = None


@dataclass
class FileEntry:
    path: Path
    relative_path: str
    name: str


@dataclass
class ScanResult:
    success: bool
    error: str | None = None
    files: list[FileEntry] = field(default_factory=list)
    has_gitignore: bool = False


@dataclass
class PreviewResult:
    success: bool
    error: str | None = None
    ignored_files: list[FileEntry] = field(default_factory=list)
    included_files: list[FileEntry] = field(default_factory=list)

    @property
    def total_files(self) -> int:
        return len(self.ignored_files) + len(self.included_files)


@dataclass
class GraphResult:
    success: bool
    error: str | None = None
    graph: DependencyNode | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "error": self.error,
            "graph": self.graph.to_dict() if self.graph is not None else None,
        }


def _relative(path: Path, base: Path) -> str:
    try:
        return path.relative_to(base).as_posix()
    except ValueError:
        return str(path)


def _file_entry(path: Path, base: Path) -> FileEntry:
    return FileEntry(path=path, relative_path=_relative(path, base), name=path.name)


def _make_ignore_engine(root: Path, settings: Settings) -> tuple[IgnoreEngine, bool]:
    """Ignore rules for a run, and whether a `.gitignore` contributed to them."""
    engine = IgnoreEngine()
    loaded = settings.respect_gitignore and engine.load_from_descriptor(root)
    for preset in settings.presets:
        engine.add_preset(preset)
    engine.add_patterns(settings.ignore)
    return engine, loaded


def _collect_entries(
    input_path: Path,
    selected_files: Sequence[str | Path] | None,
    ignore_engine: IgnoreEngine,
    settings: Settings,
) -> list[Path]:
    if not input_path.is_dir():
        return [input_path]
    if selected_files:
        return [Path(f) for f in selected_files]
    return enumerate_files(
        input_path,
        settings.extensions,
        ignore_engine,
        input_path,
        max_depth=settings.max_depth,
        max_files=settings.max_files,
    )


def process_files(
    input_path: str | Path,
    *,
    output_mode: OutputTarget | str = OutputTarget.clipboard,
    output_path: str | Path | None = None,
    compress: bool = False,
    minify: bool = False,
    selected_files: Sequence[str | Path] | None = None,
    settings: Settings | None = None,
    transformer: Transformer | None = None,
    minifier: Minifier | None = None,
    clipboard: ClipboardWriter | None = None,
) -> ProcessResult:
    """
    Combine the files reachable from `input_path` and deliver the text.

    A folder input uses `selected_files` if given, otherwise every supported
    file found under it. With `compress`, folder input is rendered compactly;
    file input goes through `transformer`, falling back to the compact
    rendering. With `compress` and `minify`, the result is then passed through
    `minifier`. Stats then include savings against the verbose rendering.
    """
    try:
        source = Path(input_path).absolute()
        if settings is None:
            settings = load_settings(source if source.is_dir() else source.parent)
        scope_root = source if source.is_dir() else source.parent

        ignore_engine, _ = _make_ignore_engine(scope_root, settings)
        entries = _collect_entries(source, selected_files, ignore_engine, settings)
        if not entries:
            raise EmptyEntrySetError("No files selected or found in the folder")

        engine = AggregationEngine(ignore_engine, settings.extensions, settings.source_root_prefix)
        output = engine.aggregate(entries, OutputMode.verbose)
        if not output.entries:
            raise EmptyEntrySetError("No files selected or found in the folder")
        verbose = output.render(OutputMode.verbose)
        files = [_relative(path, scope_root) for path in engine.processed_files]
        calculator = StatsCalculator(settings.chars_per_token, settings.cost_per_1k_tokens)

        if compress:
            compact = output.render(OutputMode.compact)
            if source.is_dir():
                content = compact
            else:
                root = engine.root or scope_root
                request = TransformRequest(
                    entries=entries,
                    externals=build_externals(read_dependency_names(root)),
                    tsconfig_path=find_tsconfig(root),
                    minify=minify,
                )
                content = run_transform(transformer, request, compact)
            if minify:
                content = run_minify(minifier, content)
            stats = calculator.comparative(verbose, content, files)
        else:
            content = verbose
            stats = calculator.from_content(content, files)

        target = OutputTarget(output_mode)
        deliver(content, target, output_path, clipboard)
        return ProcessResult(success=True, mode=target, content=content, stats=stats)
    except Exception as e:
        logger.error("Processing %s failed: %s", input_path, e)
        return ProcessResult(success=False, error=str(e))


def scan_folder(folder_path: str | Path, settings: Settings | None = None) -> ScanResult:
    """List supported files under a folder, honoring its `.gitignore`."""
    try:
        folder = Path(folder_path).absolute()
        if settings is None:
            settings = load_settings(folder)
        ignore_engine, has_gitignore = _make_ignore_engine(folder, settings)
        files = enumerate_files(
            folder,
            settings.extensions,
            ignore_engine,
            folder,
            max_depth=settings.max_depth,
            max_files=settings.max_files,
        )
        return ScanResult(
            success=True,
            files=[_file_entry(f, folder) for f in files],
            has_gitignore=has_gitignore,
        )
    except Exception as e:
        logger.error("Scanning %s failed: %s", folder_path, e)
        return ScanResult(success=False, error=str(e))


def preview_ignored_files(folder_path: str | Path, patterns: Sequence[str]) -> PreviewResult:
    """Split the supported files under a folder by whether `patterns` ignore them."""
    try:
        folder = Path(folder_path).absolute()
        ignore_engine = IgnoreEngine()
        ignore_engine.add_patterns(patterns)
        result = PreviewResult(success=True)
        for f in enumerate_files(folder):
            entry = _file_entry(f, folder)
            if ignore_engine.should_ignore(f, folder, is_dir=False):
                result.ignored_files.append(entry)
            else:
                result.included_files.append(entry)
        return result
    except Exception as e:
        logger.error("Previewing %s failed: %s", folder_path, e)
        return PreviewResult(success=False, error=str(e))


def analyze_dependencies(input_path: str | Path, settings: Settings | None = None) -> GraphResult:
    """Dependency tree for one entry file."""
    try:
        source = Path(input_path).absolute()
        if settings is None:
            settings = load_settings(source.parent)
        ignore_engine, _ = _make_ignore_engine(source.parent, settings)
        engine = AggregationEngine(ignore_engine, settings.extensions, settings.source_root_prefix)
        return GraphResult(success=True, graph=engine.build_graph(source))
    except Exception as e:
        logger.error("Analyzing %s failed: %s", input_path, e)
        return GraphResult(success=False, error=str(e))
