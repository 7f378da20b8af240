"""
Contract for an external bundler/minifier.

codestitch never bundles code itself. A caller may plug in any callable that
takes a `TransformRequest` and returns text; when none is configured, or it
fails, the locally produced output is used instead. A minifier is a plain
`str -> str` callable with the same fallback.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from pathlib import Path

from codestitch.discovery.defaults import loader_config
from codestitch.errors import TransformFailure

logger = logging.getLogger(__name__)

PLATFORM_BUILTINS: tuple[str, ...] = (
    "electron",
    "fs",
    "path",
    "os",
    "url",
    "util",
    "events",
    "stream",
    "crypto",
    "child_process",
    "http",
    "https",
)

ASSET_GLOBS: tuple[str, ...] = (
    "*.css",
    "*.scss",
    "*.sass",
    "*.less",
    "*.png",
    "*.jpg",
    "*.jpeg",
    "*.gif",
    "*.svg",
    "*.ico",
    "*.woff",
    "*.woff2",
    "*.ttf",
    "*.eot",
)


@dataclass(frozen=True)
class TransformRequest:
    """Everything an external bundler needs to produce one output blob."""

    entries: list[Path]
    externals: list[str]
    tsconfig_path: Path | None = None
    loaders: dict[str, str] = field(default_factory=loader_config)
    minify: bool = False


Transformer = Callable[[TransformRequest], str]

Minifier = Callable[[str], str]


def build_externals(dependency_names: Iterable[str]) -> list[str]:
    """Modules the bundler must leave unresolved: declared dependencies, built-ins, assets."""
    externals = sorted(set(dependency_names))
    for name in PLATFORM_BUILTINS + ASSET_GLOBS:
        if name not in externals:
            externals.append(name)
    return externals


def find_tsconfig(root: Path) -> Path | None:
    candidate = root / "tsconfig.json"
    return candidate if candidate.is_file() else None


def run_transform(transformer: Transformer | None, request: TransformRequest, fallback: str) -> str:
    """
    Output of `transformer` for `request`, or `fallback` if there is no
    transformer or it fails. Transformers should raise `TransformFailure`,
    but any exception is treated the same way.
    """
    if transformer is None:
        return fallback
    try:
        return transformer(request)
    except TransformFailure as e:
        logger.warning("Transform failed, using fallback output: %s", e)
    except Exception as e:
        logger.warning("Transform failed, using fallback output: %s: %s", type(e).__name__, e)
    return fallback


def run_minify(minifier: Minifier | None, content: str) -> str:
    """`content` passed through `minifier`, or unchanged if there is none or it fails."""
    if minifier is None:
        logger.warning("Minification requested but no minifier is configured")
        return content
    try:
        return minifier(content)
    except Exception as e:
        logger.warning("Minification failed, using unminified output: %s: %s", type(e).__name__, e)
    return content
