"""
Default extensions and directory exclusions for source discovery.

Extension order matters: it is the lookup priority used when an import
specifier has no extension.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ExtensionMeta:
    """Display label and bundler loader for a supported file extension."""

    label: str
    loader: str


EXTENSION_META: dict[str, ExtensionMeta] = {
    ".ts": ExtensionMeta(label="TS", loader="ts"),
    ".tsx": ExtensionMeta(label="TSX", loader="tsx"),
    ".js": ExtensionMeta(label="JS", loader="js"),
    ".jsx": ExtensionMeta(label="JSX", loader="jsx"),
    ".html": ExtensionMeta(label="HTML", loader="text"),
    ".css": ExtensionMeta(label="CSS", loader="css"),
    ".scss": ExtensionMeta(label="SCSS", loader="empty"),
}

SUPPORTED_EXTENSIONS: tuple[str, ...] = tuple(EXTENSION_META)

# Conventional build/meta directories, pruned before ignore rules are consulted.
DENIED_DIRECTORIES: frozenset[str] = frozenset(
    ["node_modules", "dist", ".git", ".next", "build", "coverage"]
)

MAX_WALK_DEPTH = 20
MAX_WALK_FILES = 10_000

# Specifier prefix resolved against the project root instead of the importing file.
SOURCE_ROOT_PREFIX = "src/"


def loader_config(extensions: tuple[str, ...] = SUPPORTED_EXTENSIONS) -> dict[str, str]:
    """Map each extension to its bundler loader name."""
    return {ext: EXTENSION_META[ext].loader for ext in extensions if ext in EXTENSION_META}
