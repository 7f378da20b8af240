"""
Named ignore-pattern catalogs that callers can toggle on and off.

Patterns use gitignore syntax. Directory patterns end with `/`.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Preset:
    """A named group of ignore patterns."""

    name: str
    """Display name, e.g. for a toggle in a UI."""

    patterns: tuple[str, ...]


PRESETS: dict[str, Preset] = {
    "tests": Preset(
        name="Tests",
        patterns=(
            "**/*.test.ts",
            "**/*.test.tsx",
            "**/*.test.js",
            "**/*.test.jsx",
            "**/*.spec.ts",
            "**/*.spec.tsx",
            "**/*.spec.js",
            "**/*.spec.jsx",
            "**/__tests__/",
            "**/test/",
            "**/tests/",
        ),
    ),
    "configs": Preset(
        name="Configs",
        patterns=(
            "*.config.js",
            "*.config.ts",
            "*.config.mjs",
            ".env*",
            ".eslintrc*",
            ".prettierrc*",
            "tsconfig.json",
            "jsconfig.json",
            "webpack.config.*",
            "vite.config.*",
            "rollup.config.*",
        ),
    ),
    "buildArtifacts": Preset(
        name="Build Artifacts",
        patterns=(
            "dist/",
            "build/",
            "out/",
            ".next/",
            "coverage/",
            ".cache/",
            "*.log",
            "*.tsbuildinfo",
        ),
    ),
    "dependencies": Preset(
        name="Dependencies",
        patterns=(
            "node_modules/",
            "vendor/",
            ".pnp.*",
            "package-lock.json",
            "yarn.lock",
            "pnpm-lock.yaml",
        ),
    ),
    "documentation": Preset(
        name="Documentation",
        patterns=(
            "*.md",
            "*.mdx",
            "docs/",
            "documentation/",
            "README*",
            "CHANGELOG*",
            "LICENSE*",
        ),
    ),
}


def get_presets() -> dict[str, Preset]:
    """Return the preset catalog keyed by preset id."""
    return dict(PRESETS)
