"""
Lexical import scanning.

This is a regex scan, not a parser. Text inside comments or string literals
that looks like an import statement is reported too, and imports split in
unusual ways may be missed.
"""

from __future__ import annotations

import logging
import re

from codestitch.project import ProjectContext

logger = logging.getLogger(__name__)

# `import x from "mod"`, `import { a, b } from 'mod'`, and bare `import "mod"`.
IMPORT_PATTERN = re.compile(r"""import\s+(?:[\s\S]*?\s+from\s+)?['"]([^'"]+)['"]""")


def root_segment(specifier: str) -> str:
    """
    The package-name part of a specifier: `lodash/fp` → `lodash`,
    `@scope/pkg/sub` → `@scope/pkg`.
    """
    parts = specifier.split("/")
    if specifier.startswith("@") and len(parts) > 1:
        return f"{parts[0]}/{parts[1]}"
    return parts[0]


class ImportExtractor:
    """Finds import specifiers, dropping those that name a declared dependency."""

    def __init__(self, context: ProjectContext) -> None:
        self.context = context

    def is_dependency(self, specifier: str) -> bool:
        return root_segment(specifier) in self.context.dependency_names

    def extract(self, content: str) -> list[str]:
        """Specifiers in first-seen order, duplicates included."""
        specifiers: list[str] = []
        for match in IMPORT_PATTERN.finditer(content):
            specifier = match.group(1)
            if self.is_dependency(specifier):
                logger.debug("Skipping dependency import: %s", specifier)
                continue
            specifiers.append(specifier)
        return specifiers
