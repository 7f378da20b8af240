"""Dependency tree nodes produced by `AggregationEngine.build_graph`."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


@dataclass
class DependencyNode:
    """
    One file in a dependency tree.

    The tree is rooted at the entry file. A cycle is cut where it closes: the
    repeated file appears as a leaf with `circular` set. A file that does not
    exist appears as a leaf with `missing` set.
    """

    name: str
    absolute_path: Path
    children: list[DependencyNode] = field(default_factory=list)
    circular: bool = False
    missing: bool = False

    @classmethod
    def for_path(cls, path: Path, *, circular: bool = False, missing: bool = False) -> DependencyNode:
        return cls(name=path.name, absolute_path=path, circular=circular, missing=missing)

    def walk(self) -> Iterator[tuple[int, DependencyNode]]:
        """Yield `(depth, node)` in pre-order."""
        stack: list[tuple[int, DependencyNode]] = [(0, self)]
        while stack:
            depth, node = stack.pop()
            yield depth, node
            for child in reversed(node.children):
                stack.append((depth + 1, child))

    def _shallow_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "path": str(self.absolute_path),
            "children": [],
            "circular": self.circular,
            "missing": self.missing,
        }

    def to_dict(self) -> dict[str, Any]:
        """Plain nested dict for JSON serialization or visualization."""
        result = self._shallow_dict()
        pending: list[tuple[DependencyNode, dict[str, Any]]] = [(self, result)]
        while pending:
            node, data = pending.pop()
            for child in node.children:
                child_data = child._shallow_dict()
                data["children"].append(child_data)
                pending.append((child, child_data))
        return result

    def format_tree(self, indent: str = "  ") -> str:
        """Indented text rendering, one file per line."""
        lines: list[str] = []
        for depth, node in self.walk():
            marker = ""
            if node.circular:
                marker = " (circular)"
            elif node.missing:
                marker = " (missing)"
            lines.append(f"{indent * depth}{node.name}{marker}")
        return "\n".join(lines)
