"""Tests for dependency graph construction."""

from __future__ import annotations

import json
from pathlib import Path

from codestitch.aggregate import AggregationEngine
from codestitch.discovery import IgnoreEngine
from codestitch.graph import DependencyNode


def _write(root: Path, files: dict[str, str]) -> None:
    (root / "tsconfig.json").write_text("{}")
    for rel, content in files.items():
        (root / rel).write_text(content)


def _names(node: DependencyNode) -> list[str]:
    return [child.name for child in node.children]


def test_graph_linear_chain(tmp_path: Path):
    _write(
        tmp_path,
        {
            "main.ts": 'import { a } from "./a";\n',
            "a.ts": 'import { b } from "./b";\n',
            "b.ts": "export const b = 1;\n",
        },
    )
    root = AggregationEngine().build_graph(tmp_path / "main.ts")
    assert root.name == "main.ts"
    assert root.absolute_path == tmp_path / "main.ts"
    assert _names(root) == ["a.ts"]
    assert _names(root.children[0]) == ["b.ts"]
    assert root.children[0].children[0].children == []


def test_graph_marks_back_edge_circular(tmp_path: Path):
    _write(
        tmp_path,
        {
            "a.ts": 'import "./b";\n',
            "b.ts": 'import "./a";\n',
        },
    )
    root = AggregationEngine().build_graph(tmp_path / "a.ts")
    b = root.children[0]
    assert b.name == "b.ts" and not b.circular
    assert len(b.children) == 1
    back = b.children[0]
    assert back.name == "a.ts"
    assert back.circular is True
    assert back.children == []


def test_graph_self_import_is_circular(tmp_path: Path):
    _write(tmp_path, {"loop.ts": 'import "./loop";\n'})
    root = AggregationEngine().build_graph(tmp_path / "loop.ts")
    assert [(c.name, c.circular) for c in root.children] == [("loop.ts", True)]


def test_graph_diamond_is_expanded_under_each_parent(tmp_path: Path):
    _write(
        tmp_path,
        {
            "main.ts": 'import "./left";\nimport "./right";\n',
            "left.ts": 'import "./shared";\n',
            "right.ts": 'import "./shared";\n',
            "shared.ts": "export {};\n",
        },
    )
    root = AggregationEngine().build_graph(tmp_path / "main.ts")
    left, right = root.children
    assert [(c.name, c.circular) for c in left.children] == [("shared.ts", False)]
    assert [(c.name, c.circular) for c in right.children] == [("shared.ts", False)]


def test_graph_missing_entry(tmp_path: Path):
    _write(tmp_path, {})
    root = AggregationEngine().build_graph(tmp_path / "ghost.ts")
    assert root.name == "ghost.ts"
    assert root.missing is True
    assert root.children == []


def test_graph_omits_ignored_dependencies(tmp_path: Path):
    _write(
        tmp_path,
        {
            "main.ts": 'import "./fixture.test.ts";\nimport "./util";\n',
            "fixture.test.ts": "export {};\n",
            "util.ts": "export {};\n",
        },
    )
    ignore = IgnoreEngine()
    ignore.add_patterns(["*.test.ts"])
    root = AggregationEngine(ignore_engine=ignore).build_graph(tmp_path / "main.ts")
    assert _names(root) == ["util.ts"]


def test_graph_skips_unresolved_imports(tmp_path: Path):
    _write(tmp_path, {"main.ts": 'import "./gone";\nimport "lodash";\n'})
    root = AggregationEngine().build_graph(tmp_path / "main.ts")
    assert root.children == []


def test_graph_to_dict_is_json_serializable(tmp_path: Path):
    _write(
        tmp_path,
        {
            "a.ts": 'import "./b";\n',
            "b.ts": 'import "./a";\n',
        },
    )
    data = AggregationEngine().build_graph(tmp_path / "a.ts").to_dict()
    assert json.loads(json.dumps(data)) == data
    assert data["name"] == "a.ts"
    assert data["path"] == str(tmp_path / "a.ts")
    child = data["children"][0]
    assert child["name"] == "b.ts"
    assert child["children"][0]["circular"] is True
    assert child["children"][0]["children"] == []


def test_format_tree():
    leaf = DependencyNode.for_path(Path("/p/c.ts"))
    back = DependencyNode.for_path(Path("/p/a.ts"), circular=True)
    gone = DependencyNode.for_path(Path("/p/gone.ts"), missing=True)
    b = DependencyNode.for_path(Path("/p/b.ts"))
    b.children = [leaf, back]
    root = DependencyNode.for_path(Path("/p/a.ts"))
    root.children = [b, gone]
    assert root.format_tree() == "\n".join(
        [
            "a.ts",
            "  b.ts",
            "    c.ts",
            "    a.ts (circular)",
            "  gone.ts (missing)",
        ]
    )
    assert [depth for depth, _ in root.walk()] == [0, 1, 2, 2, 1]
