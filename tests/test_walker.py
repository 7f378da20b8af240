"""Tests for the bounded directory walker."""

from __future__ import annotations

from pathlib import Path

from codestitch.discovery import IgnoreEngine, enumerate_files


def _make_tree(root: Path) -> None:
    """Create a small project tree for testing."""
    (root / "index.ts").write_text("export {}\n")
    src = root / "src"
    src.mkdir()
    (src / "app.tsx").write_text("export {}\n")
    (src / "app.test.tsx").write_text("test()\n")
    (src / "styles.css").write_text("body {}\n")
    (src / "notes.md").write_text("# Notes\n")
    nm = root / "node_modules" / "pkg"
    nm.mkdir(parents=True)
    (nm / "index.js").write_text("module.exports = {}\n")
    dist = root / "dist"
    dist.mkdir()
    (dist / "bundle.js").write_text("\n")


def test_walk_collects_supported_extensions(tmp_path: Path):
    _make_tree(tmp_path)
    names = sorted(p.name for p in enumerate_files(tmp_path))
    assert names == ["app.test.tsx", "app.tsx", "index.ts", "styles.css"]


def test_walk_prunes_denied_directories(tmp_path: Path):
    _make_tree(tmp_path)
    result = [p.relative_to(tmp_path).as_posix() for p in enumerate_files(tmp_path)]
    assert not any("node_modules" in p for p in result)
    assert not any("dist" in p for p in result)


def test_walk_denied_directories_win_over_negation(tmp_path: Path):
    _make_tree(tmp_path)
    engine = IgnoreEngine()
    engine.add_patterns(["!node_modules/"])
    result = enumerate_files(tmp_path, ignore_engine=engine, project_root=tmp_path)
    assert not any("node_modules" in p.relative_to(tmp_path).parts for p in result)


def test_walk_applies_ignore_rules(tmp_path: Path):
    _make_tree(tmp_path)
    engine = IgnoreEngine()
    engine.add_patterns(["*.test.tsx", "*.css"])
    result = enumerate_files(tmp_path, ignore_engine=engine, project_root=tmp_path)
    assert sorted(p.name for p in result) == ["app.tsx", "index.ts"]


def test_walk_ignored_directory_is_not_entered(tmp_path: Path):
    _make_tree(tmp_path)
    engine = IgnoreEngine()
    engine.add_patterns(["src/"])
    result = enumerate_files(tmp_path, ignore_engine=engine, project_root=tmp_path)
    assert [p.name for p in result] == ["index.ts"]


def test_walk_ignore_rules_need_project_root(tmp_path: Path):
    _make_tree(tmp_path)
    engine = IgnoreEngine()
    engine.add_patterns(["*.css"])
    result = enumerate_files(tmp_path, ignore_engine=engine)
    assert "styles.css" in [p.name for p in result]


def test_walk_custom_extensions(tmp_path: Path):
    _make_tree(tmp_path)
    result = enumerate_files(tmp_path, allowed_extensions=[".MD"])
    assert [p.name for p in result] == ["notes.md"]


def test_walk_extension_match_is_case_insensitive(tmp_path: Path):
    (tmp_path / "LEGACY.JS").write_text("\n")
    assert [p.name for p in enumerate_files(tmp_path)] == ["LEGACY.JS"]


def test_walk_max_depth(tmp_path: Path):
    current = tmp_path
    for i in range(4):
        current = current / f"level{i}"
        current.mkdir()
        (current / f"file{i}.js").write_text("\n")
    result = enumerate_files(tmp_path, max_depth=2)
    assert sorted(p.name for p in result) == ["file0.js", "file1.js"]


def test_walk_max_files(tmp_path: Path):
    for i in range(10):
        (tmp_path / f"f{i}.ts").write_text("\n")
    assert len(enumerate_files(tmp_path, max_files=3)) == 3


def test_walk_returns_paths_under_root(tmp_path: Path):
    _make_tree(tmp_path)
    for p in enumerate_files(tmp_path):
        assert p.is_relative_to(tmp_path)


def test_walk_negation_reincludes_file_under_ignored_directory(tmp_path: Path):
    out = tmp_path / "out"
    out.mkdir()
    (out / "keep.js").write_text("\n")
    (out / "drop.js").write_text("\n")
    (tmp_path / "main.ts").write_text("\n")
    engine = IgnoreEngine()
    engine.add_patterns(["out/", "!out/keep.js"])
    result = enumerate_files(tmp_path, ignore_engine=engine, project_root=tmp_path)
    assert sorted(p.relative_to(tmp_path).as_posix() for p in result) == ["main.ts", "out/keep.js"]
