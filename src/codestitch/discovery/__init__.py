"""
Source file discovery: gitignore-compatible ignore rules, preset catalogs,
and a bounded directory walker.

No imports from `codestitch` outside this package.

Usage::

    from codestitch.discovery import IgnoreEngine, enumerate_files

    engine = IgnoreEngine()
    engine.load_from_descriptor(root)
    engine.add_preset("tests")
    files = enumerate_files(root, ignore_engine=engine, project_root=root)
"""

from codestitch.discovery.defaults import (
    DENIED_DIRECTORIES,
    EXTENSION_META,
    SUPPORTED_EXTENSIONS,
    ExtensionMeta,
    loader_config,
)
from codestitch.discovery.ignore import IgnoreEngine
from codestitch.discovery.presets import PRESETS, Preset, get_presets
from codestitch.discovery.walker import enumerate_files

__all__ = [
    "DENIED_DIRECTORIES",
    "EXTENSION_META",
    "PRESETS",
    "SUPPORTED_EXTENSIONS",
    "ExtensionMeta",
    "IgnoreEngine",
    "Preset",
    "enumerate_files",
    "get_presets",
    "loader_config",
]
