"""
codestitch: follow a project's imports from its entry points and stitch every
reachable source file into one text, or into a dependency tree.

Usage::

    from codestitch import AggregationEngine, OutputMode

    engine = AggregationEngine()
    engine.ignore_engine.add_preset("tests")
    output = engine.aggregate(["src/main.ts"], OutputMode.compact)
    print(output.render())
"""

from codestitch.aggregate import AggregationEngine, AggregationOutput, OutputMode
from codestitch.discovery import IgnoreEngine, enumerate_files, get_presets
from codestitch.errors import (
    CodestitchError,
    ConfigParseError,
    EmptyEntrySetError,
    OutputDestinationError,
    ProjectRootConflictError,
    TransformFailure,
)
from codestitch.graph import DependencyNode
from codestitch.project import ProjectContext, ProjectRootLocator
from codestitch.stats import Stats, StatsCalculator

__all__ = [
    "AggregationEngine",
    "AggregationOutput",
    "CodestitchError",
    "ConfigParseError",
    "DependencyNode",
    "EmptyEntrySetError",
    "IgnoreEngine",
    "OutputDestinationError",
    "OutputMode",
    "ProjectContext",
    "ProjectRootConflictError",
    "ProjectRootLocator",
    "Stats",
    "StatsCalculator",
    "TransformFailure",
    "enumerate_files",
    "get_presets",
]
