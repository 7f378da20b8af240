"""Errors raised by codestitch. Fatal ones abort a run; the rest are logged and skipped."""

from __future__ import annotations


class CodestitchError(Exception):
    """Base class for codestitch errors."""


class ConfigParseError(CodestitchError):
    """A `package.json` or config file could not be parsed."""


class EmptyEntrySetError(CodestitchError):
    """No files were selected or found after filtering."""


class TransformFailure(CodestitchError):
    """The external transformer failed. Callers fall back to local output."""


class OutputDestinationError(CodestitchError):
    """No usable destination was given for the output."""


class ProjectRootConflictError(CodestitchError):
    """The project root was already fixed for this run and a different one was given."""
