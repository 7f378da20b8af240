"""Types describing import specifiers and how they resolved."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class ImportKind(str, Enum):
    """How an import specifier was classified."""

    relative = "relative"
    rooted = "rooted"
    external = "external"
    unresolved = "unresolved"


@dataclass(frozen=True)
class ImportReference:
    """An import specifier found in a file, with its resolution outcome."""

    specifier: str
    resolved_path: Path | None
    kind: ImportKind
