"""Import specifier extraction and resolution."""

from codestitch.imports.extractor import IMPORT_PATTERN, ImportExtractor, root_segment
from codestitch.imports.resolver import ImportResolver, locate_source
from codestitch.imports.types import ImportKind, ImportReference

__all__ = [
    "IMPORT_PATTERN",
    "ImportExtractor",
    "ImportKind",
    "ImportReference",
    "ImportResolver",
    "locate_source",
    "root_segment",
]
