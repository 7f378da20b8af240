"""Reading `.gitignore`-style descriptor files."""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

GITIGNORE_NAME = ".gitignore"


def _read_ignore_file(path: Path) -> list[str] | None:
    """
    Read pattern lines from an ignore file, dropping blank lines and `#` comments.
    Returns `None` if the file is missing, unreadable, or not valid UTF-8.
    """
    if not path.is_file():
        return None
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Could not read ignore file %s: %s", path, e)
        return None
    lines = [line.strip() for line in text.splitlines()]
    return [line for line in lines if line and not line.startswith("#")]


def load_gitignore(directory: Path) -> list[str]:
    """
    Read `.gitignore` in the given directory and return its patterns, or an
    empty list if the file doesn't exist or has no patterns.
    """
    return _read_ignore_file(directory / GITIGNORE_NAME) or []
