"""Delivering combined text to the clipboard or a file."""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum
from pathlib import Path

from codestitch.errors import OutputDestinationError

ClipboardWriter = Callable[[str], None]


class OutputTarget(str, Enum):
    """Where combined text goes."""

    clipboard = "clipboard"
    file = "file"


def deliver(
    content: str,
    target: OutputTarget | str,
    output_path: str | Path | None = None,
    clipboard: ClipboardWriter | None = None,
) -> None:
    """
    Write `content` to its destination. The clipboard is supplied by the host
    application as a callable; codestitch has no clipboard access of its own.
    """
    target = OutputTarget(target)
    if target == OutputTarget.clipboard:
        if clipboard is None:
            raise OutputDestinationError("No clipboard available")
        clipboard(content)
        return

    if not output_path:
        raise OutputDestinationError("Output path not specified")
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
