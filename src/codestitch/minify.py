"""
Conservative text minification used for compact output.

Only comments and whitespace are touched; code is never rewritten.
"""

from __future__ import annotations

import re

# Block comments; `/*! ... */` license-style comments are captured so they survive.
_BLOCK_COMMENT = re.compile(r"(/\*![\s\S]*?\*/)|/\*[\s\S]*?\*/")

# `//` to end of line, wherever it starts. Not after `:` so `http://` is left alone.
_LINE_COMMENT = re.compile(r"(?<![:/])//[^\n]*$", re.MULTILINE)

_WHITESPACE = re.compile(r"\s+")


def minify(content: str) -> str:
    """Strip comments (keeping `/*! */`) and collapse whitespace runs to one space."""
    content = _BLOCK_COMMENT.sub(lambda m: m.group(1) or "", content)
    content = _LINE_COMMENT.sub("", content)
    content = _WHITESPACE.sub(" ", content)
    return content.strip()
