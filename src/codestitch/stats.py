"""
Size, token, and cost estimates for produced text.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import asdict, dataclass, field, replace
from pathlib import Path
from typing import Any

CHARS_PER_TOKEN = 4
COST_PER_1K_TOKENS = 0.03


@dataclass(frozen=True)
class Stats:
    """Metrics for one output, optionally compared with a pre-transform baseline."""

    files_processed: int
    size_bytes: int
    token_estimate: int
    cost_estimate: float
    files: list[str] = field(default_factory=list)
    original_size_bytes: int | None = None
    original_token_estimate: int | None = None
    tokens_saved: int | None = None
    cost_saved: float | None = None

    @property
    def size_kb(self) -> float:
        return self.size_bytes / 1024

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["size_kb"] = round(self.size_kb, 2)
        return data


class StatsCalculator:
    """
    Token and cost estimates at a fixed characters-per-token ratio.

    Tokens are estimated from the character count; sizes are UTF-8 bytes.
    """

    def __init__(
        self,
        chars_per_token: int = CHARS_PER_TOKEN,
        cost_per_1k_tokens: float = COST_PER_1K_TOKENS,
    ) -> None:
        self.chars_per_token = chars_per_token
        self.cost_per_1k_tokens = cost_per_1k_tokens

    def estimate_tokens(self, content: str) -> int:
        return math.ceil(len(content) / self.chars_per_token)

    def estimate_cost(self, tokens: int) -> float:
        return tokens / 1000 * self.cost_per_1k_tokens

    def from_content(self, content: str, files: Iterable[str | Path] = ()) -> Stats:
        file_list = [str(f) for f in files]
        tokens = self.estimate_tokens(content)
        return Stats(
            files_processed=len(file_list),
            size_bytes=len(content.encode("utf-8")),
            token_estimate=tokens,
            cost_estimate=self.estimate_cost(tokens),
            files=file_list,
        )

    def comparative(self, original: str, processed: str, files: Iterable[str | Path] = ()) -> Stats:
        """Stats for `processed`, with savings relative to `original`."""
        base = self.from_content(processed, files)
        original_tokens = self.estimate_tokens(original)
        return replace(
            base,
            original_size_bytes=len(original.encode("utf-8")),
            original_token_estimate=original_tokens,
            tokens_saved=original_tokens - base.token_estimate,
            cost_saved=self.estimate_cost(original_tokens) - base.cost_estimate,
        )
