"""Brace-depth state threaded through the structural pass."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

ROOT_DEPTH = 1


class DepthChange(str, Enum):
    """Effect a line has on the depth of the line after it."""

    NONE = "none"
    RESET = "reset"
    OPEN = "open"


@dataclass(frozen=True, slots=True)
class IndentState:
    depth: int = ROOT_DEPTH

    def close_block(self) -> "IndentState":
        # Extra closing braces bottom out at column zero.
        return IndentState(max(self.depth - 1, 0))

    def open_block(self) -> "IndentState":
        return IndentState(self.depth + 1)

    def after_line(self, change: DepthChange) -> "IndentState":
        if change is DepthChange.RESET:
            return IndentState(ROOT_DEPTH)
        if change is DepthChange.OPEN:
            return self.open_block()
        return self


__all__ = ["DepthChange", "IndentState", "ROOT_DEPTH"]
