"""Read-only document model consumed by the formatter."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, NamedTuple, Tuple

Position = Tuple[int, int]  # (line, column)


class Line(NamedTuple):
    index: int
    text: str


@dataclass(frozen=True, slots=True)
class ScriptDocument:
    """Immutable list-of-lines view over a script's text.

    ``newline`` remembers the separator found in the source so that edits can
    be applied back onto the original text without rewriting line endings.
    """

    _lines: Tuple[str, ...] = ("",)
    newline: str = "\n"

    @classmethod
    def from_text(cls, text: str) -> "ScriptDocument":
        newline = "\r\n" if "\r\n" in text else "\n"
        lines = text.split(newline)
        return cls(_lines=tuple(lines), newline=newline)

    @classmethod
    def from_lines(cls, lines: Tuple[str, ...] | list[str]) -> "ScriptDocument":
        return cls(_lines=tuple(lines) or ("",))

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def get_line(self, index: int) -> str:
        return self._lines[index]

    def snapshot(self) -> Tuple[str, ...]:
        return self._lines

    def lines(self) -> Iterator[Line]:
        for index, text in enumerate(self._lines):
            yield Line(index, text)

    def line_range(self, index: int) -> tuple[Position, Position]:
        return (index, 0), (index, len(self._lines[index]))

    @property
    def text(self) -> str:
        return self.newline.join(self._lines)

    def offset_at(self, position: Position) -> int:
        row, col = position
        separator = len(self.newline)
        return sum(len(self._lines[i]) + separator for i in range(row)) + col
