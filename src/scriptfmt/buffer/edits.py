"""Text edits produced by the formatter and their atomic application."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from scriptfmt.runtime import telemetry

from .document import Position, ScriptDocument
from .sync import DocumentSource
from .validation import ensure_position


@dataclass(frozen=True, slots=True)
class TextEdit:
    """Replace ``[start, end)`` of the original document with ``new_text``."""

    start_line: int
    start_col: int
    end_line: int
    end_col: int
    new_text: str

    @classmethod
    def on_line(cls, line: int, start: int, end: int, new_text: str) -> "TextEdit":
        return cls(line, start, line, end, new_text)

    @property
    def start(self) -> Position:
        return (self.start_line, self.start_col)

    @property
    def end(self) -> Position:
        return (self.end_line, self.end_col)

    def original_text(self, document: DocumentSource) -> str:
        if self.start_line != self.end_line:
            lines = [document.get_line(i) for i in range(self.start_line, self.end_line + 1)]
            lines[0] = lines[0][self.start_col :]
            lines[-1] = lines[-1][: self.end_col]
            return "\n".join(lines)
        return document.get_line(self.start_line)[self.start_col : self.end_col]

    def is_noop(self, document: DocumentSource) -> bool:
        return self.original_text(document) == self.new_text


class EditConflictError(RuntimeError):
    """Raised when two edits target overlapping ranges."""

    def __init__(self, first: TextEdit, second: TextEdit) -> None:
        super().__init__(
            f"Edit at {second.start} overlaps edit spanning {first.start}-{first.end}"
        )
        self.first = first
        self.second = second


def sort_edits(edits: Iterable[TextEdit]) -> list[TextEdit]:
    return sorted(edits, key=lambda edit: (edit.start, edit.end))


def ensure_disjoint(edits: Sequence[TextEdit]) -> list[TextEdit]:
    ordered = sort_edits(edits)
    for previous, current in zip(ordered, ordered[1:]):
        if current.start < previous.end:
            raise EditConflictError(previous, current)
    return ordered


def apply_edits(document: ScriptDocument | str, edits: Sequence[TextEdit]) -> str:
    """Apply every edit against the original offsets in a single pass."""

    if isinstance(document, str):
        document = ScriptDocument.from_text(document)
    ordered = ensure_disjoint(edits)
    with telemetry.span(
        "buffer::apply_edits",
        component="buffer",
        metadata={"edits": len(ordered)},
    ):
        text = document.text
        pieces: list[str] = []
        cursor = 0
        for edit in ordered:
            start = document.offset_at(ensure_position(document, edit.start))
            end = document.offset_at(ensure_position(document, edit.end))
            pieces.append(text[cursor:start])
            pieces.append(edit.new_text.replace("\n", document.newline))
            cursor = end
        pieces.append(text[cursor:])
        return "".join(pieces)


__all__ = [
    "EditConflictError",
    "TextEdit",
    "apply_edits",
    "ensure_disjoint",
    "sort_edits",
]
