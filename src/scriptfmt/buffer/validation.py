"""Validation helpers shared across buffer services."""

from __future__ import annotations

from .document import Position, ScriptDocument
from .sync import BufferValidationError


def ensure_position(document: ScriptDocument, position: Position) -> Position:
    row, col = position
    if row < 0 or row >= document.line_count:
        raise BufferValidationError("Row out of range", position=position)
    if col < 0 or col > len(document.get_line(row)):
        raise BufferValidationError("Column out of range", position=position)
    return position
