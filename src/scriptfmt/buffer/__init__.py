"""Document model, text edits and host boundary types."""

from .document import Line, Position, ScriptDocument
from .edits import EditConflictError, TextEdit, apply_edits, ensure_disjoint, sort_edits
from .sync import BufferValidationError, CancellationFlag, CancellationToken, DocumentSource
from .validation import ensure_position

__all__ = [
    "Line",
    "Position",
    "ScriptDocument",
    "TextEdit",
    "EditConflictError",
    "apply_edits",
    "ensure_disjoint",
    "sort_edits",
    "BufferValidationError",
    "CancellationFlag",
    "CancellationToken",
    "DocumentSource",
    "ensure_position",
]
