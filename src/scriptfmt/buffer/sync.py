"""Boundary types shared with hosts that own the live document."""

from __future__ import annotations

from typing import Optional, Protocol

from .document import Position


class DocumentSource(Protocol):
    """Anything that can hand the formatter its lines, one index at a time."""

    @property
    def line_count(self) -> int:
        ...

    def get_line(self, index: int) -> str:
        ...


class CancellationToken(Protocol):
    """Cooperative cancellation flag polled between lines."""

    @property
    def cancelled(self) -> bool:
        ...


class CancellationFlag:
    """Minimal in-process :class:`CancellationToken`."""

    def __init__(self) -> None:
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True


class BufferValidationError(RuntimeError):
    """Raised when an edit points outside the document it is applied to."""

    def __init__(self, message: str, *, position: Optional[Position] = None) -> None:
        super().__init__(message)
        self.position = position
