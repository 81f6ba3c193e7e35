"""Per-line structural classification.

A line is run through :data:`LINE_MATCHERS` in order. Every matcher that fits
contributes a match; blank and comment lines stop the scan (and contribute no
depth change), everything else keeps going so that, for instance, a dotted
continuation line is also seen as a command statement.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, ClassVar, Optional, Union

from .indent import DepthChange


class LineKind(str, Enum):
    BLANK = "blank"
    COMMENT = "comment"
    CONTINUATION = "continuation"
    CLOSING_BRACE = "closing_brace"
    COMMAND = "command"
    ASSIGNMENT = "assignment"


TERMINAL_KINDS = frozenset({LineKind.BLANK, LineKind.COMMENT})

_COMMENT = re.compile(r"^(\s*)(//+|#+;\s*|;)(.*)")
_DOTS = re.compile(r"^\s+(?:\.\s*)+")
_CLOSING_BRACE = re.compile(r"^(\s+)\}(\s*)(.*)$")
# Keywords are ASCII letters only; ``\b`` stays Unicode-aware so a keyword
# prefix of a non-ASCII identifier is not split off and respelled.
_COMMAND = re.compile(r"^(\s+[\s.]*)\b([A-Za-z]+)\b")
_SET_ASSIGNMENT = re.compile(
    r"^\s*(?:\.\s*)*[Ss](?:[Ee][Tt])?\s+\^?%?"
    r"[A-Za-z][A-Za-z0-9]*(?:\.[A-Za-z][A-Za-z0-9]*)*(\s*=\s*)"
)
_DEPTH_RESET = re.compile(r"^(?:\w+|\{)", re.ASCII)
_DEPTH_OPEN = re.compile(r".+\{(?!.*\})")


@dataclass(frozen=True, slots=True)
class Span:
    """Column range ``[start, end)`` of a line together with its text."""

    start: int
    end: int
    text: str

    @classmethod
    def of_group(cls, match: re.Match[str], group: int) -> "Span":
        return cls(match.start(group), match.end(group), match.group(group))


@dataclass(frozen=True, slots=True)
class BlankLine:
    kind: ClassVar[LineKind] = LineKind.BLANK

    span: Span


@dataclass(frozen=True, slots=True)
class CommentLine:
    kind: ClassVar[LineKind] = LineKind.COMMENT

    indent: Span
    marker: str

    @property
    def doc_comment(self) -> bool:
        """``///`` comments written at column zero stay at column zero."""

        return not self.indent.text and "///" in self.marker


@dataclass(frozen=True, slots=True)
class ContinuationDots:
    kind: ClassVar[LineKind] = LineKind.CONTINUATION

    prefix: Span

    @property
    def dot_count(self) -> int:
        return self.prefix.text.count(".")


@dataclass(frozen=True, slots=True)
class ClosingBrace:
    kind: ClassVar[LineKind] = LineKind.CLOSING_BRACE

    indent: Span
    gap: Span
    trailing: str

    @property
    def splits(self) -> bool:
        return bool(self.trailing)


@dataclass(frozen=True, slots=True)
class CommandStatement:
    kind: ClassVar[LineKind] = LineKind.COMMAND

    lead: Span
    word: Span

    @property
    def continued(self) -> bool:
        return "." in self.lead.text


@dataclass(frozen=True, slots=True)
class SetAssignment:
    kind: ClassVar[LineKind] = LineKind.ASSIGNMENT

    operator: Span


LineMatch = Union[
    BlankLine, CommentLine, ContinuationDots, ClosingBrace, CommandStatement, SetAssignment
]


def match_blank(text: str) -> Optional[BlankLine]:
    if text and not text.strip():
        return BlankLine(Span(0, len(text), text))
    return None


def match_comment(text: str) -> Optional[CommentLine]:
    found = _COMMENT.match(text)
    if not found:
        return None
    return CommentLine(indent=Span.of_group(found, 1), marker=found.group(2))


def match_continuation(text: str) -> Optional[ContinuationDots]:
    found = _DOTS.match(text)
    if not found:
        return None
    return ContinuationDots(prefix=Span.of_group(found, 0))


def match_closing_brace(text: str) -> Optional[ClosingBrace]:
    found = _CLOSING_BRACE.match(text)
    if not found:
        return None
    return ClosingBrace(
        indent=Span.of_group(found, 1),
        gap=Span.of_group(found, 2),
        trailing=found.group(3),
    )


def match_command(text: str) -> Optional[CommandStatement]:
    found = _COMMAND.match(text)
    if not found:
        return None
    return CommandStatement(lead=Span.of_group(found, 1), word=Span.of_group(found, 2))


def match_set_assignment(text: str) -> Optional[SetAssignment]:
    found = _SET_ASSIGNMENT.match(text)
    if not found:
        return None
    return SetAssignment(operator=Span.of_group(found, 1))


def depth_change(text: str) -> DepthChange:
    if _DEPTH_RESET.match(text):
        return DepthChange.RESET
    if _DEPTH_OPEN.search(text):
        return DepthChange.OPEN
    return DepthChange.NONE


LINE_MATCHERS: tuple[tuple[LineKind, Callable[[str], Optional[LineMatch]]], ...] = (
    (LineKind.BLANK, match_blank),
    (LineKind.COMMENT, match_comment),
    (LineKind.CONTINUATION, match_continuation),
    (LineKind.CLOSING_BRACE, match_closing_brace),
    (LineKind.COMMAND, match_command),
    (LineKind.ASSIGNMENT, match_set_assignment),
)


@dataclass(frozen=True, slots=True)
class ClassifiedLine:
    index: int
    text: str
    matches: tuple[LineMatch, ...]
    depth_change: DepthChange = DepthChange.NONE

    @property
    def kinds(self) -> tuple[LineKind, ...]:
        return tuple(match.kind for match in self.matches)

    def get(self, kind: LineKind) -> Optional[LineMatch]:
        for match in self.matches:
            if match.kind is kind:
                return match
        return None


def classify_line(index: int, text: str) -> ClassifiedLine:
    matches: list[LineMatch] = []
    for kind, matcher in LINE_MATCHERS:
        found = matcher(text)
        if found is None:
            continue
        matches.append(found)
        if kind in TERMINAL_KINDS:
            return ClassifiedLine(index, text, tuple(matches))
    return ClassifiedLine(index, text, tuple(matches), depth_change(text))


__all__ = [
    "BlankLine",
    "ClassifiedLine",
    "ClosingBrace",
    "CommandStatement",
    "CommentLine",
    "ContinuationDots",
    "LINE_MATCHERS",
    "LineKind",
    "LineMatch",
    "SetAssignment",
    "Span",
    "TERMINAL_KINDS",
    "classify_line",
    "depth_change",
]
