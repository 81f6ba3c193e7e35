"""Stateless pass that re-spells ``$function`` and ``$variable`` tokens."""

from __future__ import annotations

import re
from typing import Iterator, Optional

from scriptfmt.aliases import Canonicalizer
from scriptfmt.buffer import CancellationToken, DocumentSource, TextEdit

from .classifier import Span

# ``$$name`` is an extrinsic call, not a system function.
_DOLLAR_TOKEN = re.compile(r"(?<!\$)\$\b[A-Za-z]+\b")


def iter_dollar_tokens(text: str) -> Iterator[Span]:
    for found in _DOLLAR_TOKEN.finditer(text):
        yield Span(found.start(), found.end(), found.group(0))


def scan_line(index: int, text: str, canonicalizer: Canonicalizer) -> list[TextEdit]:
    edits: list[TextEdit] = []
    for token in iter_dollar_tokens(text):
        expected = canonicalizer.function_spelling(token.text)
        if expected is not None and expected != token.text:
            edits.append(TextEdit.on_line(index, token.start, token.end, expected))
    return edits


def scan_document(
    document: DocumentSource,
    canonicalizer: Canonicalizer,
    *,
    cancellation: Optional[CancellationToken] = None,
) -> list[TextEdit]:
    edits: list[TextEdit] = []
    for index in range(document.line_count):
        if cancellation is not None and cancellation.cancelled:
            break
        edits.extend(scan_line(index, document.get_line(index), canonicalizer))
    return edits


__all__ = ["iter_dollar_tokens", "scan_document", "scan_line"]
