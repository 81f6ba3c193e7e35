"""Document formatter: structural fold followed by the token scan."""

from __future__ import annotations

from functools import lru_cache
from typing import Callable, Dict, Optional

from scriptfmt.aliases import AliasTable, Canonicalizer, CasingConfig, load_default_aliases
from scriptfmt.buffer import (
    CancellationToken,
    DocumentSource,
    ScriptDocument,
    TextEdit,
    apply_edits,
)
from scriptfmt.runtime.telemetry import record_event, span

from .classifier import (
    BlankLine,
    ClassifiedLine,
    ClosingBrace,
    CommandStatement,
    CommentLine,
    ContinuationDots,
    LineKind,
    LineMatch,
    SetAssignment,
    Span,
    classify_line,
)
from .indent import IndentState
from .options import FormattingOptions
from .scanner import scan_document

ASSIGNMENT_OPERATOR = " = "

LineHandler = Callable[
    [ClassifiedLine, LineMatch, IndentState, FormattingOptions],
    tuple[IndentState, list[TextEdit]],
]


class ScriptFormatter:
    """Computes the edits that normalize one document.

    The structural pass is a fold over the lines: each step takes the
    current :class:`IndentState` and returns the next one together with the
    edits for that line. The token pass has no state at all.
    """

    def __init__(
        self, canonicalizer: Canonicalizer, *, logger_name: str | None = None
    ) -> None:
        self._canonicalizer = canonicalizer
        self._logger_name = logger_name
        self._handlers: Dict[LineKind, LineHandler] = {
            LineKind.BLANK: self._blank,
            LineKind.COMMENT: self._comment,
            LineKind.CONTINUATION: self._continuation,
            LineKind.CLOSING_BRACE: self._closing_brace,
            LineKind.COMMAND: self._command,
            LineKind.ASSIGNMENT: self._assignment,
        }

    @property
    def canonicalizer(self) -> Canonicalizer:
        return self._canonicalizer

    def format(
        self,
        document: DocumentSource,
        options: Optional[FormattingOptions] = None,
        *,
        cancellation: Optional[CancellationToken] = None,
        initial_state: Optional[IndentState] = None,
    ) -> list[TextEdit]:
        options = options or FormattingOptions()
        with span(
            "formatting::format",
            logger_name=self._logger_name,
            component="formatting",
            metadata={
                "lines": document.line_count,
                "tab_size": options.tab_size,
                "insert_spaces": options.insert_spaces,
            },
        ) as handle:
            state = initial_state or IndentState()
            edits: list[TextEdit] = []
            for index in range(document.line_count):
                if cancellation is not None and cancellation.cancelled:
                    handle.cancel(f"structural pass stopped at line {index}")
                    return edits
                line = classify_line(index, document.get_line(index))
                state, line_edits = self.format_line(line, state, options)
                edits.extend(line_edits)
            handle.add_metadata("final_depth", state.depth)

            edits.extend(
                scan_document(document, self._canonicalizer, cancellation=cancellation)
            )
            if cancellation is not None and cancellation.cancelled:
                handle.cancel("token pass interrupted")
            handle.add_metadata("edits", len(edits))
            handle.summary()
            return edits

    def format_line(
        self, line: ClassifiedLine, state: IndentState, options: FormattingOptions
    ) -> tuple[IndentState, list[TextEdit]]:
        """Run every matching handler for ``line`` and advance the depth."""

        edits: list[TextEdit] = []
        for match in line.matches:
            state, produced = self._handlers[match.kind](line, match, state, options)
            edits.extend(edit for edit in produced if not _unchanged(line, edit))
        return state.after_line(line.depth_change), edits

    def _blank(
        self,
        line: ClassifiedLine,
        match: BlankLine,
        state: IndentState,
        options: FormattingOptions,
    ) -> tuple[IndentState, list[TextEdit]]:
        return state, [TextEdit.on_line(line.index, 0, match.span.end, "")]

    def _comment(
        self,
        line: ClassifiedLine,
        match: CommentLine,
        state: IndentState,
        options: FormattingOptions,
    ) -> tuple[IndentState, list[TextEdit]]:
        if not options.insert_spaces:
            return state, []
        target = "" if match.doc_comment else options.indent(state.depth)
        return state, [TextEdit.on_line(line.index, 0, match.indent.end, target)]

    def _continuation(
        self,
        line: ClassifiedLine,
        match: ContinuationDots,
        state: IndentState,
        options: FormattingOptions,
    ) -> tuple[IndentState, list[TextEdit]]:
        if not options.insert_spaces:
            return state, []
        step = "." + " " * (options.tab_size - 1)
        target = " " * options.tab_size + step * match.dot_count
        return state, [TextEdit.on_line(line.index, 0, match.prefix.end, target)]

    def _closing_brace(
        self,
        line: ClassifiedLine,
        match: ClosingBrace,
        state: IndentState,
        options: FormattingOptions,
    ) -> tuple[IndentState, list[TextEdit]]:
        """Dedent the brace and move any trailing text onto its own line.

        Trailing text that is itself a ``}`` closes another block, so a run of
        braces on one line comes out one per line at decreasing depth.
        """

        state = state.close_block()
        edits: list[TextEdit] = []
        target = match.indent.text
        if options.insert_spaces:
            target = options.indent(state.depth)
            edits.append(TextEdit.on_line(line.index, 0, match.indent.end, target))

        offset = 0
        while match.splits:
            moved = classify_line(line.index, " " + match.trailing)
            nested = moved.get(LineKind.CLOSING_BRACE)
            if isinstance(nested, ClosingBrace):
                state = state.close_block()
                if options.insert_spaces:
                    target = options.indent(state.depth)
            gap_start, gap_end = match.gap.start + offset, match.gap.end + offset
            edits.append(TextEdit.on_line(line.index, gap_start, gap_end, "\n" + target))
            # Columns of ``moved`` are shifted by the leading space added above.
            offset = gap_end - 1
            if not isinstance(nested, ClosingBrace):
                edits.extend(self._split_edits(line.index, moved, offset))
                break
            match = nested
        return state, edits

    def _split_edits(
        self, index: int, moved: ClassifiedLine, offset: int
    ) -> list[TextEdit]:
        """Format the text moved off a ``}`` line as the line it becomes."""

        edits: list[TextEdit] = []
        for found in moved.matches:
            if isinstance(found, CommandStatement):
                edits.extend(self._respell(index, found.word, offset))
            elif isinstance(found, SetAssignment):
                edits.append(self._spaced_operator(index, found.operator, offset))
        return edits

    def _command(
        self,
        line: ClassifiedLine,
        match: CommandStatement,
        state: IndentState,
        options: FormattingOptions,
    ) -> tuple[IndentState, list[TextEdit]]:
        edits: list[TextEdit] = []
        if options.insert_spaces and not match.continued:
            target = options.indent(state.depth)
            edits.append(TextEdit.on_line(line.index, 0, match.lead.end, target))
        edits.extend(self._respell(line.index, match.word))
        return state, edits

    def _assignment(
        self,
        line: ClassifiedLine,
        match: SetAssignment,
        state: IndentState,
        options: FormattingOptions,
    ) -> tuple[IndentState, list[TextEdit]]:
        return state, [self._spaced_operator(line.index, match.operator)]

    def _respell(self, index: int, word: Span, offset: int = 0) -> list[TextEdit]:
        expected = self._canonicalizer.command_spelling(word.text)
        if expected is None or expected == word.text:
            return []
        return [TextEdit.on_line(index, word.start + offset, word.end + offset, expected)]

    @staticmethod
    def _spaced_operator(index: int, operator: Span, offset: int = 0) -> TextEdit:
        return TextEdit.on_line(
            index, operator.start + offset, operator.end + offset, ASSIGNMENT_OPERATOR
        )


def _unchanged(line: ClassifiedLine, edit: TextEdit) -> bool:
    return line.text[edit.start_col : edit.end_col] == edit.new_text


@lru_cache(maxsize=1)
def default_table() -> AliasTable:
    """Packaged alias table, loaded and frozen once per process."""

    return load_default_aliases()


def default_formatter(casing: Optional[CasingConfig] = None) -> ScriptFormatter:
    return ScriptFormatter(Canonicalizer(default_table(), casing=casing))


def format_document(
    text: str,
    options: Optional[FormattingOptions] = None,
    *,
    casing: Optional[CasingConfig] = None,
) -> list[TextEdit]:
    return default_formatter(casing).format(ScriptDocument.from_text(text), options)


def format_text(
    text: str,
    options: Optional[FormattingOptions] = None,
    *,
    casing: Optional[CasingConfig] = None,
    formatter: Optional[ScriptFormatter] = None,
) -> str:
    """Return ``text`` with every computed edit applied."""

    document = ScriptDocument.from_text(text)
    formatter = formatter or default_formatter(casing)
    edits = formatter.format(document, options)
    if not edits:
        return text
    record_event("formatting.applied", level="debug", data={"edits": len(edits)})
    return apply_edits(document, edits)


__all__ = [
    "ASSIGNMENT_OPERATOR",
    "ScriptFormatter",
    "default_formatter",
    "default_table",
    "format_document",
    "format_text",
]
