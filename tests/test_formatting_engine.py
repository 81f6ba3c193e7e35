from __future__ import annotations

from typing import Sequence

from scriptfmt.aliases import CasingConfig
from scriptfmt.buffer import CancellationFlag, ScriptDocument, TextEdit, apply_edits
from scriptfmt.formatting import (
    FormattingOptions,
    IndentState,
    ScriptFormatter,
    format_document,
    format_text,
)

from conftest import build_formatter


def run(
    formatter: ScriptFormatter,
    lines: Sequence[str],
    *,
    tab_size: int = 4,
    insert_spaces: bool = True,
) -> list[TextEdit]:
    document = ScriptDocument.from_lines(list(lines))
    options = FormattingOptions(tab_size=tab_size, insert_spaces=insert_spaces)
    return formatter.format(document, options)


def edit(line: int, start: int, end: int, text: str) -> TextEdit:
    return TextEdit.on_line(line, start, end, text)


def test_empty_document_has_no_edits(bare_formatter) -> None:
    assert bare_formatter.format(ScriptDocument.from_text("")) == []


def test_whitespace_only_line_is_cleared(bare_formatter) -> None:
    assert run(bare_formatter, ["   "]) == [edit(0, 0, 3, "")]


def test_comment_indented_to_depth(bare_formatter) -> None:
    assert run(bare_formatter, ["// comment"]) == [edit(0, 0, 0, "    ")]
    assert run(bare_formatter, ["  ; note"]) == [edit(0, 0, 2, "    ")]


def test_doc_comment_stays_at_column_zero(bare_formatter) -> None:
    assert run(bare_formatter, ["///doc"]) == []
    assert run(bare_formatter, ["  ///doc"]) == [edit(0, 0, 2, "    ")]


def test_closing_brace_returns_to_outer_depth(bare_formatter) -> None:
    edits = run(bare_formatter, ["  if (x) {", "  }"])

    assert edits == [edit(0, 0, 2, "    "), edit(1, 0, 2, "    ")]


def test_nested_block_indentation(bare_formatter) -> None:
    source = "\n".join(
        [
            "ClassMethod Run()",
            "{",
            "  if x {",
            "  set y = 1",
            "  }",
            "}",
        ]
    )

    assert format_text(source, formatter=bare_formatter) == "\n".join(
        [
            "ClassMethod Run()",
            "{",
            "    if x {",
            "        set y = 1",
            "    }",
            "}",
        ]
    )


def test_closing_brace_splits_trailing_text() -> None:
    formatter = build_formatter(commands=[("Else", "E", "ELSE")])

    edits = run(formatter, ["  if x {", "  } ELSE {", "  quit"])

    assert edits == [
        edit(0, 0, 2, "    "),
        edit(1, 0, 2, "    "),
        edit(1, 3, 4, "\n    "),
        edit(1, 4, 8, "Else"),
        edit(2, 0, 2, "        "),
    ]


def test_split_output_is_stable(bare_formatter) -> None:
    first = format_text("  if x {\n  } else {\n  quit\n  }", formatter=bare_formatter)

    assert first == "    if x {\n    }\n    else {\n        quit\n    }"
    assert run(bare_formatter, first.split("\n")) == []


def test_brace_run_on_one_line_closes_each_block(bare_formatter) -> None:
    source = "  if a {\n  if b {\n  } }\n  quit"

    first = format_text(source, formatter=bare_formatter)

    assert first == "    if a {\n        if b {\n        }\n    }\n    quit"
    assert run(bare_formatter, first.split("\n")) == []


def test_adjacent_closing_braces_are_split(bare_formatter) -> None:
    edits = run(bare_formatter, ["  if a {", "  if b {", "  }}"])

    assert edits[2:] == [edit(2, 0, 2, "        "), edit(2, 3, 3, "\n    ")]


def test_extra_closing_braces_clamp_at_zero(bare_formatter) -> None:
    edits = run(bare_formatter, ["  }", "  }", "  quit"])

    assert edits == [edit(0, 0, 2, ""), edit(1, 0, 2, ""), edit(2, 0, 2, "")]


def test_initial_state_is_injectable(bare_formatter) -> None:
    document = ScriptDocument.from_lines(["  quit"])

    edits = bare_formatter.format(document, initial_state=IndentState(depth=3))

    assert edits == [edit(0, 0, 2, " " * 12)]


def test_top_level_line_resets_depth(bare_formatter) -> None:
    edits = run(bare_formatter, ["  if x {", "Label", "  quit"])

    assert edits == [edit(0, 0, 2, "    "), edit(2, 0, 2, "    ")]


def test_set_assignment_spacing(bare_formatter) -> None:
    assert run(bare_formatter, ["set   %x=1"]) == [edit(0, 8, 9, " = ")]
    assert run(bare_formatter, ["    set x  =  1"]) == [edit(0, 9, 14, " = ")]
    assert run(bare_formatter, ["    s x=1"]) == [edit(0, 7, 8, " = ")]
    assert run(bare_formatter, ["    set x = 1"]) == []


def test_command_casing_independent_of_indent() -> None:
    formatter = build_formatter(commands=[("echo", "ECHO")])

    assert run(formatter, ["  ECHO hi"]) == [edit(0, 0, 2, "    "), edit(0, 2, 6, "echo")]
    assert run(formatter, ["    ECHO hi"]) == [edit(0, 4, 8, "echo")]


def test_command_case_style() -> None:
    formatter = build_formatter(
        commands=[("Write", "W", "WRITE")],
        casing=CasingConfig(command_case="upper"),
    )

    assert run(formatter, ["    w 1"]) == [edit(0, 4, 5, "WRITE")]


def test_unknown_words_are_left_alone(bare_formatter) -> None:
    assert run(bare_formatter, ["    FROBNICATE x"]) == []


def test_non_ascii_identifiers_are_not_respelled() -> None:
    texts = ("    \u017f x=1", "    \u0131 x", "    set\u00e9 x=1", "    Write $p\u00e9")
    for text in texts:
        assert format_text(text) == text


def test_continuation_dots_rhythm(bare_formatter) -> None:
    assert run(bare_formatter, ["  . set x=1"]) == [
        edit(0, 0, 4, "    .   "),
        edit(0, 9, 10, " = "),
    ]
    assert run(bare_formatter, ["  ..quit"]) == [edit(0, 0, 4, "    .   .   ")]
    assert run(bare_formatter, ["    .   quit"]) == []


def test_continuation_dots_with_tab_size_two(bare_formatter) -> None:
    assert run(bare_formatter, [" .  . quit"], tab_size=2) == [edit(0, 0, 6, "  . . ")]


def test_tabs_document_keeps_indentation() -> None:
    formatter = build_formatter(commands=[("echo", "ECHO")])

    edits = run(
        formatter,
        ["\tECHO hi", "// c", "   ", "\tif x {", "\t} else {"],
        insert_spaces=False,
    )

    assert edits == [
        edit(0, 1, 5, "echo"),
        edit(2, 0, 3, ""),
        edit(4, 2, 3, "\n\t"),
    ]


def test_function_edits_follow_structural_edits() -> None:
    formatter = build_formatter(functions=[("$echo", "$ECHO")])

    edits = run(formatter, ["  write $Echo", "  write $$Echo"])

    assert edits == [
        edit(0, 0, 2, "    "),
        edit(1, 0, 2, "    "),
        edit(0, 8, 13, "$echo"),
    ]


def test_cancellation_before_start(bare_formatter) -> None:
    flag = CancellationFlag()
    flag.cancel()

    assert bare_formatter.format(ScriptDocument.from_lines(["   "]), cancellation=flag) == []


class CancellingDocument:
    def __init__(self, lines: Sequence[str], flag: CancellationFlag, at: int) -> None:
        self._lines = list(lines)
        self._flag = flag
        self._at = at

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def get_line(self, index: int) -> str:
        if index == self._at:
            self._flag.cancel()
        return self._lines[index]


def test_cancellation_returns_partial_edits(bare_formatter) -> None:
    flag = CancellationFlag()
    document = CancellingDocument(["   ", "   ", "   "], flag, at=1)

    edits = bare_formatter.format(document, cancellation=flag)

    assert edits == [edit(0, 0, 3, ""), edit(1, 0, 3, "")]


SAMPLE = """Class Demo.Util
{

/// Adds numbers
ClassMethod Add(a, b) As %Integer
{
 s total=a+b
  IF total>10 {
 w "big",!
    } ELSE {
       w $p("a,b",",",1)
  }
 // done
 q total
}

}
"""

EXPECTED = """Class Demo.Util
{

/// Adds numbers
ClassMethod Add(a, b) As %Integer
{
    Set total = a+b
    If total>10 {
        Write "big",!
    }
    Else {
        Write $Piece("a,b",",",1)
    }
    // done
    Quit total
}

}
"""


def test_default_tables_format_sample() -> None:
    assert format_text(SAMPLE) == EXPECTED


def test_formatting_is_idempotent() -> None:
    once = format_text(SAMPLE)

    assert format_document(once) == []
    assert format_text(once) == once


def test_edits_apply_atomically() -> None:
    document = ScriptDocument.from_text(SAMPLE)
    edits = format_document(SAMPLE)

    assert apply_edits(document, edits) == EXPECTED
