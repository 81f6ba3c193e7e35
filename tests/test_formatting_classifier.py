from scriptfmt.formatting import DepthChange, LineKind, classify_line
from scriptfmt.formatting.classifier import (
    ClosingBrace,
    CommandStatement,
    CommentLine,
    ContinuationDots,
    SetAssignment,
)


def test_blank_line_is_terminal() -> None:
    line = classify_line(0, "   ")

    assert line.kinds == (LineKind.BLANK,)
    assert line.depth_change is DepthChange.NONE


def test_empty_line_matches_nothing() -> None:
    line = classify_line(0, "")

    assert line.kinds == ()
    assert line.depth_change is DepthChange.NONE


def test_comment_markers() -> None:
    for text in ("// note", "  #; note", "##;note", "\t; note"):
        assert classify_line(0, text).kinds == (LineKind.COMMENT,), text


def test_comment_stops_depth_tracking() -> None:
    line = classify_line(0, "  // if x {")

    assert line.kinds == (LineKind.COMMENT,)
    assert line.depth_change is DepthChange.NONE


def test_doc_comment_only_at_column_zero() -> None:
    top = classify_line(0, "/// doc").get(LineKind.COMMENT)
    nested = classify_line(0, "  /// doc").get(LineKind.COMMENT)

    assert isinstance(top, CommentLine) and top.doc_comment
    assert isinstance(nested, CommentLine) and not nested.doc_comment


def test_continuation_line_is_also_a_command() -> None:
    line = classify_line(0, "  . . set x=1")

    assert line.kinds == (LineKind.CONTINUATION, LineKind.COMMAND, LineKind.ASSIGNMENT)
    dots = line.get(LineKind.CONTINUATION)
    command = line.get(LineKind.COMMAND)
    assert isinstance(dots, ContinuationDots) and dots.dot_count == 2
    assert dots.prefix.end == 6
    assert isinstance(command, CommandStatement) and command.continued
    assert command.word.text == "set"


def test_closing_brace_with_trailing_text() -> None:
    line = classify_line(0, "    } else {")

    brace = line.get(LineKind.CLOSING_BRACE)
    assert isinstance(brace, ClosingBrace)
    assert brace.indent.end == 4
    assert (brace.gap.start, brace.gap.end) == (5, 6)
    assert brace.trailing == "else {"
    assert brace.splits
    assert line.get(LineKind.COMMAND) is None
    assert line.depth_change is DepthChange.OPEN


def test_closing_brace_without_trailing_text() -> None:
    brace = classify_line(0, "  }  ").get(LineKind.CLOSING_BRACE)

    assert isinstance(brace, ClosingBrace)
    assert not brace.splits


def test_command_requires_leading_whitespace() -> None:
    assert classify_line(0, "write 1").get(LineKind.COMMAND) is None

    command = classify_line(0, "  WRITE 1").get(LineKind.COMMAND)
    assert isinstance(command, CommandStatement)
    assert (command.word.start, command.word.end) == (2, 7)
    assert not command.continued


def test_set_assignment_operator_span() -> None:
    assignment = classify_line(0, "  set ^obj.prop  =2").get(LineKind.ASSIGNMENT)

    assert isinstance(assignment, SetAssignment)
    assert assignment.operator.text == "  ="
    assert (assignment.operator.start, assignment.operator.end) == (15, 18)


def test_set_assignment_skips_subscripts() -> None:
    assert classify_line(0, "  set x(1)=2").get(LineKind.ASSIGNMENT) is None


def test_depth_changes() -> None:
    assert classify_line(0, "Method() {").depth_change is DepthChange.RESET
    assert classify_line(0, "{").depth_change is DepthChange.RESET
    assert classify_line(0, "  if x {").depth_change is DepthChange.OPEN
    assert classify_line(0, "  if x { quit }").depth_change is DepthChange.NONE
    assert classify_line(0, "  quit").depth_change is DepthChange.NONE


def test_keywords_are_ascii_only() -> None:
    # Long s, dotless i and the Kelvin sign case-fold onto ASCII letters.
    for text in ("    \u017f x=1", "    \u0131 x", "    \u212a x"):
        line = classify_line(0, text)
        assert line.get(LineKind.COMMAND) is None
        assert line.get(LineKind.ASSIGNMENT) is None


def test_keyword_prefix_of_non_ascii_word_is_not_a_command() -> None:
    assert classify_line(0, "    set\u00e9 x").get(LineKind.COMMAND) is None
