"""Line classification, indentation tracking and the formatting engine."""

from .classifier import ClassifiedLine, LineKind, classify_line
from .engine import (
    ScriptFormatter,
    default_formatter,
    default_table,
    format_document,
    format_text,
)
from .indent import DepthChange, IndentState
from .options import CasingConfig, FormattingOptions
from .scanner import scan_document, scan_line

__all__ = [
    "ClassifiedLine",
    "LineKind",
    "classify_line",
    "DepthChange",
    "IndentState",
    "CasingConfig",
    "FormattingOptions",
    "ScriptFormatter",
    "default_formatter",
    "default_table",
    "format_document",
    "format_text",
    "scan_document",
    "scan_line",
]
