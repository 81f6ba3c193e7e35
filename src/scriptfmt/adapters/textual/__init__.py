"""Textual host integration for the formatter."""

from .controller import FormatHooks, FormatReport, TextualFormatAdapter

__all__ = ["FormatHooks", "FormatReport", "TextualFormatAdapter"]
