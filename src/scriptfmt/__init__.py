"""Whitespace and keyword-casing formatter for brace/dot structured scripts."""

__all__ = [
    "adapters",
    "aliases",
    "buffer",
    "cli",
    "formatting",
    "runtime",
]

__version__ = "0.1.0"
