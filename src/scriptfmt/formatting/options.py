"""Formatting options supplied by the host, plus environment defaults."""

from __future__ import annotations

from dataclasses import dataclass

from scriptfmt.aliases.resolver import CasingConfig
from scriptfmt.runtime.telemetry import env, env_flag

DEFAULT_TAB_SIZE = 4


@dataclass(frozen=True, slots=True)
class FormattingOptions:
    """``tab_size``/``insert_spaces`` pair handed over by the editor.

    With ``insert_spaces`` off the document is treated as tab-indented and no
    indentation is rewritten.
    """

    tab_size: int = DEFAULT_TAB_SIZE
    insert_spaces: bool = True

    def __post_init__(self) -> None:
        if isinstance(self.tab_size, bool) or not isinstance(self.tab_size, int):
            raise TypeError("tab_size must be an int")
        if self.tab_size <= 0:
            raise ValueError("tab_size must be positive")

    def indent(self, depth: int) -> str:
        return " " * (self.tab_size * max(depth, 0))

    @classmethod
    def from_env(cls) -> "FormattingOptions":
        raw = env("TAB_SIZE")
        try:
            tab_size = int(raw) if raw else DEFAULT_TAB_SIZE
        except ValueError:
            tab_size = DEFAULT_TAB_SIZE
        if tab_size <= 0:
            tab_size = DEFAULT_TAB_SIZE
        return cls(tab_size=tab_size, insert_spaces=env_flag("INSERT_SPACES", True))


__all__ = ["CasingConfig", "DEFAULT_TAB_SIZE", "FormattingOptions"]
