"""Host-agnostic glue between an editor widget and :class:`ScriptFormatter`."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from scriptfmt.buffer import CancellationToken, ScriptDocument, TextEdit, ensure_disjoint
from scriptfmt.formatting import FormattingOptions, ScriptFormatter


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class FormatHooks:
    """Callbacks the adapter uses to talk to the host widget."""

    read_text: Callable[[], str]
    apply_edits: Callable[[Sequence[TextEdit]], None]
    update_status: Callable[[str], None] = _noop
    log: Callable[[str], None] = _noop


@dataclass(frozen=True, slots=True)
class FormatReport:
    edit_count: int
    cancelled: bool = False

    @property
    def status(self) -> str:
        if self.cancelled:
            return f"format cancelled ({self.edit_count} edits applied)"
        if not self.edit_count:
            return "already formatted"
        return f"formatted ({self.edit_count} edits)"


class TextualFormatAdapter:
    """Pulls the host text, formats it and pushes all edits back in one batch."""

    def __init__(
        self,
        formatter: ScriptFormatter,
        hooks: FormatHooks,
        *,
        options: Callable[[], FormattingOptions] = FormattingOptions,
    ) -> None:
        self.formatter = formatter
        self.hooks = hooks
        self._options = options

    def format_now(self, *, cancellation: Optional[CancellationToken] = None) -> FormatReport:
        document = ScriptDocument.from_text(self.hooks.read_text())
        options = self._options()
        edits = self.formatter.format(document, options, cancellation=cancellation)
        cancelled = bool(cancellation is not None and cancellation.cancelled)
        self.hooks.log(
            f"format -> lines={document.line_count} edits={len(edits)} "
            f"tab_size={options.tab_size} cancelled={cancelled}"
        )
        if edits:
            self.hooks.apply_edits(ensure_disjoint(edits))
        report = FormatReport(edit_count=len(edits), cancelled=cancelled)
        self.hooks.update_status(report.status)
        return report


__all__ = ["FormatHooks", "FormatReport", "TextualFormatAdapter"]
