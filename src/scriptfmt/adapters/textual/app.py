"""Executable Textual app that formats a script inside a TextArea."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Optional, Sequence

try:  # pragma: no cover - imported only when demo is run
    from textual.app import App, ComposeResult
    from textual.widgets import Footer, Header, Static, TextArea
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use scriptfmt.adapters.textual.app"
    ) from exc

from scriptfmt.buffer import TextEdit
from scriptfmt.formatting import FormattingOptions, default_formatter

from .controller import FormatHooks, TextualFormatAdapter


class ScriptFormatApp(App[None]):
    """TextArea editor with a format-document binding."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#editor {
		height: 1fr;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+f", "format_document", "Format"),
        ("ctrl+s", "save", "Save"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, *, path: Optional[Path] = None, tab_size: int = 4) -> None:
        super().__init__()
        self._path = path
        self._tab_size = tab_size
        self._editor: TextArea | None = None
        self._status: Static | None = None
        self.adapter: TextualFormatAdapter | None = None

    def compose(self) -> ComposeResult:
        yield Header()
        text = self._path.read_text(encoding="utf-8") if self._path else ""
        self._editor = TextArea(text, id="editor")
        yield self._editor
        self._status = Static("", id="status-line")
        yield self._status
        yield Footer()

    def on_mount(self) -> None:
        hooks = FormatHooks(
            read_text=self._read_text,
            apply_edits=self._apply_edits,
            update_status=self._update_status,
        )
        self.adapter = TextualFormatAdapter(
            default_formatter(),
            hooks,
            options=lambda: FormattingOptions(tab_size=self._tab_size),
        )

    def action_format_document(self) -> None:
        if self.adapter:
            self.adapter.format_now()

    def action_save(self) -> None:
        if self._path and self._editor:
            self._path.write_text(self._editor.text, encoding="utf-8")
            self._update_status(f"saved {self._path}")

    def _read_text(self) -> str:
        return self._editor.text if self._editor else ""

    def _apply_edits(self, edits: Sequence[TextEdit]) -> None:
        if not self._editor:
            return
        # Back to front so earlier offsets stay valid.
        for edit in reversed(list(edits)):
            self._editor.replace(edit.new_text, edit.start, edit.end)

    def _update_status(self, status: str) -> None:
        if self._status:
            self._status.update(status)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the scriptfmt Textual editor.")
    parser.add_argument("path", nargs="?", type=Path, help="Script to open")
    parser.add_argument("--tab-size", type=int, default=4)
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    ScriptFormatApp(path=args.path, tab_size=args.tab_size).run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
