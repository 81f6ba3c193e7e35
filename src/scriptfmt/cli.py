"""Command line front end: format files, check them, or show a diff."""

from __future__ import annotations

import argparse
import difflib
import sys
from pathlib import Path
from typing import Optional, Sequence, TextIO

from scriptfmt.aliases import (
    CASE_STYLES,
    AliasTable,
    Canonicalizer,
    CasingConfig,
    load_alias_file,
    load_default_aliases,
)
from scriptfmt.buffer import ScriptDocument, apply_edits
from scriptfmt.formatting import FormattingOptions, ScriptFormatter, default_table
from scriptfmt.runtime import telemetry

STDIN_PATH = "-"


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    env_options = FormattingOptions.from_env()
    env_casing = CasingConfig.from_env()
    parser = argparse.ArgumentParser(
        prog="scriptfmt",
        description="Normalize indentation, comment alignment and keyword casing.",
    )
    parser.add_argument("paths", nargs="+", help="Files to format ('-' reads stdin)")
    parser.add_argument(
        "--tab-size",
        type=int,
        default=env_options.tab_size,
        help="Spaces per indentation level (default: %(default)s)",
    )
    parser.add_argument(
        "--use-tabs",
        action="store_true",
        default=not env_options.insert_spaces,
        help="Document is tab-indented; leave indentation untouched",
    )
    parser.add_argument(
        "--command-case", choices=CASE_STYLES, default=env_casing.command_case
    )
    parser.add_argument(
        "--function-case", choices=CASE_STYLES, default=env_casing.function_case
    )
    parser.add_argument(
        "--aliases",
        metavar="FILE",
        help="JSON file whose entries override the built-in alias tables",
    )
    parser.add_argument(
        "--log-preset",
        choices=sorted(telemetry.PRESETS),
        help="Telemetry preset to use for this run",
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--check", action="store_true", help="Exit with status 1 if any file would change"
    )
    mode.add_argument("--diff", action="store_true", help="Print a unified diff")
    mode.add_argument("--write", action="store_true", help="Rewrite files in place")
    args = parser.parse_args(argv)
    if args.tab_size <= 0:
        parser.error("--tab-size must be positive")
    if args.write and STDIN_PATH in args.paths:
        parser.error("--write cannot be combined with stdin")
    return args


def _build_table(alias_file: Optional[str]) -> AliasTable:
    if not alias_file:
        return default_table()
    return load_default_aliases(overrides=load_alias_file(alias_file))


def _read(path: str) -> str:
    if path == STDIN_PATH:
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def _diff(path: str, before: str, after: str) -> str:
    return "".join(
        difflib.unified_diff(
            before.splitlines(keepends=True),
            after.splitlines(keepends=True),
            fromfile=f"{path} (original)",
            tofile=f"{path} (formatted)",
        )
    )


def run(args: argparse.Namespace, *, out: TextIO) -> int:
    options = FormattingOptions(tab_size=args.tab_size, insert_spaces=not args.use_tabs)
    casing = CasingConfig(command_case=args.command_case, function_case=args.function_case)
    formatter = ScriptFormatter(Canonicalizer(_build_table(args.aliases), casing=casing))

    changed: list[str] = []
    for path in args.paths:
        source = _read(path)
        document = ScriptDocument.from_text(source)
        edits = formatter.format(document, options)
        result = apply_edits(document, edits) if edits else source
        if result != source:
            changed.append(path)
        telemetry.record_event(
            "cli.formatted",
            level="debug",
            data={"path": path, "edits": len(edits)},
        )

        if args.check:
            continue
        if args.diff:
            out.write(_diff(path, source, result))
        elif args.write:
            if result != source:
                Path(path).write_text(result, encoding="utf-8")
        else:
            out.write(result)

    if args.check and changed:
        for path in changed:
            out.write(f"would reformat {path}\n")
        return 1
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    if args.log_preset:
        telemetry.configure(preset=args.log_preset)
    return run(args, out=sys.stdout)


__all__ = ["main", "run"]
