from __future__ import annotations

from typing import Iterable, Sequence

import pytest

from scriptfmt.aliases import AliasEntry, AliasTable, Canonicalizer, CasingConfig
from scriptfmt.formatting import ScriptFormatter


def build_table(
    *,
    commands: Iterable[Sequence[str]] = (),
    functions: Iterable[Sequence[str]] = (),
    variables: Iterable[Sequence[str]] = (),
) -> AliasTable:
    table = AliasTable()
    for vocabulary, rows in (
        ("commands", commands),
        ("functions", functions),
        ("variables", variables),
    ):
        for label, *aliases in rows:
            table.register(vocabulary, AliasEntry(label, frozenset(aliases)))
    return table.freeze()


def build_formatter(
    *, casing: CasingConfig | None = None, **rows: Iterable[Sequence[str]]
) -> ScriptFormatter:
    return ScriptFormatter(Canonicalizer(build_table(**rows), casing=casing))


@pytest.fixture
def bare_formatter() -> ScriptFormatter:
    return build_formatter()
