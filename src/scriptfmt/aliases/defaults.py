"""Built-in alias tables shipped as package data, plus user file loading."""

from __future__ import annotations

import json
from importlib import resources
from pathlib import Path
from typing import Iterable, Mapping, Optional, Sequence

from scriptfmt.runtime.telemetry import record_event

from .models import VOCABULARIES, AliasEntry, Vocabulary, ensure_vocabulary
from .registry import AliasTable, ensure_batch_consistent

DATA_PACKAGE = "scriptfmt.aliases"


def parse_records(records: object, *, source: str = "<memory>") -> tuple[AliasEntry, ...]:
    if not isinstance(records, list):
        raise ValueError(f"{source}: expected a list of alias records")
    return tuple(AliasEntry.from_record(record) for record in records)


def read_default_records(vocabulary: Vocabulary) -> tuple[AliasEntry, ...]:
    """Return the packaged entries for ``vocabulary`` in file order."""

    name = ensure_vocabulary(vocabulary)
    data = resources.files(DATA_PACKAGE) / "data" / f"{name}.json"
    return parse_records(json.loads(data.read_text(encoding="utf-8")), source=f"{name}.json")


def load_alias_file(path: str | Path) -> dict[Vocabulary, tuple[AliasEntry, ...]]:
    """Read a user alias file shaped ``{"commands": [...], "functions": [...]}``."""

    file_path = Path(path)
    payload = json.loads(file_path.read_text(encoding="utf-8"))
    if not isinstance(payload, dict):
        raise ValueError(f"{file_path}: expected an object keyed by vocabulary")
    result: dict[Vocabulary, tuple[AliasEntry, ...]] = {}
    for key, records in payload.items():
        vocabulary = ensure_vocabulary(str(key))
        result[vocabulary] = parse_records(records, source=str(file_path))
    return result


def load_default_aliases(
    table: Optional[AliasTable] = None,
    *,
    include: Optional[Sequence[Vocabulary]] = None,
    overrides: Optional[Mapping[Vocabulary, Iterable[AliasEntry]]] = None,
    freeze: bool = True,
) -> AliasTable:
    """Fill ``table`` (or a new one) with the packaged vocabularies.

    ``overrides`` replace packaged entries that share a label or an alias and
    add new ones. Two overrides claiming one alias, or conflicting aliases among
    the packaged entries, raise :class:`AliasConflictError` before any formatting
    can happen.
    """

    table = table or AliasTable()
    selected = tuple(include) if include is not None else VOCABULARIES
    for vocabulary in selected:
        table.register_many(vocabulary, read_default_records(vocabulary))

    for vocabulary, entries in (overrides or {}).items():
        vocabulary = ensure_vocabulary(vocabulary)
        batch = ensure_batch_consistent(vocabulary, entries)
        table.register_many(vocabulary, batch, replace=True)

    if freeze:
        table.freeze()

    stats = table.stats()
    record_event(
        "aliases.loaded",
        level="debug",
        data={"entries": dict(stats.entries), "frozen": stats.frozen},
    )
    return table


__all__ = [
    "load_alias_file",
    "load_default_aliases",
    "parse_records",
    "read_default_records",
]
