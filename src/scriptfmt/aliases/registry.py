"""Alias table that owns entries and the alias -> entry inverted index."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, Mapping, Optional

from scriptfmt.runtime.telemetry import span

from .models import VOCABULARIES, AliasEntry, Vocabulary, ensure_vocabulary, normalize_alias


@dataclass(slots=True)
class TableStats:
    """Snapshot of how many entries and aliases each vocabulary holds."""

    entries: Mapping[str, int]
    aliases: Mapping[str, int]
    frozen: bool


class AliasConflictError(RuntimeError):
    """Raised when an alias would map to two canonical labels."""

    def __init__(
        self, vocabulary: str, entry: AliasEntry, conflicts: Iterable[AliasEntry]
    ):
        conflicts_tuple = tuple(conflicts)
        shared = sorted(
            alias
            for conflict in conflicts_tuple
            for alias in entry.aliases & conflict.aliases
        )
        message = (
            f"{vocabulary}: '{entry.label}' reuses {shared} already claimed by "
            f"{[c.label for c in conflicts_tuple]}"
        )
        super().__init__(message)
        self.vocabulary = vocabulary
        self.entry = entry
        self.conflicts = conflicts_tuple


def ensure_batch_consistent(
    vocabulary: Vocabulary, entries: Iterable[AliasEntry]
) -> tuple[AliasEntry, ...]:
    """Reject a batch in which two labels claim the same alias.

    Replacement batches may evict what is already registered, but they must
    not disagree with themselves: the later entry would otherwise win silently.
    """

    batch = tuple(entries)
    owners: Dict[str, AliasEntry] = {}
    for entry in batch:
        conflicts = []
        for alias in sorted(entry.aliases):
            owner = owners.get(alias)
            if owner is not None and owner.label != entry.label and owner not in conflicts:
                conflicts.append(owner)
        if conflicts:
            raise AliasConflictError(vocabulary, entry, conflicts)
        for alias in entry.aliases:
            owners[alias] = entry
    return batch


class AliasTable:
    """Per-vocabulary ordered entries with O(1) alias lookup.

    The table is filled once at start-up and then frozen; lookups never
    mutate it, so a frozen table can be shared between formatting runs.
    """

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._entries: Dict[str, Dict[str, AliasEntry]] = {v: {} for v in VOCABULARIES}
        self._index: Dict[str, Dict[str, AliasEntry]] = {v: {} for v in VOCABULARIES}
        self._logger_name = logger_name
        self._frozen = False
        self._revision = 0

    def revision(self) -> int:
        return self._revision

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> "AliasTable":
        self._frozen = True
        return self

    def register(
        self, vocabulary: Vocabulary, entry: AliasEntry, *, replace: bool = False
    ) -> AliasEntry:
        """Add ``entry``, merging aliases into an entry with the same label.

        With ``replace`` the entry overwrites its namesake and evicts any entry
        holding one of its aliases instead of raising.
        """

        with span(
            "aliases::register",
            logger_name=self._logger_name,
            component="aliases",
            metadata={"vocabulary": vocabulary, "label": entry.label},
        ) as handle:
            if self._frozen:
                raise RuntimeError("Alias table is frozen")
            entries = self._entries[ensure_vocabulary(vocabulary)]
            existing = entries.get(entry.label)
            if existing is not None and not replace:
                entry = AliasEntry(entry.label, existing.aliases | entry.aliases)

            conflicts = self.detect_conflicts(vocabulary, entry)
            if conflicts and not replace:
                handle.add_metadata("conflicts", ",".join(c.label for c in conflicts))
                raise AliasConflictError(vocabulary, entry, conflicts)

            for conflict in conflicts:
                self._unindex(vocabulary, conflict)
                entries.pop(conflict.label, None)
            if existing is not None:
                self._unindex(vocabulary, existing)
            entries[entry.label] = entry
            self._reindex(vocabulary, entry)
            self._revision += 1
            return entry

    def register_many(
        self,
        vocabulary: Vocabulary,
        entries: Iterable[AliasEntry],
        *,
        replace: bool = False,
    ) -> int:
        count = 0
        for entry in entries:
            self.register(vocabulary, entry, replace=replace)
            count += 1
        return count

    def detect_conflicts(
        self, vocabulary: Vocabulary, entry: AliasEntry
    ) -> list[AliasEntry]:
        index = self._index[ensure_vocabulary(vocabulary)]
        conflicts: list[AliasEntry] = []
        for alias in sorted(entry.aliases):
            owner = index.get(alias)
            if owner is not None and owner.label != entry.label and owner not in conflicts:
                conflicts.append(owner)
        return conflicts

    def lookup(self, vocabulary: Vocabulary, token: str) -> Optional[AliasEntry]:
        return self._index[ensure_vocabulary(vocabulary)].get(normalize_alias(token))

    def iter_entries(self, vocabulary: Optional[Vocabulary] = None) -> Iterator[AliasEntry]:
        if vocabulary is None:
            for name in VOCABULARIES:
                yield from self._entries[name].values()
            return
        yield from self._entries[ensure_vocabulary(vocabulary)].values()

    def stats(self) -> TableStats:
        return TableStats(
            entries={v: len(self._entries[v]) for v in VOCABULARIES},
            aliases={v: len(self._index[v]) for v in VOCABULARIES},
            frozen=self._frozen,
        )

    def _reindex(self, vocabulary: str, entry: AliasEntry) -> None:
        index = self._index[vocabulary]
        for alias in entry.aliases:
            index[alias] = entry

    def _unindex(self, vocabulary: str, entry: AliasEntry) -> None:
        index = self._index[vocabulary]
        for alias in entry.aliases:
            if index.get(alias) is entry:
                index.pop(alias)


__all__ = [
    "AliasConflictError",
    "AliasTable",
    "TableStats",
    "ensure_batch_consistent",
]
