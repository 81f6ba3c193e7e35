"""Dataclasses describing alias entries and vocabularies."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Literal, Mapping

Vocabulary = Literal["commands", "functions", "variables"]

VOCABULARIES: tuple[Vocabulary, ...] = ("commands", "functions", "variables")


def normalize_alias(alias: str) -> str:
    return alias.strip().upper()


def _normalize_aliases(aliases: Iterable[str]) -> frozenset[str]:
    return frozenset(normalize_alias(a) for a in aliases if a and a.strip())


def ensure_vocabulary(name: str) -> Vocabulary:
    if name not in VOCABULARIES:
        raise KeyError(f"Unknown vocabulary '{name}'")
    return name  # type: ignore[return-value]


@dataclass(frozen=True, slots=True)
class AliasEntry:
    """Canonical label plus every uppercase spelling that resolves to it."""

    label: str
    aliases: frozenset[str]

    def __post_init__(self) -> None:
        if not self.label or not self.label.strip():
            raise ValueError("alias entry label cannot be empty")
        aliases = _normalize_aliases(self.aliases)
        if not aliases:
            raise ValueError(f"alias entry '{self.label}' has no aliases")
        object.__setattr__(self, "aliases", aliases)

    @classmethod
    def from_record(cls, record: Mapping[str, object]) -> "AliasEntry":
        """Build an entry from the ``{"label": ..., "alias": [...]}`` data shape."""

        label = record.get("label")
        raw_aliases = record.get("alias")
        if not isinstance(label, str):
            raise ValueError(f"alias record is missing a string label: {record!r}")
        if isinstance(raw_aliases, str) or not isinstance(raw_aliases, Iterable):
            raise ValueError(f"alias record '{label}' needs a list of aliases")
        return cls(label=label, aliases=frozenset(str(a) for a in raw_aliases))

    def matches(self, token: str) -> bool:
        return normalize_alias(token) in self.aliases


__all__ = [
    "AliasEntry",
    "VOCABULARIES",
    "Vocabulary",
    "ensure_vocabulary",
    "normalize_alias",
]
