"""Canonical spelling lookup over a frozen alias table."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional

from scriptfmt.runtime.telemetry import env

from .models import AliasEntry, Vocabulary
from .registry import AliasTable

CaseStyle = Literal["word", "upper", "lower"]

CASE_STYLES: tuple[CaseStyle, ...] = ("word", "upper", "lower")

# Vocabularies consulted, in order, for ``$`` tokens.
DOLLAR_VOCABULARIES: tuple[Vocabulary, ...] = ("functions", "variables")


def apply_case(label: str, style: CaseStyle) -> str:
    if style == "upper":
        return label.upper()
    if style == "lower":
        return label.lower()
    return label


def _env_case(name: str) -> CaseStyle:
    value = (env(name) or "word").strip().lower()
    if value in CASE_STYLES:
        return value  # type: ignore[return-value]
    return "word"


@dataclass(frozen=True, slots=True)
class CasingConfig:
    """Casing applied to canonical labels before they are written back.

    ``word`` keeps the label exactly as the alias table spells it.
    """

    command_case: CaseStyle = "word"
    function_case: CaseStyle = "word"

    def __post_init__(self) -> None:
        for name in ("command_case", "function_case"):
            value = getattr(self, name)
            if value not in CASE_STYLES:
                raise ValueError(f"{name} must be one of {CASE_STYLES}, got {value!r}")

    @classmethod
    def from_env(cls) -> "CasingConfig":
        return cls(
            command_case=_env_case("COMMAND_CASE"),
            function_case=_env_case("FUNCTION_CASE"),
        )


class Canonicalizer:
    """Maps any recognised spelling of a token to its preferred spelling."""

    def __init__(self, table: AliasTable, *, casing: CasingConfig | None = None) -> None:
        self._table = table
        self.casing = casing or CasingConfig()

    @property
    def table(self) -> AliasTable:
        return self._table

    def lookup(self, vocabulary: Vocabulary, token: str) -> Optional[AliasEntry]:
        vocabularies = DOLLAR_VOCABULARIES if vocabulary == "functions" else (vocabulary,)
        for name in vocabularies:
            entry = self._table.lookup(name, token)
            if entry is not None:
                return entry
        return None

    def resolve(self, vocabulary: Vocabulary, token: str) -> Optional[str]:
        """Return the canonical label for ``token`` or ``None`` when unknown."""

        entry = self.lookup(vocabulary, token)
        return entry.label if entry else None

    def command_spelling(self, token: str) -> Optional[str]:
        label = self.resolve("commands", token)
        if label is None:
            return None
        return apply_case(label, self.casing.command_case)

    def function_spelling(self, token: str) -> Optional[str]:
        label = self.resolve("functions", token)
        if label is None:
            return None
        return apply_case(label, self.casing.function_case)

    def with_casing(self, casing: CasingConfig) -> "Canonicalizer":
        return Canonicalizer(self._table, casing=casing)


__all__ = [
    "CASE_STYLES",
    "CaseStyle",
    "CasingConfig",
    "Canonicalizer",
    "DOLLAR_VOCABULARIES",
    "apply_case",
]
