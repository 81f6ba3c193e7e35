"""Alias tables and the canonical-spelling resolver."""

from .models import VOCABULARIES, AliasEntry, Vocabulary
from .registry import AliasConflictError, AliasTable, TableStats, ensure_batch_consistent
from .resolver import CASE_STYLES, Canonicalizer, CaseStyle, CasingConfig
from .defaults import load_alias_file, load_default_aliases

__all__ = [
    "AliasEntry",
    "Vocabulary",
    "VOCABULARIES",
    "AliasTable",
    "AliasConflictError",
    "TableStats",
    "ensure_batch_consistent",
    "Canonicalizer",
    "CaseStyle",
    "CasingConfig",
    "CASE_STYLES",
    "load_alias_file",
    "load_default_aliases",
]
