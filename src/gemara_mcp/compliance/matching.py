"""Lookup helpers shared by the filters and the modifier synthesizer.

All sets built here are local to a single call.
"""

from __future__ import annotations

from typing import Iterable, Optional

from ..models.guidance import GuidanceDocument


def fold(value: str) -> str:
    return value.casefold()


def label_set(values: Iterable[str]) -> set[str]:
    """Case-folded lookup set."""
    return {fold(v) for v in values if v}


def contains_folded(values: Iterable[str], candidate: str) -> bool:
    """Case-insensitive exact membership test."""
    target = fold(candidate)
    return any(fold(v) == target for v in values)


def any_in(values: Iterable[str], lookup: set[str]) -> bool:
    """True on the first value whose folded form is in ``lookup``."""
    return any(fold(v) in lookup for v in values)


def guideline_ids(document: GuidanceDocument) -> set[str]:
    """Every guideline id in the document, across all categories."""
    return {g.id for g in document.guidelines()}


def supplied(value: Optional[str]) -> bool:
    return bool(value)
