"""Layer 2 label filtering."""

from __future__ import annotations

from typing import Iterable

from ..core.errors import UsageError
from ..models.catalog import Control, ControlCatalog, ControlFamily
from .matching import any_in, label_set


def control_matches(control: Control, lookup: set[str], catalog_match: bool) -> bool:
    """Check a control's assessment requirements, then the catalog-level result."""
    for requirement in control.assessment_requirements:
        if any_in(requirement.applicability, lookup):
            return True
    return catalog_match


def filter_controls(catalog: ControlCatalog, labels: Iterable[str]) -> ControlCatalog:
    """Narrow a catalog to controls carrying any of ``labels``.

    A label may match an assessment requirement's applicability, or one of
    the catalog's applicability categories. A category hit qualifies every
    control in the catalog.
    """
    lookup = label_set(labels)
    if not lookup:
        raise UsageError("At least one label must be provided")

    catalog_match = any_in(
        (category.id for category in catalog.metadata.applicability_categories),
        lookup,
    )

    filtered: list[ControlFamily] = []
    for family in catalog.control_families:
        matching = [c for c in family.controls if control_matches(c, lookup, catalog_match)]
        if matching:
            filtered.append(family.model_copy(update={"controls": matching}))

    return catalog.model_copy(update={"control_families": filtered})
