"""Layer 1 applicability filtering."""

from __future__ import annotations

from typing import Optional

from ..models.guidance import Applicability, Category, GuidanceDocument
from .matching import contains_folded, supplied


def matches_applicability(
    applicability: Optional[Applicability],
    technology: Optional[str] = None,
    sector: Optional[str] = None,
    jurisdiction: Optional[str] = None,
) -> bool:
    """Check document applicability against the supplied criteria.

    Empty criteria are ignored. A document without an applicability block
    never matches once any criterion is given.
    """
    criteria = [c for c in (technology, sector, jurisdiction) if supplied(c)]
    if not criteria:
        return True
    if applicability is None:
        return False

    if supplied(technology) and not contains_folded(applicability.technology_domains, technology):
        return False
    if supplied(sector) and not contains_folded(applicability.industry_sectors, sector):
        return False
    if supplied(jurisdiction) and not contains_folded(applicability.jurisdictions, jurisdiction):
        return False
    return True


def filter_guidance(
    document: GuidanceDocument,
    technology: Optional[str] = None,
    sector: Optional[str] = None,
    jurisdiction: Optional[str] = None,
) -> GuidanceDocument:
    """Narrow a guidance document to guidelines matching the criteria.

    Category and guideline order is preserved; categories left without
    guidelines are dropped. The source document is not modified.
    """
    applicability = document.metadata.applicability
    filtered: list[Category] = []

    for category in document.categories:
        # Applicability is document-wide, so each guideline gets the same verdict.
        matching = [
            guideline
            for guideline in category.guidelines
            if matches_applicability(applicability, technology, sector, jurisdiction)
        ]
        if matching:
            filtered.append(category.model_copy(update={"guidelines": matching}))

    return document.model_copy(update={"categories": filtered})
