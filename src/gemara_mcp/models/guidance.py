"""Layer 1 guidance document models."""

from __future__ import annotations

from typing import Optional

from .base import GemaraModel


class Applicability(GemaraModel):
    """Where a guidance document applies."""

    technology_domains: list[str] = []
    industry_sectors: list[str] = []
    jurisdictions: list[str] = []


class GuidanceMetadata(GemaraModel):
    id: str = ""
    title: str = ""
    description: Optional[str] = None
    author: Optional[str] = None
    version: Optional[str] = None
    applicability: Optional[Applicability] = None


class Guideline(GemaraModel):
    """A single guideline; the unit kept or dropped by applicability filtering."""

    id: str
    title: str = ""
    objective: Optional[str] = None
    recommendations: list[str] = []


class Category(GemaraModel):
    id: str
    title: str = ""
    description: Optional[str] = None
    guidelines: list[Guideline] = []


class GuidanceDocument(GemaraModel):
    """A Layer 1 guidance document."""

    metadata: GuidanceMetadata = GuidanceMetadata()
    front_matter: Optional[str] = None
    categories: list[Category] = []

    def guidelines(self) -> list[Guideline]:
        """All guidelines across categories, in document order."""
        return [g for category in self.categories for g in category.guidelines]
