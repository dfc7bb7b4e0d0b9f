"""Layer 2 control catalog models."""

from __future__ import annotations

from typing import Optional

from .base import GemaraModel


class ApplicabilityCategory(GemaraModel):
    id: str
    title: str = ""
    description: Optional[str] = None


class CatalogMetadata(GemaraModel):
    id: str = ""
    title: str = ""
    description: Optional[str] = None
    version: Optional[str] = None
    applicability_categories: list[ApplicabilityCategory] = []


class AssessmentRequirement(GemaraModel):
    id: str = ""
    text: str = ""
    applicability: list[str] = []


class MappingEntry(GemaraModel):
    """One reference edge from a control to a guideline."""

    reference_id: str
    strength: Optional[int] = None
    remarks: Optional[str] = None


class GuidelineMapping(GemaraModel):
    reference_id: str = ""
    entries: list[MappingEntry] = []


class Control(GemaraModel):
    """A single implementable control."""

    id: str
    title: str = ""
    objective: str = ""
    assessment_requirements: list[AssessmentRequirement] = []
    guideline_mappings: list[GuidelineMapping] = []


class ControlFamily(GemaraModel):
    id: str
    title: str = ""
    description: Optional[str] = None
    controls: list[Control] = []


class ControlCatalog(GemaraModel):
    """A Layer 2 control catalog."""

    metadata: CatalogMetadata = CatalogMetadata()
    control_families: list[ControlFamily] = []
