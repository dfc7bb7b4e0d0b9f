"""Layer 3 mapping models."""

from __future__ import annotations

from enum import Enum

from .base import GemaraModel


class ModType(str, Enum):
    ALTER = "alter"
    ADD = "add"
    REMOVE = "remove"


class Scope(GemaraModel):
    technologies: list[str] = []
    sectors: list[str] = []
    jurisdictions: list[str] = []


class ControlModifier(GemaraModel):
    """An editable snapshot of a control, scoped to a policy."""

    target_id: str
    modification_type: ModType = ModType.ALTER
    modification_rationale: str = ""
    title: str = ""
    objective: str = ""


class Mapping(GemaraModel):
    """Harmonization mapping produced for one control catalog."""

    reference_id: str = ""
    in_scope: Scope = Scope()
    out_of_scope: Scope = Scope()
    control_modifications: list[ControlModifier] = []
    assessment_requirement_modifications: list[dict] = []
    guideline_modifications: list[dict] = []
