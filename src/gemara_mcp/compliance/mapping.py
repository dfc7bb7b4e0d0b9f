"""Layer 3 control modifier synthesis.

Traces each control's guideline mappings back to a guidance document and
emits one modifier per control whose references resolve.
"""

from __future__ import annotations

from typing import Optional, Union

from ..core.errors import UsageError
from ..models.catalog import Control, ControlCatalog
from ..models.guidance import GuidanceDocument
from ..models.policy import ControlModifier, Mapping, ModType
from .matching import guideline_ids


def parse_mod_type(value: Union[str, ModType, None]) -> ModType:
    """Resolve a modification type, defaulting to ``alter``."""
    if isinstance(value, ModType):
        return value
    if not value:
        return ModType.ALTER
    try:
        return ModType(value.lower())
    except ValueError:
        allowed = ", ".join(m.value for m in ModType)
        raise UsageError(f"Invalid modification_type '{value}'; expected one of: {allowed}") from None


def first_resolved_reference(control: Control, known_ids: set[str]) -> Optional[str]:
    """Return the first mapping entry reference present in ``known_ids``."""
    for mapping in control.guideline_mappings:
        for entry in mapping.entries:
            if entry.reference_id in known_ids:
                return entry.reference_id
    return None


def create_control_modifiers(
    guidance: GuidanceDocument,
    catalog: ControlCatalog,
    rationale: str,
    modification_type: Union[str, ModType, None] = ModType.ALTER,
) -> Mapping:
    """Build a Layer 3 mapping harmonizing ``catalog`` with ``guidance``.

    At most one modifier is produced per control: scanning stops at the first
    resolving reference. Controls whose references do not resolve are skipped.
    """
    mod_type = parse_mod_type(modification_type)
    known_ids = guideline_ids(guidance)

    modifiers: list[ControlModifier] = []
    for family in catalog.control_families:
        for control in family.controls:
            if first_resolved_reference(control, known_ids) is None:
                continue
            modifiers.append(ControlModifier(
                target_id=control.id,
                modification_type=mod_type,
                modification_rationale=rationale,
                title=control.title,
                objective=control.objective,
            ))

    return Mapping(
        reference_id=catalog.metadata.id,
        control_modifications=modifiers,
    )
