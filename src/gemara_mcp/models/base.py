"""Shared pydantic configuration for Gemara layer documents."""

from __future__ import annotations

from typing import Any

from pydantic import (
    AliasChoices,
    AliasGenerator,
    BaseModel,
    ConfigDict,
    ValidationInfo,
    field_validator,
)
from pydantic.alias_generators import to_camel


def to_kebab(name: str) -> str:
    return name.replace("_", "-")


def _validation_alias(name: str) -> AliasChoices:
    # Gemara YAML uses kebab-case; JSON produced by other tooling is often camelCase.
    return AliasChoices(to_kebab(name), to_camel(name), name)


class GemaraModel(BaseModel):
    """Base for all layer models.

    Accepts kebab-case, camelCase or snake_case keys, dumps kebab-case, and
    keeps unknown keys so documents survive a filter pass intact.
    """

    model_config = ConfigDict(
        alias_generator=AliasGenerator(
            validation_alias=_validation_alias,
            serialization_alias=to_kebab,
        ),
        populate_by_name=True,
        extra="allow",
        coerce_numbers_to_str=True,
    )

    @field_validator("*", mode="before")
    @classmethod
    def _null_as_default(cls, value: Any, info: ValidationInfo) -> Any:
        # YAML reads an empty key (`objective:`) as null; treat it as absent.
        if value is None and info.field_name:
            field = cls.model_fields[info.field_name]
            if not field.is_required() and field.default is not None:
                return field.get_default(call_default_factory=True)
        return value

    def to_dict(self) -> dict[str, Any]:
        """Serialize with Gemara key names, dropping unset optional fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
