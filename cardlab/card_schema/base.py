"""
Immutable base model for card value objects.
"""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError
from pydantic.alias_generators import to_camel

from .errors import translate_validation_error

T = TypeVar("T")
M = TypeVar("M", bound="CardValueModel")


class CardValueModel(BaseModel):
    """
    Frozen pydantic model with camelCase wire names.

    Fields are accepted by Python name or by their camelCase alias, unknown
    fields are rejected, and validation failures surface as CardDataError.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    def __init__(self, **data: Any) -> None:
        try:
            super().__init__(**data)
        except ValidationError as exc:
            raise translate_validation_error(exc, type(self).__name__) from exc

    @classmethod
    def from_data(cls: type[M], data: Any) -> M:
        """Build an instance from JSON-shaped data (camelCase or snake_case keys)."""
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise translate_validation_error(exc, cls.__name__) from exc

    def to_data(self) -> dict[str, Any]:
        """Dump to JSON-shaped data with camelCase keys, omitting unset optionals."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


def validate_with(adapter: TypeAdapter[T], data: Any, name: str) -> T:
    """Validate data with a TypeAdapter, translating errors."""
    try:
        return adapter.validate_python(data)
    except ValidationError as exc:
        raise translate_validation_error(exc, name) from exc
