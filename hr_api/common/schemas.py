"""Base class for PATCH request bodies."""

from typing import Any, ClassVar

from pydantic import BaseModel, ValidationInfo, field_validator


class PatchModel(BaseModel):
    """Partial update: omitted fields stay as they are.

    An explicit ``null`` clears a nullable column. Columns listed in
    ``non_nullable`` cannot be cleared, so ``null`` for them is a 422
    keyed by the field name.
    """

    non_nullable: ClassVar[frozenset[str]] = frozenset()

    @field_validator("*")
    @classmethod
    def reject_null(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None and info.field_name in cls.non_nullable:
            raise ValueError("This field cannot be null.")
        return value
