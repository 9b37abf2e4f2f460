from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

# Largest value a 32-bit INTEGER column holds.
MAX_DB_INT = 2**31 - 1

RowId = Annotated[int, Field(ge=1, le=MAX_DB_INT)]
Count = Annotated[int, Field(ge=0, le=MAX_DB_INT)]


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class RequestModel(CamelModel):
    model_config = ConfigDict(extra="forbid")


class PatchModel(RequestModel):
    """Partial-update body: any subset of fields, but never an explicit null."""

    @model_validator(mode="after")
    def reject_nulls(self) -> "PatchModel":
        nulls = sorted(
            type(self).model_fields[name].alias or name
            for name in self.model_fields_set
            if getattr(self, name) is None
        )
        if nulls:
            raise ValueError(f"fields may not be null: {', '.join(nulls)}")
        return self

    def changes(self) -> dict:
        """Fields the caller actually sent, keyed by their wire names."""
        return self.model_dump(by_alias=True, exclude_unset=True)


class DeletedResponse(BaseModel):
    deleted: int | str
