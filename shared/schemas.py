from typing import ClassVar, FrozenSet

from pydantic import BaseModel, model_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Wire models speak camelCase JSON and accept snake_case too."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class PatchModel(CamelModel):
    """
    Partial-update body: only declared fields are accepted.

    An explicit null clears a field listed in `nullable_fields`; on any
    other field it is a validation error.
    """

    nullable_fields: ClassVar[FrozenSet[str]] = frozenset()

    class Config:
        extra = "forbid"

    @model_validator(mode="after")
    def reject_null_on_required_fields(self):
        for name in self.model_fields_set:
            if getattr(self, name) is None and name not in self.nullable_fields:
                raise ValueError(f"{name} cannot be null")
        return self

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


class MessageResponse(BaseModel):
    message: str
