"""User model."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class User(BaseModel):
    """User record as stored in the storage document.

    Field names are camelCase on disk and on the wire. Keys the model does not
    know about are kept so a load/save cycle does not drop them.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
        coerce_numbers_to_str=True,
    )

    id: str
    name: str
    email: str
    password: str
    profile_picture_url: str = Field(default="")

    @field_validator("profile_picture_url", mode="before")
    @classmethod
    def null_picture_is_empty(cls, v: Any) -> Any:
        """Older documents can hold ``null`` for a cleared picture."""
        return "" if v is None else v

    def to_document(self, redact: bool = False) -> dict[str, Any]:
        """Serialize with stable field order, optionally without the password hash."""
        exclude = {"password"} if redact else None
        return self.model_dump(mode="json", by_alias=True, exclude=exclude)
