"""User schemas."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

_payload_config = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    extra="ignore",
    coerce_numbers_to_str=True,
)


class UserCreate(BaseModel):
    """Create a new user.

    Every field is optional at the schema level so that a missing field is
    reported with the API's own 400 message rather than a generic 422.
    """

    model_config = _payload_config

    name: str | None = None
    email: str | None = None
    password: str | None = None
    profile_picture_url: str | None = None

    @property
    def is_complete(self) -> bool:
        """Name, email and password are all present and non-empty."""
        return bool(self.name and self.email and self.password)


class UserUpdate(BaseModel):
    """Update a user. Only fields sent by the client are applied."""

    model_config = _payload_config

    name: str | None = None
    email: str | None = None
    password: str | None = None
    profile_picture_url: str | None = None


class DeleteResponse(BaseModel):
    """Delete response carrying the removed record."""

    message: str = Field(default="User deleted successfully")
    user: dict[str, Any]


class ErrorResponse(BaseModel):
    """Error body returned for every failed request."""

    error: str
