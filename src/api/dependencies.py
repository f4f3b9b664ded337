"""FastAPI dependencies for storage, services and request bodies."""

import json
from typing import Annotated, Any

from fastapi import Depends, Request
from pydantic import ValidationError as PydanticValidationError

from src.config import Settings, get_settings
from src.exceptions import ValidationError
from src.schemas.user import UserCreate, UserUpdate
from src.services.storage import JsonFileUserStorage, UserStorage
from src.services.user_service import UserService

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


def get_user_storage(settings: Annotated[Settings, Depends(get_settings)]) -> UserStorage:
    """Get the storage accessor for the users document."""
    return JsonFileUserStorage(settings.users_file)


def get_user_service(
    storage: Annotated[UserStorage, Depends(get_user_storage)],
) -> UserService:
    """Get user service with dependencies."""
    return UserService(storage)


async def read_body(request: Request) -> dict[str, Any]:
    """Read a JSON or urlencoded form body into a dict.

    Other content types, empty bodies and JSON values that are not objects
    all read as an empty dict.
    """
    content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()

    if content_type == FORM_CONTENT_TYPE:
        form = await request.form()
        return dict(form)

    if not content_type.endswith("json"):
        return {}

    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        data = json.loads(raw)
    except ValueError as e:
        raise ValidationError("Invalid request body", {"reason": str(e)}) from e
    return data if isinstance(data, dict) else {}


def _validate(schema: type[UserCreate] | type[UserUpdate], body: dict[str, Any]):
    try:
        return schema.model_validate(body)
    except PydanticValidationError as e:
        fields = ", ".join(str(error["loc"][0]) for error in e.errors() if error["loc"])
        raise ValidationError("Invalid field value", {"fields": fields}) from e


def get_create_payload(body: Annotated[dict[str, Any], Depends(read_body)]) -> UserCreate:
    """Parse the body of a create request."""
    return _validate(UserCreate, body)


def get_update_payload(body: Annotated[dict[str, Any], Depends(read_body)]) -> UserUpdate:
    """Parse the body of an update request."""
    return _validate(UserUpdate, body)
