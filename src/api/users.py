"""User API endpoints."""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query, status

from src.api.dependencies import get_create_payload, get_update_payload, get_user_service
from src.config import Settings, get_settings
from src.exceptions import internal_errors
from src.models.user import User
from src.schemas.user import DeleteResponse, ErrorResponse, UserCreate, UserUpdate
from src.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])

NOT_FOUND = {status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}}
CONFLICT = {status.HTTP_409_CONFLICT: {"model": ErrorResponse}}
BAD_REQUEST = {status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse}}


def present(user: User, settings: Settings) -> dict[str, Any]:
    """Render a user for a response.

    The password hash is included unless redaction is switched on.
    """
    return user.to_document(redact=settings.redact_passwords)


@router.get("", responses=NOT_FOUND)
async def get_users(
    service: Annotated[UserService, Depends(get_user_service)],
    settings: Annotated[Settings, Depends(get_settings)],
    user_id: str | None = Query(default=None, alias="id", description="Return only this user"),
):
    """Get all users, or a single user when ``id`` is given."""
    with internal_errors("Failed to retrieve users"):
        if user_id:
            user = await service.get_user(user_id)
            return present(user, settings)

        users = await service.list_users()
        return [present(user, settings) for user in users]


@router.post("", status_code=status.HTTP_201_CREATED, responses={**BAD_REQUEST, **CONFLICT})
async def create_user(
    payload: Annotated[UserCreate, Depends(get_create_payload)],
    service: Annotated[UserService, Depends(get_user_service)],
    settings: Annotated[Settings, Depends(get_settings)],
):
    """Create a new user."""
    with internal_errors("Failed to create user"):
        user = await service.create_user(payload)
    return present(user, settings)


@router.put("/{user_id}", responses={**BAD_REQUEST, **NOT_FOUND, **CONFLICT})
async def update_user(
    user_id: str,
    payload: Annotated[UserUpdate, Depends(get_update_payload)],
    service: Annotated[UserService, Depends(get_user_service)],
    settings: Annotated[Settings, Depends(get_settings)],
):
    """Update the fields present in the request body."""
    with internal_errors("Failed to update user"):
        user = await service.update_user(user_id, payload)
    return present(user, settings)


@router.delete("/{user_id}", response_model=DeleteResponse, responses=NOT_FOUND)
async def delete_user(
    user_id: str,
    service: Annotated[UserService, Depends(get_user_service)],
    settings: Annotated[Settings, Depends(get_settings)],
):
    """Delete a user and return the removed record."""
    with internal_errors("Failed to delete user"):
        user = await service.delete_user(user_id)
    return DeleteResponse(user=present(user, settings))
