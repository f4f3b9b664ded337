"""User service: load, mutate and persist the user collection."""

import logging

from src.exceptions import ConflictError, NotFoundError, StorageError, ValidationError
from src.models.user import User
from src.schemas.user import UserCreate, UserUpdate
from src.services import user_repository
from src.services.passwords import hash_password
from src.services.storage import UserStorage

logger = logging.getLogger(__name__)

REQUIRED_FIELDS_MESSAGE = "Name, email, and password are required"
EMAIL_EXISTS_MESSAGE = "Email already exists"
USER_NOT_FOUND_MESSAGE = "User not found"


class UserService:
    """Service for user CRUD over a whole-document store.

    Every call reloads the collection. Mutating calls write the whole
    collection back. Nothing serializes concurrent calls, so two overlapping
    mutations can each work on a stale copy and the later save wins.
    """

    def __init__(self, storage: UserStorage):
        self.storage = storage

    async def list_users(self) -> list[User]:
        """Return every stored user."""
        return await self.storage.load()

    async def get_user(self, user_id: str) -> User:
        """Return one user or raise NotFoundError."""
        users = await self.storage.load()
        user = user_repository.find_by_id(users, user_id)
        if user is None:
            raise NotFoundError(USER_NOT_FOUND_MESSAGE, {"id": user_id})
        return user

    async def create_user(self, payload: UserCreate) -> User:
        """Create a user with a generated id and hashed password."""
        if not payload.is_complete:
            raise ValidationError(REQUIRED_FIELDS_MESSAGE)

        users = await self.storage.load()
        if user_repository.find_by_email(users, payload.email) is not None:
            raise ConflictError(EMAIL_EXISTS_MESSAGE, {"email": payload.email})

        hashed_password = await hash_password(payload.password)
        user = User(
            id=user_repository.generate_id(users),
            name=payload.name,
            email=payload.email,
            password=hashed_password,
            profile_picture_url=payload.profile_picture_url or "",
        )
        user_repository.insert(users, user)
        await self._save(users)

        logger.info(f"Created user {user.id}")
        return user

    async def update_user(self, user_id: str, payload: UserUpdate) -> User:
        """Apply the fields the client sent to an existing user."""
        users = await self.storage.load()
        user = user_repository.find_by_id(users, user_id)
        if user is None:
            raise NotFoundError(USER_NOT_FOUND_MESSAGE, {"id": user_id})

        if payload.email and user_repository.find_by_email(
            users, payload.email, excluding_id=user.id
        ):
            raise ConflictError(EMAIL_EXISTS_MESSAGE, {"email": payload.email})

        patch = payload.model_dump(exclude_unset=True)
        if payload.password:
            patch["password"] = await hash_password(payload.password)

        user_repository.update_fields(user, patch)
        await self._save(users)

        logger.info(f"Updated user {user.id} ({', '.join(sorted(patch)) or 'no fields'})")
        return user

    async def delete_user(self, user_id: str) -> User:
        """Remove a user and return the removed record."""
        users = await self.storage.load()
        remaining, removed = user_repository.remove(users, user_id)
        if removed is None:
            raise NotFoundError(USER_NOT_FOUND_MESSAGE, {"id": user_id})

        await self._save(remaining)

        logger.info(f"Deleted user {removed.id}")
        return removed

    async def _save(self, users: list[User]) -> None:
        if not await self.storage.save(users):
            raise StorageError("Failed to save users")
