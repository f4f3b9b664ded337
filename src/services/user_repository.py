"""In-memory operations over a loaded user collection.

These functions never touch storage. Callers load the collection, apply
one of these, and save the result.
"""

import time
from collections.abc import Mapping
from typing import Any

from src.models.user import User


def find_by_id(users: list[User], user_id: str) -> User | None:
    """Find a user by exact id."""
    return next((user for user in users if user.id == user_id), None)


def find_by_email(users: list[User], email: str, excluding_id: str | None = None) -> User | None:
    """Find a user by exact, case-sensitive email, optionally skipping one id."""
    for user in users:
        if user.email == email and (excluding_id is None or user.id != excluding_id):
            return user
    return None


def generate_id(users: list[User], now: float | None = None) -> str:
    """Generate an id from the creation time in milliseconds.

    Bumps the value until it is unused so that two users created within the
    same millisecond still get distinct ids.
    """
    timestamp = now if now is not None else time.time()
    candidate = int(timestamp * 1000)
    taken = {user.id for user in users}
    while str(candidate) in taken:
        candidate += 1
    return str(candidate)


def insert(users: list[User], candidate: User) -> list[User]:
    """Append a user. Uniqueness must already be checked."""
    users.append(candidate)
    return users


def update_fields(user: User, patch: Mapping[str, Any]) -> User:
    """Apply a partial update in place.

    ``name``, ``email`` and ``password`` are only overwritten by truthy
    values. ``profile_picture_url`` is overwritten whenever the key is
    present, so an explicit empty string clears it.
    """
    for field in ("name", "email", "password"):
        if patch.get(field):
            setattr(user, field, patch[field])
    if "profile_picture_url" in patch:
        user.profile_picture_url = patch["profile_picture_url"] or ""
    return user


def remove(users: list[User], user_id: str) -> tuple[list[User], User | None]:
    """Remove a user by id, returning the remaining users and the removed one."""
    for index, user in enumerate(users):
        if user.id == user_id:
            return users[:index] + users[index + 1 :], user
    return users, None
