"""Storage accessors for the user collection.

The whole collection is the unit of persistence: ``load`` returns every user
and ``save`` rewrites the entire document. There is no cross-process lock and
no transaction, so concurrent read-modify-write cycles can lose updates.
"""

import json
import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence
from pathlib import Path

import anyio
from pydantic import ValidationError as PydanticValidationError

from src.models.user import User

logger = logging.getLogger(__name__)


def parse_document(raw: str) -> list[User]:
    """Parse a storage document into users.

    Raises ValueError when the document is not a JSON array. Records that
    are not valid users are logged and skipped so one bad entry does not
    hide the rest of the collection.
    """
    data = json.loads(raw)
    if not isinstance(data, list):
        raise ValueError(f"expected a JSON array, got {type(data).__name__}")

    users = []
    for index, record in enumerate(data):
        try:
            users.append(User.model_validate(record))
        except PydanticValidationError as e:
            logger.error(f"Skipping invalid user record at index {index}: {e}")
    return users


def serialize_document(users: Sequence[User]) -> str:
    """Serialize users as a 2-space indented JSON array."""
    return json.dumps([user.to_document() for user in users], indent=2, ensure_ascii=False)


class UserStorage(ABC):
    """Reads and writes the entire user collection."""

    @abstractmethod
    async def load(self) -> list[User]:
        """Return all users, or an empty list if the document is unusable."""

    @abstractmethod
    async def save(self, users: Sequence[User]) -> bool:
        """Overwrite the document with ``users``. Returns False on failure."""


class JsonFileUserStorage(UserStorage):
    """Storage document kept as a UTF-8 JSON file on local disk."""

    def __init__(self, path: Path | str):
        self.path = anyio.Path(path)

    async def load(self) -> list[User]:
        try:
            raw = await self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.warning(f"Users file {self.path} not found, using an empty collection")
            return []
        except (OSError, ValueError) as e:
            logger.error(f"Error reading users file {self.path}: {e}")
            return []

        try:
            return parse_document(raw)
        except ValueError as e:
            logger.error(f"Error parsing users file {self.path}: {e}")
            return []

    async def save(self, users: Sequence[User]) -> bool:
        # Write beside the target and rename over it so readers never see a partial file
        tmp_path = self.path.with_name(f".{self.path.name}.tmp")
        try:
            document = serialize_document(users)
            await self.path.parent.mkdir(parents=True, exist_ok=True)
            await tmp_path.write_text(document, encoding="utf-8")
            await tmp_path.replace(self.path)
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Error writing users file {self.path}: {e}")
            try:
                await tmp_path.unlink(missing_ok=True)
            except OSError as cleanup_error:
                logger.warning(f"Could not remove temporary file {tmp_path}: {cleanup_error}")
            return False
        return True


class InMemoryUserStorage(UserStorage):
    """Storage document held as a string in memory.

    Holding the serialized text rather than the objects means callers never
    share mutable state with the store, just as with the file-backed version.
    """

    def __init__(self, document: str | None = None, fail_on_save: bool = False):
        self.document = document
        self.fail_on_save = fail_on_save
        self.save_count = 0

    async def load(self) -> list[User]:
        if self.document is None:
            return []
        try:
            return parse_document(self.document)
        except ValueError as e:
            logger.error(f"Error parsing in-memory users document: {e}")
            return []

    async def save(self, users: Sequence[User]) -> bool:
        if self.fail_on_save:
            logger.error("Error writing in-memory users document: save disabled")
            return False
        self.document = serialize_document(users)
        self.save_count += 1
        return True
