"""Error taxonomy for the user store.

Each error carries the HTTP status it maps to. The application registers a
single handler for ``UserStoreError`` that renders ``{"error": message}``.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

logger = logging.getLogger(__name__)


class UserStoreError(Exception):
    """Base exception for all user store errors."""

    status_code = 500

    def __init__(self, message: str, details: dict[str, str] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


class ValidationError(UserStoreError):
    """Request is missing required fields or is malformed."""

    status_code = 400


class NotFoundError(UserStoreError):
    """No user has the requested id."""

    status_code = 404


class ConflictError(UserStoreError):
    """Email already belongs to another user."""

    status_code = 409


class StorageError(UserStoreError):
    """Reading, writing or serializing the storage document failed."""

    status_code = 500


@contextmanager
def internal_errors(message: str) -> Iterator[None]:
    """Convert unexpected failures into a generic ``StorageError``.

    Client errors (4xx) pass through untouched. Anything else is logged with
    its traceback and replaced so the detail never reaches the client.
    """
    try:
        yield
    except UserStoreError as e:
        if e.status_code < 500:
            raise
        logger.error(f"{message}: {e}", exc_info=True)
        raise StorageError(message) from e
    except Exception as e:
        logger.error(f"{message}: {e}", exc_info=True)
        raise StorageError(message) from e
