"""Pydantic schemas for API requests and responses."""

from src.schemas.user import DeleteResponse, ErrorResponse, UserCreate, UserUpdate

__all__ = [
    "UserCreate",
    "UserUpdate",
    "DeleteResponse",
    "ErrorResponse",
]
