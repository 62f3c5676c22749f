"""Pydantic schemas for API requests and responses."""

from starter.schemas.user import USER_REGISTER_SCHEMA, UserRegister, UserResponse

__all__ = [
    "USER_REGISTER_SCHEMA",
    "UserRegister",
    "UserResponse",
]
