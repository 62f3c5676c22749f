"""SQLAlchemy models."""

from starter.models.user import User

__all__ = [
    "User",
]
