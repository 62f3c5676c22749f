"""User model."""

from sqlalchemy import Boolean, Column, Integer, String

from starter.database import Base
from starter.models.mixins import TimestampMixin


class User(Base, TimestampMixin):
    """Registered user. Rows are only ever inserted by the registration workflow."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    # unique constraint closes the check-then-insert race on registration
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    name = Column(String(255), nullable=False)
    is_admin = Column(Boolean, default=False, nullable=False)
