"""User registration workflow: validate, hash, check uniqueness, persist."""

import logging
from collections.abc import Callable
from typing import Any

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from starter.errors import InternalError, UserExistsError, ValidationFailedError
from starter.models.user import User
from starter.schemas.user import USER_REGISTER_SCHEMA, UserRegister
from starter.services.auth import get_password_hash
from starter.validation import SchemaError

logger = logging.getLogger(__name__)


def get_user_by_email(db: Session, email: str) -> User | None:
    """Get a user by email."""
    return db.query(User).filter(User.email == email).first()


class RegistrationService:
    """Service that creates users from raw registration payloads."""

    def __init__(self, db: Session, hasher: Callable[[str], str] = get_password_hash):
        self.db = db
        self.hasher = hasher

    def register(self, payload: Any) -> User:
        """
        Register a new user from a decoded JSON body.

        Raises:
            ValidationFailedError: payload failed the schema (400).
            UserExistsError: email already registered (400).
            InternalError: hashing or store failure (500).
        """
        try:
            data = USER_REGISTER_SCHEMA.parse(payload, UserRegister)
        except SchemaError as e:
            raise ValidationFailedError(e.sanitize()) from None

        try:
            hashed_password = self.hasher(data.password)
        except Exception:
            logger.exception("Failed to hash password")
            raise InternalError("Failed to hash password") from None

        try:
            existing_user = get_user_by_email(self.db, data.email)
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception("Failed to look up user by email")
            raise InternalError("Failed to look up user") from None
        if existing_user:
            raise UserExistsError()

        user = User(
            email=data.email,
            password_hash=hashed_password,
            name=data.name,
            is_admin=False,
        )
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError:
            # Lost the race against a concurrent registration of the same email
            self.db.rollback()
            raise UserExistsError() from None
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception("Failed to create user")
            raise InternalError("Failed to create user") from None
        self.db.refresh(user)

        logger.info(f"Registered user {user.id}")
        return user
