"""Tests for the registration workflow failure paths."""

from unittest.mock import MagicMock, patch

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from starter.errors import InternalError, UserExistsError, ValidationFailedError
from starter.models.user import User
from starter.services.auth import verify_password
from starter.services.registration import RegistrationService

VALID_PAYLOAD = {"email": "a@b.com", "password": "password1", "name": "Al"}


def make_mock_db(existing=None):
    """Mock session whose email lookup returns `existing`."""
    db = MagicMock()
    db.query.return_value.filter.return_value.first.return_value = existing
    return db


def test_register_persists_user(db):
    """Test that a valid payload creates a non-admin user."""
    user = RegistrationService(db).register(VALID_PAYLOAD)

    assert user.id is not None
    assert user.email == "a@b.com"
    assert user.name == "Al"
    assert user.is_admin is False
    assert verify_password("password1", user.password_hash)
    assert db.query(User).count() == 1


def test_register_validation_error_skips_store():
    """Test that invalid input never reaches the hasher or the store."""
    db = make_mock_db()
    hasher = MagicMock()

    with pytest.raises(ValidationFailedError) as exc_info:
        RegistrationService(db, hasher=hasher).register({**VALID_PAYLOAD, "name": "A"})

    assert exc_info.value.status_code == 400
    assert "name" in exc_info.value.error
    hasher.assert_not_called()
    db.query.assert_not_called()
    db.add.assert_not_called()


def test_register_hash_failure_is_internal():
    """Test that a hasher failure becomes a generic 500."""
    db = make_mock_db()
    hasher = MagicMock(side_effect=ValueError("backend exploded"))

    with pytest.raises(InternalError) as exc_info:
        RegistrationService(db, hasher=hasher).register(VALID_PAYLOAD)

    assert exc_info.value.status_code == 500
    assert exc_info.value.error == "Failed to hash password"
    assert "exploded" not in str(exc_info.value.to_dict())
    db.add.assert_not_called()


def test_register_existing_email_is_conflict():
    """Test that a found user is reported as already existing."""
    db = make_mock_db(existing=User(email="a@b.com", name="Al", password_hash="x"))

    with pytest.raises(UserExistsError) as exc_info:
        RegistrationService(db).register(VALID_PAYLOAD)

    assert exc_info.value.status_code == 400
    assert exc_info.value.error == "User already exists"
    db.add.assert_not_called()


def test_register_lookup_failure_is_internal():
    """Test that a failed lookup is not mistaken for an existing user."""
    db = MagicMock()
    db.query.side_effect = OperationalError("SELECT", {}, Exception("disk I/O error"))

    with pytest.raises(InternalError) as exc_info:
        RegistrationService(db).register(VALID_PAYLOAD)

    assert exc_info.value.status_code == 500
    assert exc_info.value.error == "Failed to look up user"
    db.add.assert_not_called()


def test_register_insert_failure_is_internal():
    """Test that a failed insert is rolled back and reported generically."""
    db = make_mock_db()
    db.commit.side_effect = OperationalError("INSERT", {}, Exception("database is locked"))

    with pytest.raises(InternalError) as exc_info:
        RegistrationService(db).register(VALID_PAYLOAD)

    assert exc_info.value.error == "Failed to create user"
    db.rollback.assert_called_once()


def test_register_unique_violation_is_conflict(db):
    """Test that losing the check-then-insert race reports an existing user."""
    RegistrationService(db).register(VALID_PAYLOAD)

    # Simulate a concurrent registration that passed the lookup first
    with patch("starter.services.registration.get_user_by_email", return_value=None):
        with pytest.raises(UserExistsError):
            RegistrationService(db).register({**VALID_PAYLOAD, "name": "Other"})

    assert db.query(User).filter(User.email == "a@b.com").count() == 1


def test_register_integrity_error_rolls_back():
    """Test that a constraint violation on commit rolls the session back."""
    db = make_mock_db()
    db.commit.side_effect = IntegrityError("INSERT", {}, Exception("UNIQUE constraint failed"))

    with pytest.raises(UserExistsError):
        RegistrationService(db).register(VALID_PAYLOAD)

    db.rollback.assert_called_once()
    db.refresh.assert_not_called()


def test_register_internal_error_over_http(app, client):
    """Test that internal failures reach the client as a generic 500."""
    from starter.api.dependencies import get_registration_service

    def failing_service():
        return RegistrationService(make_mock_db(), hasher=MagicMock(side_effect=RuntimeError))

    app.dependency_overrides[get_registration_service] = failing_service
    try:
        response = client.post("/api/user", json=VALID_PAYLOAD)
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to hash password"}


def test_unhandled_error_is_recovered(app, client):
    """Test that an unexpected exception becomes a 500 with the error envelope."""
    from starter.api.dependencies import get_registration_service

    broken = MagicMock()
    broken.register.side_effect = KeyError("boom")
    app.dependency_overrides[get_registration_service] = lambda: broken
    try:
        response = client.post("/api/user", json=VALID_PAYLOAD)
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    assert response.json() == {"error": "Internal Server Error"}
    assert response.headers["X-Request-ID"]
