"""Startup and application context tests."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import inspect

from starter.config import Settings
from starter.context import build_context
from starter.errors import StartupError
from starter.main import create_app


def test_build_context_creates_work_dir_and_schema(tmp_path):
    """Test that startup creates the work directory, database file and users table."""
    work_dir = tmp_path / "nested" / "data"
    settings = Settings(_env_file=None, work_dir=str(work_dir), database="app.sqlite3")

    context = build_context(settings)
    try:
        assert (work_dir / "app.sqlite3").exists()
        columns = {c["name"] for c in inspect(context.engine).get_columns("users")}
        assert {"id", "email", "password_hash", "name", "is_admin"} <= columns
    finally:
        context.close()


def test_build_context_is_idempotent(tmp_path, settings):
    """Test that running startup twice keeps existing data."""
    from starter.models.user import User

    context = build_context(settings)
    with context.session_factory() as session:
        session.add(User(email="a@b.com", password_hash="x", name="Al"))
        session.commit()
    context.close()

    context = build_context(settings)
    try:
        with context.session_factory() as session:
            assert session.query(User).count() == 1
    finally:
        context.close()


def test_build_context_fails_when_work_dir_is_a_file(tmp_path):
    """Test that an unusable work directory is a fatal startup error."""
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")
    settings = Settings(_env_file=None, work_dir=str(blocker))

    with pytest.raises(StartupError):
        build_context(settings)


def test_app_refuses_to_start_without_store(tmp_path):
    """Test that the application does not serve when startup fails."""
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")
    app = create_app(Settings(_env_file=None, work_dir=str(blocker)))

    with pytest.raises(StartupError):
        with TestClient(app):
            pass
