"""Database configuration and session management."""

import logging
from collections.abc import Generator
from typing import Any

from fastapi import Request
from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from starter.config import Settings

logger = logging.getLogger(__name__)

Base: Any = declarative_base()


def create_db_engine(settings: Settings) -> Engine:
    """Create the work directory if needed and open the SQLite engine."""
    settings.database_path.parent.mkdir(parents=True, exist_ok=True)
    logger.info(f"Opening database at {settings.database_path}")
    return create_engine(
        settings.database_url,
        connect_args={"check_same_thread": False},
        pool_pre_ping=True,
    )


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    """Build the session factory bound to the engine."""
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(engine: Engine) -> None:
    """Initialize the database by creating all tables."""
    # Import all models here so they are registered with Base.metadata
    from starter import models  # noqa: F401

    Base.metadata.create_all(bind=engine)


def get_db(request: Request) -> Generator[Session, None, None]:
    """Dependency that provides a database session."""
    db = request.app.state.context.session_factory()
    try:
        yield db
    finally:
        db.close()
