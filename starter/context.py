"""Application context shared by request handlers."""

import logging
from dataclasses import dataclass

from fastapi import Request
from sqlalchemy import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from starter.config import Settings
from starter.database import create_db_engine, create_session_factory, init_db
from starter.errors import StartupError

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    """Settings and store handles built once at startup."""

    settings: Settings
    engine: Engine
    session_factory: sessionmaker[Session]

    def close(self) -> None:
        self.engine.dispose()


def build_context(settings: Settings) -> AppContext:
    """Open the database and create the schema.

    Raises StartupError when the work directory or the database cannot be
    set up; the application must not serve traffic in that case.
    """
    try:
        engine = create_db_engine(settings)
    except OSError as e:
        logger.critical(f"Failed to create work directory {settings.work_dir}: {e}")
        raise StartupError("failed to create work directory") from e

    try:
        init_db(engine)
    except SQLAlchemyError as e:
        engine.dispose()
        logger.critical(f"Failed to open or migrate database {settings.database_path}: {e}")
        raise StartupError("failed to initialize database") from e

    return AppContext(
        settings=settings,
        engine=engine,
        session_factory=create_session_factory(engine),
    )


def get_context(request: Request) -> AppContext:
    """Dependency that provides the application context."""
    return request.app.state.context
