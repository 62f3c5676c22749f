"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from starlette.exceptions import HTTPException as StarletteHTTPException

from starter.api import index, users
from starter.config import Settings, get_settings
from starter.context import build_context
from starter.errors import AppError, app_error_handler, http_exception_handler
from starter.middleware import init_middlewares

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application. Settings default to the environment."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Build the application context on startup and release it on shutdown."""
        # StartupError propagates and aborts startup
        context = build_context(settings or get_settings())
        app.state.context = context
        logger.info(f"Serving {context.settings.public_url}")
        yield
        context.close()

    app = FastAPI(
        title="Baby Starter API",
        description="Minimal web application starter with user registration",
        version="0.1.0",
        lifespan=lifespan,
    )

    init_middlewares(app)

    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)

    # Register routers
    app.include_router(index.router)
    app.include_router(users.router)

    return app


app = create_app()
