"""Command-line entry point that serves the application with uvicorn."""

import uvicorn

from starter.config import get_settings
from starter.logging_config import configure_logging
from starter.main import create_app


def run() -> None:
    """Serve the API on the configured address."""
    settings = get_settings()
    configure_logging(settings.log_level)

    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_config=None,
        access_log=False,
    )


if __name__ == "__main__":
    run()
