"""Logging setup."""

import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Send application logs to stderr at the given level."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    logging.getLogger("starter").setLevel(level.upper())
