"""Process-wide logging setup (stdlib logging, one format for app and server logs)."""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def configure_logging(level: str = "INFO") -> None:
    """Configure the root logger; safe to call more than once."""
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        force=True,
    )
    # SQL echo is controlled by DEBUG on the engine, not by the app log level.
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
