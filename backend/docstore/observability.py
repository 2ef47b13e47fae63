"""Logging setup and Logfire instrumentation."""

import logging

import logfire

from . import __version__
from .config import Settings

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    """Configure root logging at the configured level."""
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def initialize_logfire(settings: Settings) -> bool:
    """
    Initialize Logfire and instrument PyMongo.

    Must be called once at startup, before the Motor client is created, so
    that the command listener is registered on it.

    Returns:
        True when Logfire was configured, False when it was skipped.
    """
    if not settings.logfire_token:
        logger.warning("Logfire token not set - observability disabled")
        return False

    try:
        logfire.configure(
            token=settings.logfire_token,
            service_name="docstore",
            service_version=__version__,
            environment=settings.environment,
        )

        logfire.instrument_pymongo()

        # Bridge Python logging to Logfire
        logging.getLogger().addHandler(logfire.LogfireLoggingHandler())

        logger.info("Logfire initialized")
        return True

    except Exception as e:
        # Observability is optional; keep running without it
        logger.warning(f"Failed to initialize Logfire: {e}")
        return False
