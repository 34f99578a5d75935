# classgroups/config/logging_config.py
import logging

from classgroups.config.settings import settings


def configure_logging(level: str = None):
    """Set up root logging once for the API process."""
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
