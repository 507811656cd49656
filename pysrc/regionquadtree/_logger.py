"""Package logger. Silent unless the application configures logging."""

import logging

LOGGER_NAME = "regionquadtree"

logger = logging.getLogger(LOGGER_NAME)
logger.addHandler(logging.NullHandler())


def set_debug(enabled: bool) -> None:
    """Emit subdivision and rejection records, or defer to the parent level."""
    logger.setLevel(logging.DEBUG if enabled else logging.NOTSET)
