"""
Logging Configuration

Routes the "unicart" logger to stderr. Records carry the thread name
because enrichments run concurrently on worker and request threads.
"""

import logging
import sys

LOG_FORMAT = "%(levelname)-8s [%(threadName)s] %(name)s: %(message)s"


def setup_logging(verbose: bool = False, quiet: bool = False) -> logging.Logger:
    """
    Configure logging for the service.

    Args:
        verbose: DEBUG level (wins over quiet)
        quiet: WARNING level

    Returns:
        The configured "unicart" logger
    """
    level = logging.DEBUG if verbose else logging.WARNING if quiet else logging.INFO

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    logger = logging.getLogger("unicart")
    logger.setLevel(level)
    # Replace rather than stack handlers on repeated calls
    for old in list(logger.handlers):
        logger.removeHandler(old)
    logger.addHandler(handler)
    return logger
