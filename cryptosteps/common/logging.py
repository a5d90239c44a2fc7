"""Logging utilities for cryptosteps modules."""

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger that inherits from the root logger.

    The logger propagates to the root logger, so ``logging.basicConfig()``
    (called by the CLI's ``--verbose`` flag) is enough to see its output.
    When the root logger has no handlers yet, the level defaults to WARNING
    so library use stays quiet.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.propagate = True

    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logger.setLevel(logging.WARNING)

    return logger


def configure_logging(verbose: bool = False) -> None:
    """Configure root logging for command-line use."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger().setLevel(level)
    # Loggers created before basicConfig() pinned themselves to WARNING
    for name in list(logging.root.manager.loggerDict):
        if name.startswith("cryptosteps"):
            logging.getLogger(name).setLevel(logging.NOTSET)
