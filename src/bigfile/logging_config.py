"""Logging setup for applications embedding bigfile."""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: int = logging.INFO) -> None:
    """Configure root logging with the bigfile format.

    Args:
        level: Level for the bigfile loggers.
    """
    logging.basicConfig(
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        level=logging.INFO,
    )
    logging.getLogger("bigfile").setLevel(level)
