"""Logging setup for CLI runs"""

import logging


def setup_logging(level: str = "WARNING") -> None:
    """Route sitepub loggers to stderr at the given level."""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logging.getLogger("sqlalchemy").setLevel(logging.WARNING)
