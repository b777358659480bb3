import logging
import os

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s: %(message)s"


def level_from_verbosity(verbosity: int) -> int:
    """Map a -v count to a level: none -> WARNING, -v -> INFO, -vv -> DEBUG."""
    if verbosity >= 2:
        return logging.DEBUG
    if verbosity == 1:
        return logging.INFO
    return logging.WARNING


def configure_logging(default_level: int = logging.WARNING) -> None:
    """Configure the root logger for the CLI.

    DELVE_LOG_LEVEL (e.g. "debug") takes precedence over ``default_level``.
    Existing root handlers are replaced so repeated calls do not duplicate output.
    """
    level = default_level
    level_name = os.getenv("DELVE_LOG_LEVEL")
    if level_name:
        level = getattr(logging, level_name.upper(), default_level)
    logging.basicConfig(level=level, format=LOG_FORMAT, force=True)
    logging.getLogger(__name__).debug("Logging configured at %s", logging.getLevelName(level))
