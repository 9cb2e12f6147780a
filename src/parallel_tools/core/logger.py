"""Package-wide logging helpers.

All loggers live below ``parallel_tools`` so a host process can configure the
whole package through a single logger.
"""

import logging
import sys

_LOGGER_NAME = "parallel_tools"
_DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the package logger or one of its children.

    Module names that already start with the package name (``__name__`` inside the
    package) are used as they are; any other name is nested below the package logger.
    """
    if not name or name == _LOGGER_NAME:
        return logging.getLogger(_LOGGER_NAME)
    if name.startswith(f"{_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{_LOGGER_NAME}.{name}")


def setup_logging(level: int | str = logging.INFO, format_str: str = _DEFAULT_FORMAT) -> None:
    """Print package logs to stdout.

    Meant for host processes and scripts; the package itself never calls it.
    Calling it again only updates the level.

    Args:
        level: Logging level, as an int or a level name such as "DEBUG".
        format_str: Log format string.
    """
    package_logger = logging.getLogger(_LOGGER_NAME)
    package_logger.setLevel(level)

    if any(type(handler) is logging.StreamHandler for handler in package_logger.handlers):
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(format_str))
    package_logger.addHandler(handler)


# Silent unless the host configures logging
logging.getLogger(_LOGGER_NAME).addHandler(logging.NullHandler())
