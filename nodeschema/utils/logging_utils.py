import logging
import sys
from typing import Optional


PACKAGE_LOGGER = "nodeschema"


class _BelowLevelFilter(logging.Filter):
    def __init__(self, level: int) -> None:
        super().__init__()
        self._level = level

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < self._level


def configure_split_stream_logging(
    *,
    verbose: bool = False,
    stderr_level: int = logging.WARNING,
    formatter: Optional[logging.Formatter] = None,
    logger_name: str = PACKAGE_LOGGER,
) -> logging.Logger:
    """Configure the package logger for command line use.

    Records below ``stderr_level`` go to stdout, the rest to stderr, so that
    machine-readable output on stdout can be separated from diagnostics.
    DEBUG records are only emitted with ``verbose``.
    """

    logger = logging.getLogger(logger_name)
    logger.handlers.clear()
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    logger.propagate = False

    if formatter is None:
        formatter = logging.Formatter("%(levelname)s: %(message)s")

    stdout_handler = logging.StreamHandler(stream=sys.stdout)
    stdout_handler.addFilter(_BelowLevelFilter(stderr_level))
    stdout_handler.setFormatter(formatter)

    stderr_handler = logging.StreamHandler(stream=sys.stderr)
    stderr_handler.setLevel(stderr_level)
    stderr_handler.setFormatter(formatter)

    logger.addHandler(stdout_handler)
    logger.addHandler(stderr_handler)
    return logger
