# tabstate/observability/logger.py

# structured JSON logger
import logging
import os
import sys

from pythonjsonlogger.json import JsonFormatter

from tabstate.config import Settings
from tabstate.utils.logger import setup_file_logger


def _build_formatter() -> logging.Formatter:
    return JsonFormatter(
        fmt="%(asctime)s %(levelname)s %(name)s %(message)s %(pathname)s %(lineno)d",
        datefmt="%Y-%m-%dT%H:%M:%S%z",
    )


def configure_logging(settings: Settings) -> None:
    """Configure root logging and align the access/error loggers to JSON formatting.

    - Adds a JSON console handler (stdout) on the root logger, once.
    - Optionally writes access.log / error.log under LOGS_PATH.
    """
    root = logging.getLogger()
    root.setLevel(settings.LOG_LEVEL)

    formatter = _build_formatter()

    if settings.LOG_TO_FILE:
        setup_file_logger("access", os.path.join(settings.LOGS_PATH, "access.log"), logging.INFO)
        setup_file_logger("error", os.path.join(settings.LOGS_PATH, "error.log"), logging.ERROR)

    for logger_name in ("access", "error"):
        lg = logging.getLogger(logger_name)
        for h in lg.handlers:
            h.setFormatter(formatter)

    # Add a JSON console handler on root (single instance)
    have_console = any(
        isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler)
        for h in root.handlers
    )
    if not have_console:
        console = logging.StreamHandler(stream=sys.stdout)
        console.setLevel(settings.LOG_LEVEL)
        console.setFormatter(formatter)
        root.addHandler(console)

    logging.getLogger("startup").info(
        "logging configured",
        extra={"storage_backend": settings.STORAGE_BACKEND},
    )
