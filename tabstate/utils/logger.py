# tabstate/utils/logger.py

import logging
import os
import traceback

# Named loggers shared across the app; handlers are attached by
# tabstate.observability.logger.configure_logging
access_logger = logging.getLogger("access")
error_logger = logging.getLogger("error")

formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(message)s", "%Y-%m-%d %H:%M:%S")


def setup_file_logger(name, log_file, level):
    """A helper function to attach a file handler to a named logger."""
    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.propagate = False  # Prevent duplicate logs in parent loggers

    # Avoid adding handlers twice (e.g., during autoreload)
    if not any(isinstance(h, logging.FileHandler) for h in logger.handlers):
        os.makedirs(os.path.dirname(log_file), exist_ok=True)
        handler = logging.FileHandler(log_file, encoding="utf-8")
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


def log_info(message):
    access_logger.info(message)


def log_exception(e: Exception, context: str = ""):
    error_logger.error(f"Exception in {context}: {e}\n{traceback.format_exc()}")
