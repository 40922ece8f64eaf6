import logging
from logging import FileHandler, Logger, StreamHandler
import os
import re
from typing import Any

from src.main.config import config

LOG_DIR = os.path.join(os.path.dirname(__file__), "..", "logs")
LOG_FILE = os.path.join(LOG_DIR, "tokens.log")

logging_format = "%(asctime)s [%(levelname)s]|[%(process)d]| %(name)s: %(message)s"
plain_logging_format = "%(asctime)s [%(process)d]| %(message)s"
time_logging_format = "%Y-%m-%d %H:%M:%S"

log_level = getattr(logging, config.app.LOG_LEVEL.upper(), logging.INFO)
file_log_level = getattr(logging, config.app.LOG_LEVEL_FILE.upper(), logging.WARNING)

# A JSON header segment always starts with base64url('{"')
TOKEN_PATTERN = re.compile(r"eyJ[\w-]*\.[\w-]+\.[\w-]+")
REDACTED_TOKEN = "<redacted-token>"


class TokenRedactingFilter(logging.Filter):
    """Replaces signed tokens in the rendered message before it is written."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = TOKEN_PATTERN.sub(REDACTED_TOKEN, message)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


def get_file_handler() -> FileHandler:
    os.makedirs(LOG_DIR, exist_ok=True)
    file_handler = logging.FileHandler(LOG_FILE, "a", "utf-8")
    file_handler.setLevel(file_log_level)
    file_handler.setFormatter(logging.Formatter(logging_format, time_logging_format))
    return file_handler


def get_stream_handler(fmt: str = logging_format) -> StreamHandler:  # type: ignore
    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(log_level)
    stream_handler.setFormatter(logging.Formatter(fmt, time_logging_format))
    return stream_handler


def get_logger(name: Any, *, plain_format: bool = False) -> Logger:
    """
    Named, non-propagating logger. Regular loggers write to stderr and to
    logs/tokens.log; plain loggers (request timing, error responses) only
    write a compact line to stderr. Every logger redacts signed tokens.
    """
    logger = logging.getLogger(name)

    if logger.handlers:
        return logger

    logger.setLevel(log_level)

    if plain_format:
        logger.addHandler(get_stream_handler(plain_logging_format))
    else:
        logger.addHandler(get_file_handler())
        logger.addHandler(get_stream_handler())

    logger.addFilter(TokenRedactingFilter())
    logger.propagate = False
    return logger
