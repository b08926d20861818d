"""
Plain console logging for scripts and local development
"""

import os
import logging
import sys
from typing import Optional

CONSOLE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
CONSOLE_DATEFMT = "%Y-%m-%d %H:%M:%S"

# Chatty libraries: request lines from httpx and uvicorn, connection churn from redis
NOISY_LOGGERS = ("httpx", "httpcore", "uvicorn.access", "redis")


def console_formatter() -> logging.Formatter:
    return logging.Formatter(fmt=CONSOLE_FORMAT, datefmt=CONSOLE_DATEFMT)


def quiet_third_party_loggers(level: int = logging.WARNING) -> None:
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(level)


def setup_logging(log_level: Optional[str] = None) -> None:
    """Human-readable logging on stdout; level falls back to LOG_LEVEL"""
    log_level = (log_level or os.getenv("LOG_LEVEL", "INFO")).upper()

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level, logging.INFO))
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(console_formatter())
    root_logger.addHandler(console_handler)

    quiet_third_party_loggers()


def get_logger(name: str) -> logging.Logger:
    """Get logger instance"""
    return logging.getLogger(name)
