"""
Logging Configuration
Routes the generator, slice analyzer and sweep runner logs ('leonardo_rule.*')
to the console and, optionally, a file. The Streamlit app and the single-tree
demo call setup_logging at start-up; the API leaves logging to uvicorn.
"""
import logging
import sys
from typing import Optional

# Held at WARNING or above whatever level the package logger runs at
QUIET_LOGGERS = ("httpx", "httpcore", "google_genai")


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> None:
    """
    Attach console (and optional file) handlers to the 'leonardo_rule' logger.

    Safe to call on every Streamlit rerun: existing handlers are replaced,
    not stacked.

    Args:
        level: Level for the package logger and its handlers.
        log_file: Optional path; overwritten on each call.
    """
    logger = logging.getLogger("leonardo_rule")
    logger.setLevel(level)

    if logger.hasHandlers():
        logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    logger.debug("Logging initialized (level=%s, file=%s)", logging.getLevelName(level), log_file)
