"""
Logging setup for the CoinPulse server and CLI.

One stdout handler, one line format. The broadcast loop logs every tick
at DEBUG, so the libraries it drives (httpx for each provider call,
APScheduler for each job run) are held at WARNING unless the root level
asks for DEBUG. API keys and request bodies are never logged.
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

CHATTY_LOGGERS = (
    "uvicorn.access",
    "httpx",
    "httpcore",
    "apscheduler.scheduler",
    "apscheduler.executors.default",
)


def configure_logging(level: str = "INFO") -> None:
    """Install the stdout handler and tame per-tick library logging.

    Args:
        level: Root level name; unknown names fall back to INFO.
    """
    root_level = logging.getLevelName(level.upper())
    if not isinstance(root_level, int):
        root_level = logging.INFO

    logging.basicConfig(
        level=root_level,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        stream=sys.stdout,
        force=True,
    )

    library_level = logging.DEBUG if root_level <= logging.DEBUG else logging.WARNING
    for name in CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(library_level)
