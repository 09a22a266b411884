"""
Process-wide logging setup shared by the API and the command-line helpers.
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

# Client libraries that log every request at INFO.
_QUIET_AT_INFO = ("asyncpg", "googleapiclient.discovery_cache", "httpx")


def configure_logging(level: str = "INFO") -> None:
    """Send records to stdout; library chatter stays hidden unless debugging."""
    level = level.upper()
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stdout)
    if level == "DEBUG":
        return
    for name in _QUIET_AT_INFO:
        logging.getLogger(name).setLevel(logging.WARNING)


__all__ = ["LOG_FORMAT", "configure_logging"]
