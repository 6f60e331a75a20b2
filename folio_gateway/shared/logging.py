"""
Logging setup for the gateway process.

One line per record on stdout, pipe-separated. Records carry
identifiers only (account ids, symbols, capability names), never
response bodies or amounts.
"""

import logging
import sys
from typing import Iterable

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Per-request chatter from the server and the SQL engine.
QUIET_LOGGERS = ("uvicorn.access", "uvicorn.error", "sqlalchemy.engine")

logger = logging.getLogger("folio_gateway")


def configure_logging(
    level: str = "INFO", quiet: Iterable[str] = QUIET_LOGGERS
) -> None:
    """Install the root handler at ``level``.

    Unknown level names fall back to INFO. Loggers named in ``quiet``
    are raised to WARNING.
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        stream=sys.stdout,
        force=True,
    )
    for name in quiet:
        logging.getLogger(name).setLevel(logging.WARNING)


def announce_server(host: str, port: int) -> None:
    """Log where the API and its health endpoint are reachable."""
    base_url = f"http://{host}:{port}"
    logger.info("External API server ready at %s", base_url)
    logger.info("Health endpoint: %s/api/health", base_url)
