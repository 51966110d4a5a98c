"""
Logging configuration for nudex-catalog.

Installs a single stream handler on the root logger whose records carry
the current request ID.
"""

from __future__ import annotations

import logging
import sys

from nudex_catalog.api.middleware.request_id import RequestIdFilter
from nudex_catalog.config.settings import Settings

LOG_FORMAT = "%(asctime)s %(levelname)-8s [%(request_id)s] %(name)s: %(message)s"

# Third-party loggers that are noisy at INFO
QUIET_LOGGERS = ("sqlalchemy.engine", "aiosqlite", "asyncio")


def configure_logging(settings: Settings) -> None:
    """
    Configure root logging from settings.

    Safe to call more than once; the handler installed by a previous call
    is replaced rather than duplicated.

    Parameters
    ----------
    settings : Settings
        Application settings supplying ``log_level`` and ``db_log_queries``
    """
    root = logging.getLogger()
    for handler in list(root.handlers):
        if getattr(handler, "_nudex_catalog", False):
            root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.addFilter(RequestIdFilter())
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._nudex_catalog = True  # type: ignore[attr-defined]

    root.addHandler(handler)
    root.setLevel(settings.log_level)

    for name in QUIET_LOGGERS:
        if name == "sqlalchemy.engine" and settings.db_log_queries:
            continue
        logging.getLogger(name).setLevel(logging.WARNING)
