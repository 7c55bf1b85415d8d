"""
Logging setup for the API process.

Call ``configure_logging()`` once at startup; modules then use
``logging.getLogger(__name__)``.
"""

import logging
from typing import Optional

from common.config import LOG_LEVEL

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_configured = False


def _parse_level(value: Optional[str]) -> int:
    if not value:
        return logging.INFO
    level = getattr(logging, value.strip().upper(), None)
    return level if isinstance(level, int) else logging.INFO


def configure_logging(level: Optional[str] = None, force: bool = False) -> logging.Logger:
    global _configured
    if _configured and not force:
        return logging.getLogger("eventchain")

    root = logging.getLogger()
    if force:
        for handler in list(root.handlers):
            root.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    root.setLevel(_parse_level(level or LOG_LEVEL))

    _configured = True
    return logging.getLogger("eventchain")
