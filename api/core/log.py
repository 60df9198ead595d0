"""
Process-wide logging setup.
"""

from __future__ import annotations

import logging

from . import config

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging(level: str | None = None) -> None:
    level = (level or config.log_level()).upper()
    if not isinstance(logging.getLevelName(level), int):
        level = "INFO"

    root = logging.getLogger()
    root.setLevel(level)

    # uvicorn may already have installed handlers; add ours only once.
    if any(getattr(handler, "_blog_api", False) for handler in root.handlers):
        return None

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._blog_api = True  # type: ignore[attr-defined]
    root.addHandler(handler)
