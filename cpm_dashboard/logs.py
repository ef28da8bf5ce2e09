"""Logging setup shared by the Streamlit page and the scripts."""

from __future__ import annotations

import logging
import os

from dotenv import find_dotenv, load_dotenv

_LOGGING_CONFIGURED = False


def configure_logging(level: str | None = None, *, load_env: bool = True) -> None:
    """Configure process-wide logging once, using ``CPM_LOG_LEVEL`` by default.

    ``.env`` is read first so a level set there applies before any handler is installed.
    """

    global _LOGGING_CONFIGURED
    if _LOGGING_CONFIGURED:
        return

    if load_env:
        load_dotenv(find_dotenv(usecwd=True))

    level_name = (level or os.getenv("CPM_LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(format="%(asctime)s | %(levelname)s | %(name)s | %(message)s")
    logging.getLogger().setLevel(getattr(logging, level_name, logging.INFO))
    _LOGGING_CONFIGURED = True
