"""
core/log_config.py
──────────────────
One-time root logger configuration for the API process.

Every module logs through ``logging.getLogger(__name__)``; this module
only decides level and format, driven by :class:`~core.config.Settings`.
"""

import logging

from core.config import Settings

_LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def configure_logging(settings: Settings) -> None:
    """
    Configure the root logger from ``DEBUG`` / ``LOG_LEVEL``.

    Safe to call more than once; later calls only adjust the level.
    """
    level = logging.DEBUG if settings.DEBUG else getattr(logging, settings.LOG_LEVEL)
    logging.basicConfig(level=level, format=_LOG_FORMAT)
    logging.getLogger().setLevel(level)
