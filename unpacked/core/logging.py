# File: unpacked/core/logging.py

"""Logging configuration for the API process."""

import logging

from unpacked.core.config import settings


def configure_logging() -> None:
    """Configure the root logger once, using LOG_LEVEL from settings."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
