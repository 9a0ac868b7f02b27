"""
Logging helpers.

Module code asks for a named logger with ``get_logger(__name__)``;
applications call ``configure_logging()`` once at startup.
"""

from __future__ import annotations

import logging
from typing import Optional

from ..config import config

_configured = False


def configure_logging(level: Optional[str] = None, force: bool = False) -> None:
    """
    Configure root logging from ``config.logging``.

    Args:
        level: Override for the configured log level
        force: Reconfigure even if logging was already set up
    """
    global _configured
    if _configured and not force:
        return

    logging.basicConfig(
        level=(level or config.logging.log_level).upper(),
        format=config.logging.log_format,
        force=force,
    )
    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Get a module logger under the package namespace."""
    return logging.getLogger(name)
