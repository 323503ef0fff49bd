"""Centralized logging configuration.

All modules log through ``logging.getLogger(__name__)``; this module only
installs the handler on the package root logger.
"""

from __future__ import annotations

import logging
import sys

# Package logger, e.g. "src.biometric_sync.biometric_sync"
ROOT_LOGGER = __name__.rsplit(".common.", 1)[0]


class SyncFormatter(logging.Formatter):
    """Format: [TIMESTAMP] [COMPONENT] [LEVEL] message"""

    def __init__(self):
        super().__init__(
            fmt="[%(asctime)s] [%(component)s] [%(levelname)s] %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    def format(self, record):
        # Short component name: "sync.orchestrator" rather than the full dotted path
        name = record.name
        if name.startswith(ROOT_LOGGER + "."):
            name = name[len(ROOT_LOGGER) + 1:]
        record.component = name
        return super().format(record)


def setup_logging(level: str = "INFO") -> logging.Logger:
    """Install a console handler on the package logger.

    Safe to call more than once; handlers are not duplicated.
    """

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(getattr(logging, str(level).upper(), logging.INFO))

    if not any(getattr(h, "_biometric_sync", False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(SyncFormatter())
        handler._biometric_sync = True  # type: ignore[attr-defined]
        logger.addHandler(handler)

    return logger
