#!/usr/bin/env python3
"""Logger utilities for code-pusher."""

import logging
import os
import sys
from typing import Optional

LOG_LEVEL_ENV = 'CODE_PUSHER_LOG_LEVEL'


def _level_from_env() -> int:
    """Resolve the default level from CODE_PUSHER_LOG_LEVEL."""
    name = os.environ.get(LOG_LEVEL_ENV, 'INFO').upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """Get a configured logger instance.

    Args:
        name: Logger name (usually __name__)
        level: Logging level (default: CODE_PUSHER_LOG_LEVEL or INFO)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    # Only configure if not already configured
    if not logger.handlers:
        logger.setLevel(level or _level_from_env())

        # stderr so diagnostics stay apart from user notices on stdout
        handler = logging.StreamHandler(sys.stderr)
        handler.setLevel(logging.DEBUG)

        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )
        handler.setFormatter(formatter)

        logger.addHandler(handler)

    return logger
