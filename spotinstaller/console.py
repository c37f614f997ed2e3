from __future__ import annotations

import logging
import sys

logger = logging.getLogger("spotinstaller")


def say(message: str) -> None:
    """Print a user-facing line and keep a copy in the log."""

    print(message, flush=True)
    logger.info("%s", message)


def error(message: str) -> None:
    print(f"ERROR: {message}", file=sys.stderr, flush=True)
    logger.error("%s", message)
