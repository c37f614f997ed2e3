from __future__ import annotations

import logging
import sys
from typing import Callable, Optional, TextIO

logger = logging.getLogger(__name__)


def is_interactive(stream: Optional[TextIO] = None) -> bool:
    """True when stdin is a terminal (not e.g. ``curl ... | spotinstaller``)."""

    s = stream if stream is not None else sys.stdin
    try:
        return bool(s.isatty())
    except (AttributeError, ValueError):
        return False


def confirm(question: str, *, read: Callable[[str], str] = input) -> bool:
    """Ask a (y/n) question; anything not starting with y/Y is a no."""

    try:
        answer = read(f"{question} (y/n): ")
    except EOFError:
        answer = ""
    accepted = answer.strip()[:1] in {"y", "Y"}
    logger.info("Prompt %r answered %r (accepted=%s)", question, answer, accepted)
    return accepted
