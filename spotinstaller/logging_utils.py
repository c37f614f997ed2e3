from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from .config import expand_home

DEFAULT_LOG_PATH = "~/.local/state/spotinstaller/spotinstaller.log"


def configure_logging(
    log_path: str = DEFAULT_LOG_PATH,
    level: int = logging.INFO,
    also_console: bool = False,
) -> str:
    """Configure logging.

    Every command, download and decision goes to the log file; the terminal
    only gets the plain messages the CLI prints itself.

    If the requested log location is not writable we fall back to a file in
    the working directory.

    Returns the actual file path being used.
    """

    logger = logging.getLogger()
    logger.setLevel(level)

    # Avoid duplicate handlers if configure_logging() is called multiple times.
    if getattr(logger, "_spotinstaller_configured", False):
        return getattr(logger, "_spotinstaller_log_path", log_path)

    requested = expand_home(log_path)
    chosen_path = requested
    handlers: list[logging.Handler] = []

    fmt = logging.Formatter(
        fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S%z",
    )

    file_handler: Optional[logging.Handler] = None
    try:
        Path(os.path.dirname(requested) or ".").mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(requested)
    except OSError:
        chosen_path = str(Path.cwd() / "spotinstaller.log")
        file_handler = logging.FileHandler(chosen_path)
    file_handler.setFormatter(fmt)
    handlers.append(file_handler)

    if also_console:
        console = logging.StreamHandler()
        console.setFormatter(fmt)
        handlers.append(console)

    for h in handlers:
        logger.addHandler(h)

    setattr(logger, "_spotinstaller_configured", True)
    setattr(logger, "_spotinstaller_log_path", chosen_path)

    logging.getLogger(__name__).info(
        "Logging initialized (requested=%s, actual=%s)", requested, chosen_path
    )
    return chosen_path
