from __future__ import annotations

import logging
from pathlib import Path

from .command import run_cmd

logger = logging.getLogger(__name__)


def extract_deb(deb_file: str, dest_dir: str, *, dry_run: bool = False) -> None:
    """Unpack the data payload of a .deb into dest_dir.

    Requires dpkg-deb (Fedora ships it in the ``dpkg`` package).
    """

    if not dry_run and not Path(deb_file).is_file():
        raise FileNotFoundError(deb_file)

    if not dry_run:
        Path(dest_dir).mkdir(parents=True, exist_ok=True)

    run_cmd(["dpkg-deb", "-x", deb_file, dest_dir], dry_run=dry_run)
    logger.info("Extracted %s into %s", deb_file, dest_dir)
