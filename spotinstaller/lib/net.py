from __future__ import annotations

import logging
from pathlib import Path

import requests

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 60
CHUNK_SIZE = 1024 * 256


def fetch_text(url: str, *, timeout: float = DEFAULT_TIMEOUT) -> str:
    """GET a page and return its body as text."""

    logger.info("GET %s", url)
    try:
        r = requests.get(url, timeout=timeout)
        r.raise_for_status()
    except requests.RequestException as e:
        raise RuntimeError(f"Failed to fetch {url}: {e}") from e
    return r.text


def download_file(url: str, dest: str, *, timeout: float = DEFAULT_TIMEOUT, dry_run: bool = False) -> int:
    """Stream url into dest, following redirects. Returns bytes written.

    A failed transfer leaves whatever was written in place; callers decide
    whether a file on disk is complete.
    """

    if dry_run:
        logger.info("Would download %s -> %s", url, dest)
        return 0

    out = Path(dest)
    out.parent.mkdir(parents=True, exist_ok=True)

    logger.info("GET %s -> %s", url, dest)
    written = 0
    try:
        with requests.get(url, stream=True, timeout=timeout, allow_redirects=True) as r:
            r.raise_for_status()
            with out.open("wb") as f:
                for chunk in r.iter_content(chunk_size=CHUNK_SIZE):
                    if chunk:
                        f.write(chunk)
                        written += len(chunk)
    except requests.RequestException as e:
        raise RuntimeError(f"Failed to download {url}: {e}") from e

    logger.info("Downloaded %d bytes to %s", written, dest)
    return written
