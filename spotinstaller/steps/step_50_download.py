from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict

from ..console import say
from ..lib.fsops import remove_path
from ..lib.net import download_file
from ..lib.versions import package_filename

logger = logging.getLogger(__name__)


class DownloadStep:
    step_id = "50_download"

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = state.get("config") or {}
        latest = state.get("latest") or {}
        dry_run = bool(cfg.get("dry_run", False))

        full = latest.get("full")
        display = latest.get("display")
        if not full:
            raise RuntimeError("latest.full missing; run the version check first")

        name = package_filename(full, str(cfg.get("package_name", "spotify-client")), str(cfg.get("arch", "amd64")))
        url = str(cfg["repository_url"]).rstrip("/") + "/" + name
        deb_file = Path(str(cfg["download_dir"])) / name
        min_bytes = int(cfg.get("min_download_bytes", 0))

        state["package"] = {"url": url, "deb_file": str(deb_file), "reused": False}

        if deb_file.is_file():
            say(f"Found existing download for version {display}.")
            size = deb_file.stat().st_size
            logger.info("Existing %s is %d bytes (minimum %d)", deb_file, size, min_bytes)
            if size > min_bytes:
                say("Using existing download.")
                state["package"]["reused"] = True
                return state
            say("Existing file appears incomplete. Redownloading...")
            remove_path(str(deb_file), dry_run=dry_run)

        say(f"Downloading Spotify version {display}...")
        try:
            download_file(url, str(deb_file), timeout=float(cfg.get("http_timeout", 60)), dry_run=dry_run)
        except RuntimeError as e:
            raise RuntimeError(f"Failed to download Spotify. Please check your internet connection. ({e})") from e

        if not dry_run and not deb_file.is_file():
            raise RuntimeError(f"Download completed but file not found at {deb_file}")

        return state
