from __future__ import annotations

import logging
from typing import Any, Dict

from ..console import say
from ..lib.net import fetch_text
from ..lib.versions import extract_package_versions, pick_latest

logger = logging.getLogger(__name__)


class CheckLatestStep:
    step_id = "30_check_latest"

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = state.get("config") or {}
        url = str(cfg["repository_url"])

        if (state.get("spotify") or {}).get("installed"):
            say("Checking for updates...")

        listing = fetch_text(url, timeout=float(cfg.get("http_timeout", 60)))
        versions = extract_package_versions(
            listing,
            package_name=str(cfg.get("package_name", "spotify-client")),
            arch=str(cfg.get("arch", "amd64")),
        )
        logger.info("Found %d package versions at %s", len(versions), url)

        latest = pick_latest(versions)
        if latest is None:
            raise RuntimeError("Failed to fetch latest Spotify version.")

        state["latest"] = {"full": latest.full, "display": latest.display}
        if (state.get("spotify") or {}).get("installed"):
            say(f"Latest version: {latest.display}")
        return state
