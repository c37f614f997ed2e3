from __future__ import annotations

import logging
from typing import Any, Dict

from ..console import say
from ..lib.fsops import remove_path

logger = logging.getLogger(__name__)


class CleanupStep:
    step_id = "70_cleanup"

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = state.get("config") or {}
        package = state.get("package") or {}
        dry_run = bool(cfg.get("dry_run", False))

        deb_file = package.get("deb_file")
        if deb_file:
            remove_path(str(deb_file), dry_run=dry_run)

        if dry_run:
            state.setdefault("execution", {})["outcome"] = "dry_run"
            say(f"Dry run complete; nothing was installed in {cfg['install_path']}")
            return state

        state.setdefault("execution", {})["outcome"] = "installed"
        say(f"Spotify has been installed/updated successfully in {cfg['install_path']}")
        return state
