from __future__ import annotations

import logging
from typing import Any, Dict

from ..console import say
from ..lib.command import run_cmd, which
from ..lib.versions import parse_installed_version

logger = logging.getLogger(__name__)


class DetectInstalledStep:
    step_id = "20_detect_installed"

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        spotify = state.setdefault("spotify", {})

        exe_path = which("spotify")
        if not exe_path:
            spotify.update({"installed": False, "path": None, "version": None})
            say("Spotify is not installed.")
            return state

        say("Spotify is installed.")
        # spotify may exit non-zero after printing its version; judge by output.
        r = run_cmd(["spotify", "--version"], check=False)
        version = parse_installed_version(r.stdout) or parse_installed_version(r.stderr)
        if not version:
            raise RuntimeError("Failed to determine Spotify version.")

        spotify.update({"installed": True, "path": exe_path, "version": version})
        say(f"Current version: {version}")
        return state
