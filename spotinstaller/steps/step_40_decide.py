from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional

from ..console import say
from ..lib.prompt import confirm
from ..lib.versions import compare
from ..state_store import halt, record_decision

logger = logging.getLogger(__name__)


class DecideStep:
    """Pick install/update/nothing and, on a terminal, ask before acting."""

    step_id = "40_decide"

    def __init__(self, ask: Optional[Callable[[str], bool]] = None) -> None:
        self._ask = ask or confirm

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = state.get("config") or {}
        spotify = state.get("spotify") or {}
        latest = state.get("latest") or {}

        interactive = bool(cfg.get("interactive", False))
        assume_yes = bool(cfg.get("assume_yes", False))

        if spotify.get("installed"):
            current = str(spotify.get("version") or "")
            latest_display = str(latest.get("display") or "")

            order = compare(current, latest_display)
            if order == 0:
                say("You have the latest version of Spotify.")
                return self._stop(state, "up_to_date")
            if order > 0:
                say(f"Installed version {current} is newer than the repository's {latest_display}.")
                return self._stop(state, "installed_newer")

            say("A newer version of Spotify is available.")
            action = "update"
            question = "Do you want to update?"
            auto_msg = "Running in non-interactive mode. Installing update automatically."
            cancel_msg = "Update canceled."
        else:
            action = "install"
            question = "Do you want to install Spotify?"
            auto_msg = "Running in non-interactive mode. Installing Spotify automatically."
            cancel_msg = "Installation canceled."

        if not interactive:
            say(auto_msg)
        elif not assume_yes and not self._ask(question):
            say(cancel_msg)
            return self._stop(state, "declined")

        state["plan"] = {"action": action, "version": latest.get("full")}
        record_decision(state, "action", action)
        return state

    def _stop(self, state: Dict[str, Any], reason: str) -> Dict[str, Any]:
        state["plan"] = {"action": None}
        record_decision(state, "action", None)
        state.setdefault("execution", {})["outcome"] = reason
        halt(state, reason)
        return state
