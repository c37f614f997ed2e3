from __future__ import annotations

import logging
from typing import Any, Dict

from ..lib.distro import detect_distro, normalize_arch
from ..state_store import record_decision

logger = logging.getLogger(__name__)


class CheckDistroStep:
    step_id = "10_check_distro"

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        distro = detect_distro()
        record_decision(state, "distro", distro)
        record_decision(state, "host_arch", normalize_arch())

        if distro == "unsupported":
            raise RuntimeError("Your distribution is not supported yet.")

        logger.info("Distribution: %s", distro)
        return state
