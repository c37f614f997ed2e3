from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol, Sequence

from .state_store import mark_step_completed

logger = logging.getLogger(__name__)


class Step(Protocol):
    """A single step of the run."""

    step_id: str

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        ...


@dataclass(frozen=True)
class PipelineResult:
    state: Dict[str, Any]
    ran_steps: List[str]
    halted_by: Optional[str]


def run_pipeline(*, state: Dict[str, Any], steps: Sequence[Step]) -> PipelineResult:
    """Run steps in order until one fails or sets execution.halt."""

    ran: List[str] = []
    halted_by: Optional[str] = None

    for step in steps:
        state.setdefault("execution", {})["current_step"] = step.step_id

        logger.info("Running step %s", step.step_id)
        state = step.run(state)
        mark_step_completed(state, step.step_id)
        ran.append(step.step_id)

        reason = (state.get("execution") or {}).get("halt")
        if reason:
            logger.info("Stopping after %s: %s", step.step_id, reason)
            halted_by = step.step_id
            break

    state.setdefault("execution", {})["current_step"] = None
    return PipelineResult(state=state, ran_steps=ran, halted_by=halted_by)
