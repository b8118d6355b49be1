from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Protocol, Sequence

from .context import InstallCtx
from .state_store import is_step_completed, mark_step_completed

logger = logging.getLogger(__name__)


class Step(Protocol):
    """A single idempotent step.

    ``is_done`` re-checks the step's result on the host. A step recorded as
    completed is only skipped while that check still holds; gates and
    notices always return False.
    """

    step_id: str

    def is_done(self, ctx: InstallCtx) -> bool:
        ...

    def run(self, ctx: InstallCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        ...


@dataclass(frozen=True)
class PipelineResult:
    state: Dict[str, Any]
    ran_steps: List[str]
    skipped_steps: List[str]


def run_pipeline(
    *,
    ctx: InstallCtx,
    state: Dict[str, Any],
    steps: Sequence[Step],
    force: bool = False,
    on_step_done: Optional[Callable[[Dict[str, Any]], None]] = None,
) -> PipelineResult:
    """Run steps in order with resume/idempotency semantics.

    The first exception aborts the run; steps after it are not attempted.
    """

    ran: List[str] = []
    skipped: List[str] = []

    for step in steps:
        state.setdefault("execution", {})["current_step"] = step.step_id

        if (not force) and is_step_completed(state, step.step_id):
            if step.is_done(ctx):
                logger.info("Skipping step %s (already completed)", step.step_id)
                skipped.append(step.step_id)
                continue
            logger.warning("Step %s was recorded as completed but its result is gone; running it again", step.step_id)

        logger.info("Running step %s", step.step_id)
        state = step.run(ctx, state)
        mark_step_completed(state, step.step_id)
        ran.append(step.step_id)
        if on_step_done is not None:
            on_step_done(state)

    state.setdefault("execution", {})["current_step"] = None
    return PipelineResult(state=state, ran_steps=ran, skipped_steps=skipped)
