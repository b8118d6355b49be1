from __future__ import annotations

from typing import Any, Dict

from ..context import InstallCtx


class WelcomeStep:
    step_id = "15_welcome"

    def is_done(self, ctx: InstallCtx) -> bool:
        return False

    def run(self, ctx: InstallCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        ctx.reporter.notice(
            "OmniStream Installation",
            "Welcome to the OmniStream Installation Script for Debian 13",
        )
        return state
