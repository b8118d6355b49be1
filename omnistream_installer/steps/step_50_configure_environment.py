from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List

from ..context import InstallCtx
from ..lib.profile import append_once, has_marker, profile_block
from ..state_store import record_decision

logger = logging.getLogger(__name__)


class ConfigureEnvironmentStep:
    step_id = "50_configure_environment"

    def is_done(self, ctx: InstallCtx) -> bool:
        cfg = ctx.cfg
        if not all(Path(d).is_dir() for d in cfg.directories):
            return False
        return has_marker(cfg.profile_path, cfg.profile_marker)

    def run(self, ctx: InstallCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = ctx.cfg
        dry_run = ctx.dry_run

        created: List[str] = []
        for d in cfg.directories:
            p = Path(d)
            if p.is_dir():
                continue
            if dry_run:
                logger.info("Would create %s", d)
            else:
                p.mkdir(parents=True, exist_ok=True)
            created.append(d)
            ctx.reporter.notice("Directory Creation", f"Created directory: {d}")

        block = profile_block(cfg.install_dir, cfg.profile_marker)
        patched = append_once(cfg.profile_path, block, marker=cfg.profile_marker, dry_run=dry_run)
        if patched:
            ctx.reporter.notice(
                "User Configuration",
                f"Updated {Path(cfg.profile_path).name} to include OmniStream configuration",
            )

        record_decision(state, "environment", {"created_dirs": created, "profile_patched": patched})
        return state
