from __future__ import annotations

import logging
from typing import Any, Dict

from ..context import InstallCtx
from ..lib.hostinfo import detect_host, require_host
from ..lib.pkg import ensure_dialog, ensure_sudo
from ..state_store import record_decision

logger = logging.getLogger(__name__)


class PreflightStep:
    """Gate the run on the exact host OS, then make sure dialog and sudo exist.

    The host check comes first so a wrong host exits before apt is touched.
    """

    step_id = "10_preflight"

    def is_done(self, ctx: InstallCtx) -> bool:
        return False

    def run(self, ctx: InstallCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = ctx.cfg

        host = detect_host(os_release=cfg.os_release_path, debian_version=cfg.debian_version_path)
        state["host"] = host.to_dict()
        require_host(host, os_id=cfg.required_os_id, codename=cfg.required_codename)

        installed_sudo = ensure_sudo(dry_run=ctx.dry_run)
        installed_dialog = ensure_dialog(dry_run=ctx.dry_run)
        record_decision(
            state,
            "preflight",
            {"installed_sudo": installed_sudo, "installed_dialog": installed_dialog},
        )
        return state
