from __future__ import annotations

import logging
from typing import Any, Dict, List

from ..context import InstallCtx
from ..lib.pkg import apt_autoremove, apt_install, apt_update, apt_upgrade, is_installed
from ..state_store import record_decision

logger = logging.getLogger(__name__)


def package_progress(index: int, total: int) -> int:
    """Gauge position for the package at index: 10% up to just under 90%."""

    if total <= 0:
        return 10
    return 10 + (index * 80 // total)


class ProvisionPackagesStep:
    step_id = "20_provision_packages"

    def is_done(self, ctx: InstallCtx) -> bool:
        return all(is_installed(p, dry_run=ctx.dry_run) for p in ctx.cfg.packages)

    def run(self, ctx: InstallCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        packages = ctx.cfg.packages
        dry_run = ctx.dry_run

        installed: List[str] = []
        present: List[str] = []

        with ctx.reporter.gauge("System Preparation", "Preparing system components...") as gauge:
            gauge.update(10, "Updating package lists...")
            apt_update(dry_run=dry_run)

            total = len(packages)
            for i, pkg in enumerate(packages):
                gauge.update(package_progress(i, total), f"Installing {pkg}...")
                if is_installed(pkg, dry_run=dry_run):
                    logger.info("Package %s already installed", pkg)
                    present.append(pkg)
                    continue
                apt_install([pkg], dry_run=dry_run)
                installed.append(pkg)

            gauge.update(90, "Upgrading system packages...")
            apt_upgrade(dry_run=dry_run)
            apt_autoremove(dry_run=dry_run)
            gauge.update(100)

        record_decision(state, "packages", {"installed": installed, "already_present": present})
        logger.info("Packages provisioned (installed=%d already_present=%d)", len(installed), len(present))
        return state
