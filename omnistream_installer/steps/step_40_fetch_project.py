from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict

from ..context import InstallCtx
from ..errors import VerificationError
from ..lib.git import clone, is_checkout, origin_url
from ..state_store import record_decision

logger = logging.getLogger(__name__)


class FetchProjectStep:
    """Clone the OmniStream repository into the install directory.

    Re-runs reuse an existing checkout of the same origin. Anything else
    already sitting in the directory is refused rather than overwritten.
    """

    step_id = "40_fetch_project"

    def is_done(self, ctx: InstallCtx) -> bool:
        return is_checkout(ctx.cfg.install_dir)

    def _existing_checkout(self, dest: str, repo_url: str) -> bool:
        p = Path(dest)
        if is_checkout(dest):
            origin = origin_url(dest)
            if origin != repo_url:
                raise VerificationError(
                    "Clone Error",
                    f"{dest} already holds a checkout of {origin or 'an unknown origin'}, "
                    f"not {repo_url}. Move it aside and re-run the installer.",
                )
            return True
        if p.is_dir() and any(p.iterdir()):
            raise VerificationError(
                "Clone Error",
                f"{dest} exists and is not empty. Move it aside and re-run the installer.",
            )
        return False

    def run(self, ctx: InstallCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = ctx.cfg
        dest = cfg.install_dir
        dry_run = ctx.dry_run

        if dry_run:
            logger.info("Would create %s", dest)
        else:
            Path(dest).mkdir(parents=True, exist_ok=True)

        reused = self._existing_checkout(dest, cfg.repo_url)

        with ctx.reporter.gauge("OmniStream Project", "Downloading OmniStream project...") as gauge:
            gauge.update(30, "Preparing to clone OmniStream repository...")
            if reused:
                logger.info("Reusing existing checkout at %s", dest)
            else:
                gauge.update(60, "Cloning project from repository...")
                clone(cfg.repo_url, dest, dry_run=dry_run)
            gauge.update(90, "Setting up project directory...")
            gauge.update(100)

        if not dry_run and not is_checkout(dest):
            raise VerificationError(
                "Clone Error",
                "Failed to clone OmniStream project. Please check the repository URL.",
            )

        record_decision(state, "project", {"path": dest, "repo_url": cfg.repo_url, "reused": reused})
        ctx.reporter.notice("Project Clone", f"OmniStream project successfully cloned to {dest}")
        return state
