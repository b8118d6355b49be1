from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict

from ..context import InstallCtx
from ..lib.apt_repo import install_signing_key, sources_line, write_sources_list
from ..lib.command import as_root, run_cmd
from ..lib.pkg import apt_install, apt_update, is_installed, print_architecture
from ..state_store import record_decision

logger = logging.getLogger(__name__)


class InstallDockerStep:
    step_id = "30_install_docker"

    def is_done(self, ctx: InstallCtx) -> bool:
        cfg = ctx.cfg
        if not (Path(cfg.docker_keyring).exists() and Path(cfg.docker_sources_list).exists()):
            return False
        return all(is_installed(p, dry_run=ctx.dry_run) for p in cfg.docker_packages)

    def run(self, ctx: InstallCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = ctx.cfg
        dry_run = ctx.dry_run
        codename = ctx.require_host().codename

        with ctx.reporter.gauge("Docker Installation", "Installing Docker and Docker Compose...") as gauge:
            gauge.update(20, "Preparing Docker installation...")
            apt_update(dry_run=dry_run)

            gauge.update(40, "Installing required certificates...")
            apt_install(cfg.docker_prereqs, dry_run=dry_run)

            gauge.update(60, "Setting up Docker repository...")
            install_signing_key(key_url=cfg.docker_gpg_url, keyring=cfg.docker_keyring, dry_run=dry_run)

            gauge.update(80, "Configuring Docker repository...")
            arch = print_architecture(dry_run=dry_run)
            line = sources_line(
                repo_url=cfg.docker_repo_url,
                arch=arch,
                keyring=cfg.docker_keyring,
                suite=codename,
            )
            write_sources_list(cfg.docker_sources_list, line, dry_run=dry_run)
            apt_update(dry_run=dry_run)

            gauge.update(90, "Installing Docker components...")
            apt_install(cfg.docker_packages, dry_run=dry_run)

            # Takes effect on the user's next login.
            run_cmd(as_root(["usermod", "-aG", cfg.docker_group, cfg.user]), dry_run=dry_run)
            gauge.update(100)

        record_decision(
            state,
            "docker",
            {"arch": arch, "suite": codename, "group": cfg.docker_group, "user": cfg.user},
        )
        logger.info("Docker installed for %s (arch=%s suite=%s)", cfg.user, arch, codename)
        return state
