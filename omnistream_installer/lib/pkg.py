from __future__ import annotations

import logging
import shutil
from typing import Sequence

from .command import as_root, is_root, run_cmd

logger = logging.getLogger(__name__)

# apt-get must never stop to ask a question behind a progress gauge.
_APT_ENV = ["env", "DEBIAN_FRONTEND=noninteractive"]


def _apt(args: Sequence[str], *, dry_run: bool = False) -> None:
    run_cmd(as_root([*_APT_ENV, "apt-get", *args]), dry_run=dry_run)


def apt_update(*, dry_run: bool = False) -> None:
    _apt(["update", "-qq"], dry_run=dry_run)


def apt_install(packages: Sequence[str], *, dry_run: bool = False) -> None:
    if not packages:
        return
    _apt(["install", "-y", *packages], dry_run=dry_run)


def apt_upgrade(*, dry_run: bool = False) -> None:
    _apt(["upgrade", "-y"], dry_run=dry_run)


def apt_autoremove(*, dry_run: bool = False) -> None:
    _apt(["autoremove", "-y"], dry_run=dry_run)


def is_installed(package: str, *, dry_run: bool = False) -> bool:
    """Return True if dpkg reports the package as fully installed.

    Packages left in the config-files state count as absent.
    """
    if dry_run:
        return False
    r = run_cmd(["dpkg-query", "-W", "-f=${Status}", package], check=False)
    return r.ok and r.stdout.strip().endswith("install ok installed")


def print_architecture(*, dry_run: bool = False) -> str:
    if dry_run:
        return "amd64"
    return run_cmd(["dpkg", "--print-architecture"]).stdout.strip()


def has_command(name: str) -> bool:
    return shutil.which(name) is not None


def ensure_dialog(*, dry_run: bool = False) -> bool:
    """Install dialog when missing. Returns True if an install was attempted."""

    if has_command("dialog"):
        return False
    logger.info("dialog not found; installing it")
    apt_update(dry_run=dry_run)
    apt_install(["dialog"], dry_run=dry_run)
    return True


def ensure_sudo(*, dry_run: bool = False) -> bool:
    """Install sudo through su when missing. Returns True if an install was attempted."""

    if has_command("sudo") or is_root():
        return False
    logger.info("sudo not found; installing it as root through su")
    run_cmd(
        ["su", "-", "root", "-c", "apt-get update && apt-get install -y sudo"],
        capture=False,
        dry_run=dry_run,
    )
    return True
