from __future__ import annotations

import logging
from pathlib import Path

from .command import as_root, run_cmd

logger = logging.getLogger(__name__)


def install_signing_key(*, key_url: str, keyring: str, dry_run: bool = False) -> None:
    """Fetch an armored repository key and store it dearmored under keyring.

    Equivalent to:
      install -m 0755 -d /etc/apt/keyrings
      curl -fsSL <url> | gpg --dearmor -o <keyring>
      chmod a+r <keyring>
    """

    keyring_dir = str(Path(keyring).parent)
    run_cmd(as_root(["install", "-m", "0755", "-d", keyring_dir]), dry_run=dry_run)

    armored = run_cmd(["curl", "-fsSL", key_url], dry_run=dry_run).stdout
    run_cmd(
        as_root(["gpg", "--batch", "--yes", "--dearmor", "-o", keyring]),
        input_text=armored,
        dry_run=dry_run,
    )
    run_cmd(as_root(["chmod", "a+r", keyring]), dry_run=dry_run)
    logger.info("Installed signing key %s -> %s", key_url, keyring)


def sources_line(*, repo_url: str, arch: str, keyring: str, suite: str, component: str = "stable") -> str:
    return f"deb [arch={arch} signed-by={keyring}] {repo_url} {suite} {component}\n"


def write_sources_list(path: str, line: str, *, dry_run: bool = False) -> None:
    """Write a one-line sources file through tee so it works under sudo."""

    run_cmd(as_root(["tee", path]), input_text=line, dry_run=dry_run)
    logger.info("Configured apt source %s: %s", path, line.strip())
