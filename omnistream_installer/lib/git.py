from __future__ import annotations

import logging
from pathlib import Path

from .command import run_cmd

logger = logging.getLogger(__name__)


def is_checkout(path: str) -> bool:
    return (Path(path) / ".git").is_dir()


def origin_url(path: str) -> str | None:
    r = run_cmd(["git", "-C", path, "remote", "get-url", "origin"], check=False)
    if not r.ok:
        return None
    return r.stdout.strip() or None


def clone(repo_url: str, dest: str, *, dry_run: bool = False) -> None:
    run_cmd(["git", "clone", repo_url, dest], dry_run=dry_run)
