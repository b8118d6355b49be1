from __future__ import annotations

import logging
import os
import shlex
import subprocess
from dataclasses import dataclass
from typing import Mapping, Sequence

from ..errors import CommandError

logger = logging.getLogger(__name__)

# Shell convention for "command not found".
EXIT_NOT_FOUND = 127


@dataclass(frozen=True)
class CmdResult:
    argv: list[str]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


def describe(argv: Sequence[str]) -> str:
    return " ".join(shlex.quote(a) for a in argv)


def is_root() -> bool:
    return os.geteuid() == 0


def as_root(argv: Sequence[str]) -> list[str]:
    """Prefix argv with sudo unless we already run as root."""

    if is_root():
        return list(argv)
    return ["sudo", *argv]


def run_cmd(
    argv: Sequence[str],
    *,
    check: bool = True,
    capture: bool = True,
    env: Mapping[str, str] | None = None,
    cwd: str | None = None,
    input_text: str | None = None,
    dry_run: bool = False,
) -> CmdResult:
    """Run an external command and log it to the installer log.

    Captured output is written to the log at DEBUG level. With
    ``capture=False`` the command shares the terminal, which is required
    for anything that prompts (``su``); its output is then not logged.
    A non-zero exit raises CommandError when ``check`` is set.
    """

    argv_list = list(argv)
    logger.info("CMD %s", describe(argv_list))

    if dry_run:
        return CmdResult(argv=argv_list, returncode=0)

    pipe = subprocess.PIPE if capture else None
    try:
        p = subprocess.run(
            argv_list,
            input=input_text,
            text=True,
            stdout=pipe,
            stderr=pipe,
            cwd=cwd,
            env=dict(os.environ, **(env or {})),
        )
    except FileNotFoundError as e:
        raise CommandError(argv_list, EXIT_NOT_FOUND, str(e)) from e

    result = CmdResult(argv=argv_list, returncode=p.returncode, stdout=p.stdout or "", stderr=p.stderr or "")
    for stream, text in (("STDOUT", result.stdout), ("STDERR", result.stderr)):
        if text:
            logger.debug("%s %s", stream, text.strip())

    if check and not result.ok:
        logger.error("Command failed (%s): %s", result.returncode, describe(argv_list))
        raise CommandError(argv_list, result.returncode, result.stderr)

    return result
