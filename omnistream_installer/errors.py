from __future__ import annotations

from typing import Sequence


class InstallError(RuntimeError):
    """Base class for failures that abort the installation."""


class HostMismatchError(InstallError):
    """The host is not the exact OS this installer supports."""

    def __init__(self, title: str, message: str) -> None:
        super().__init__(message)
        self.title = title
        self.message = message


class CommandError(InstallError):
    def __init__(self, argv: Sequence[str], returncode: int, stderr: str = "") -> None:
        self.argv = list(argv)
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(f"Command failed ({returncode}): {' '.join(self.argv)}")


class VerificationError(InstallError):
    """An external tool exited cleanly but did not leave the expected result."""

    def __init__(self, title: str, message: str) -> None:
        super().__init__(message)
        self.title = title
        self.message = message
