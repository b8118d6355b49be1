from __future__ import annotations

import getpass
import os
from dataclasses import dataclass
from pathlib import Path


def home_dir() -> str:
    return os.environ.get("HOME") or str(Path.home())


def current_user() -> str:
    return os.environ.get("USER") or getpass.getuser()


@dataclass(frozen=True)
class Paths:
    home: str

    @property
    def log_default(self) -> str:
        return str(Path(self.home) / "omnistream_install.log")

    @property
    def state_default(self) -> str:
        return str(Path(self.home) / ".omnistream_install_state.json")

    @property
    def install_dir(self) -> str:
        return str(Path(self.home) / "omnistream")

    @property
    def profile(self) -> str:
        return str(Path(self.home) / ".bashrc")


def default_paths() -> Paths:
    return Paths(home=home_dir())
