from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .install_config import InstallConfig
from .lib.hostinfo import HostDescriptor
from .progress import ProgressReporter


@dataclass(frozen=True)
class InstallCtx:
    cfg: InstallConfig
    reporter: ProgressReporter
    log_path: str
    host: Optional[HostDescriptor] = None

    @property
    def dry_run(self) -> bool:
        return self.cfg.dry_run

    def require_host(self) -> HostDescriptor:
        if self.host is None:
            raise RuntimeError("host descriptor missing; preflight has not run")
        return self.host
