from __future__ import annotations

import logging
import shlex
from dataclasses import dataclass
from pathlib import Path
from typing import Dict

from ..errors import HostMismatchError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HostDescriptor:
    os_id: str
    codename: str
    version: str

    def to_dict(self) -> Dict[str, str]:
        return {"os_id": self.os_id, "codename": self.codename, "version": self.version}


def parse_os_release(text: str) -> Dict[str, str]:
    """Parse os-release KEY=value lines, honoring shell quoting."""

    out: Dict[str, str] = {}
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, _, raw = line.partition("=")
        try:
            parts = shlex.split(raw)
        except ValueError:
            parts = [raw.strip("\"'")]
        out[key.strip()] = parts[0] if parts else ""
    return out


def detect_host(*, os_release: str = "/etc/os-release", debian_version: str = "/etc/debian_version") -> HostDescriptor:
    dv = Path(debian_version)
    if not dv.exists():
        raise HostMismatchError(
            "Unsupported Operating System",
            "Error: This script requires PURE Debian Linux. Your system is not Debian.",
        )

    osr = Path(os_release)
    fields = parse_os_release(osr.read_text(encoding="utf-8")) if osr.exists() else {}

    host = HostDescriptor(
        os_id=fields.get("ID", ""),
        codename=fields.get("VERSION_CODENAME", ""),
        version=dv.read_text(encoding="utf-8").strip(),
    )
    logger.info("Detected host id=%s codename=%s version=%s", host.os_id, host.codename, host.version)
    return host


def require_host(host: HostDescriptor, *, os_id: str, codename: str) -> None:
    if host.os_id != os_id:
        raise HostMismatchError(
            "Invalid Distribution",
            f"Error: This script is ONLY for Debian.\n"
            f"Detected: {host.os_id or 'unknown'}\n"
            f"This is not a pure Debian distribution.",
        )

    if host.codename != codename:
        raise HostMismatchError(
            "Unsupported Debian Version",
            f"Error: OmniStream REQUIRES Debian 13 ({codename.capitalize()}).\n"
            f"Current version: {host.codename or 'unknown'} ({host.version})\n"
            f"You must use Debian 13 {codename.capitalize()} EXACTLY.",
        )
