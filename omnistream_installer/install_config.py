from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .lib.env import Paths, current_user, default_paths
from .lib.profile import PROFILE_MARKER

DEFAULT_REPO_URL = "https://github.com/kelinger/OmniStream4.git"

DEFAULT_PACKAGES = (
    "acl",
    "apache2-utils",
    "apt-transport-https",
    "at",
    "bc",
    "ca-certificates",
    "curl",
    "dialog",
    "dnsutils",
    "git-core",
    "htop",
    "jq",
    "keychain",
    "net-tools",
    "parallel",
    "pigz",
    "pipx",
    "pv",
    "rsync",
    "speedometer",
    "speedtest-cli",
    "sqlite3",
    "tmux",
    "unzip",
    "vnstat",
    "wget",
)

DOCKER_PREREQS = ("ca-certificates", "curl", "gnupg")
DOCKER_PACKAGES = (
    "docker-ce",
    "docker-ce-cli",
    "containerd.io",
    "docker-buildx-plugin",
    "docker-compose-plugin",
)


@dataclass(frozen=True)
class InstallConfig:
    raw: Dict[str, Any] = field(default_factory=dict)
    paths: Paths = field(default_factory=default_paths)

    def _section(self, name: str) -> Dict[str, Any]:
        return self.raw.get(name) or {}

    @property
    def home(self) -> str:
        return self.paths.home

    @property
    def user(self) -> str:
        return str(self.raw.get("user") or current_user())

    @property
    def repo_url(self) -> str:
        return str(self.raw.get("repo_url") or DEFAULT_REPO_URL)

    @property
    def install_dir(self) -> str:
        return str(self.raw.get("install_dir") or self.paths.install_dir)

    @property
    def directories(self) -> List[str]:
        dirs = self.raw.get("directories")
        if dirs is None:
            return [str(Path(self.install_dir) / d) for d in ("configs", "enabled", "logs")]
        return [str(d) for d in dirs]

    @property
    def profile_path(self) -> str:
        return str(self.raw.get("profile_path") or self.paths.profile)

    @property
    def profile_marker(self) -> str:
        return str(self.raw.get("profile_marker") or PROFILE_MARKER)

    @property
    def packages(self) -> List[str]:
        return [str(p) for p in (self.raw.get("packages") or DEFAULT_PACKAGES)]

    @property
    def docker_prereqs(self) -> List[str]:
        return [str(p) for p in (self._section("docker").get("prereqs") or DOCKER_PREREQS)]

    @property
    def docker_packages(self) -> List[str]:
        return [str(p) for p in (self._section("docker").get("packages") or DOCKER_PACKAGES)]

    @property
    def docker_repo_url(self) -> str:
        return str(self._section("docker").get("repo_url") or "https://download.docker.com/linux/debian")

    @property
    def docker_gpg_url(self) -> str:
        return str(self._section("docker").get("gpg_url") or f"{self.docker_repo_url}/gpg")

    @property
    def docker_keyring(self) -> str:
        return str(self._section("docker").get("keyring") or "/etc/apt/keyrings/docker.gpg")

    @property
    def docker_sources_list(self) -> str:
        return str(self._section("docker").get("sources_list") or "/etc/apt/sources.list.d/docker.list")

    @property
    def docker_group(self) -> str:
        return str(self._section("docker").get("group") or "docker")

    @property
    def required_os_id(self) -> str:
        return str(self._section("host").get("required_id") or "debian")

    @property
    def required_codename(self) -> str:
        return str(self._section("host").get("required_codename") or "trixie")

    @property
    def os_release_path(self) -> str:
        return str(self._section("host").get("os_release") or "/etc/os-release")

    @property
    def debian_version_path(self) -> str:
        return str(self._section("host").get("debian_version") or "/etc/debian_version")

    @property
    def log_path(self) -> str:
        return str(self.raw.get("log_path") or self.paths.log_default)

    @property
    def state_path(self) -> str:
        return str(self.raw.get("state_path") or self.paths.state_default)

    @property
    def ui(self) -> str:
        return str(self.raw.get("ui") or "dialog")

    @property
    def dry_run(self) -> bool:
        return bool(self.raw.get("dry_run", False))

    def with_overrides(self, **overrides: Any) -> "InstallConfig":
        raw = dict(self.raw)
        raw.update({k: v for k, v in overrides.items() if v is not None})
        return InstallConfig(raw=raw, paths=self.paths)


def load_install_config(path: Optional[str] = None) -> InstallConfig:
    if path is None:
        return InstallConfig()

    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(path)

    if p.suffix.lower() not in {".yaml", ".yml"}:
        raise ValueError("install config must be YAML")

    try:
        raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"install config {path} is not valid YAML: {e}") from e
    if not isinstance(raw, dict):
        raise ValueError("install config must contain a mapping/object")

    return InstallConfig(raw=raw)
