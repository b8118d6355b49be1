"""Shared fixtures: a fake subprocess.run, a recording reporter and a throwaway home."""

import subprocess
from contextlib import contextmanager
from pathlib import Path

import pytest

from omnistream_installer import main as main_mod
from omnistream_installer.context import InstallCtx
from omnistream_installer.install_config import InstallConfig
from omnistream_installer.lib import command, pkg
from omnistream_installer.lib.env import Paths
from omnistream_installer.lib.hostinfo import HostDescriptor
from omnistream_installer.progress import Gauge

APT = ["env", "DEBIAN_FRONTEND=noninteractive", "apt-get"]


class FakeRun:
    """Stand-in for subprocess.run that records argv and answers by prefix.

    Packages passed to ``apt-get install`` are remembered so later
    ``dpkg-query`` calls see them as installed, as on a real host.
    """

    def __init__(self):
        self.calls = []
        self.kwargs = []
        self.inputs = {}
        self.rules = []
        self.installed = set()
        self.available = {"sudo", "dialog"}

    def on(self, *prefix, returncode=0, stdout="", stderr="", action=None):
        self.rules.append((tuple(prefix), returncode, stdout, stderr, action))

    def __call__(self, argv, **kwargs):
        argv = list(argv)
        self.calls.append(argv)
        self.kwargs.append(kwargs)
        if kwargs.get("input") is not None:
            self.inputs[tuple(argv)] = kwargs["input"]
        for prefix, rc, out, err, action in reversed(self.rules):
            if tuple(argv[: len(prefix)]) == prefix:
                if action is not None:
                    action(argv, kwargs)
                return subprocess.CompletedProcess(argv, rc, out, err)
        return self._default(argv)

    def _default(self, argv):
        apt = self._apt_args(argv)
        if apt is not None and apt[:2] == ["install", "-y"]:
            self.installed.update(apt[2:])
        if argv[:1] == ["dpkg-query"] and argv[-1] in self.installed:
            return subprocess.CompletedProcess(argv, 0, "install ok installed", "")
        return subprocess.CompletedProcess(argv, 0, "", "")

    @staticmethod
    def _apt_args(argv):
        argv = argv[1:] if argv[:1] == ["sudo"] else argv
        return argv[len(APT):] if argv[: len(APT)] == APT else None

    def matching(self, *prefix):
        return [c for c in self.calls if tuple(c[: len(prefix)]) == prefix]

    def kwargs_for(self, *prefix):
        return [k for c, k in zip(self.calls, self.kwargs) if tuple(c[: len(prefix)]) == prefix]

    def apt_calls(self):
        return [c[len(APT):] for c in self.calls if c[: len(APT)] == APT]


class RecordingReporter:
    def __init__(self):
        self.gauges = {}
        self.notices = []
        self.errors = []

    @contextmanager
    def gauge(self, title, text):
        events = self.gauges.setdefault(title, [])
        yield Gauge(title, events.append)

    def notice(self, title, text):
        self.notices.append((title, text))

    def error(self, title, text):
        self.errors.append((title, text))

    def notice_titles(self):
        return [t for t, _ in self.notices]


def _make_clone(argv, kwargs):
    (Path(argv[-1]) / ".git").mkdir(parents=True, exist_ok=True)


@pytest.fixture
def fake_run(monkeypatch):
    fake = FakeRun()
    fake.on("dpkg", "--print-architecture", stdout="amd64\n")
    fake.on("curl", "-fsSL", stdout="-----BEGIN PGP PUBLIC KEY BLOCK-----\n")
    fake.on("git", "clone", action=_make_clone)
    monkeypatch.setattr(command.subprocess, "run", fake)
    monkeypatch.setattr(command.os, "geteuid", lambda: 0)
    monkeypatch.setattr(pkg.shutil, "which", lambda name: f"/usr/bin/{name}" if name in fake.available else None)
    return fake


@pytest.fixture
def reporter():
    return RecordingReporter()


@pytest.fixture
def home(tmp_path):
    h = tmp_path / "home"
    h.mkdir()
    return h


@pytest.fixture
def write_host(tmp_path):
    def _write(codename="trixie", os_id="debian", version="13.1"):
        etc = tmp_path / "etc"
        etc.mkdir(exist_ok=True)
        (etc / "os-release").write_text(
            f'PRETTY_NAME="Debian GNU/Linux"\nID={os_id}\nVERSION_CODENAME={codename}\n',
            encoding="utf-8",
        )
        (etc / "debian_version").write_text(version + "\n", encoding="utf-8")
        return etc

    return _write


@pytest.fixture
def cfg(home, tmp_path, write_host):
    etc = write_host()
    return InstallConfig(
        raw={
            "user": "tester",
            "ui": "console",
            "host": {
                "os_release": str(etc / "os-release"),
                "debian_version": str(etc / "debian_version"),
            },
        },
        paths=Paths(home=str(home)),
    )


@pytest.fixture
def ctx(cfg, reporter):
    return InstallCtx(
        cfg=cfg,
        reporter=reporter,
        log_path=cfg.log_path,
        host=HostDescriptor(os_id="debian", codename="trixie", version="13.1"),
    )


@pytest.fixture
def no_logging_setup(monkeypatch):
    monkeypatch.setattr(main_mod, "configure_logging", lambda log_path, also_console=False: log_path)
