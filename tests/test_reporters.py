import io

from rich.console import Console

from omnistream_installer import reporters
from omnistream_installer.reporters import ConsoleReporter, DialogReporter, select_reporter


class FakePipe:
    def __init__(self):
        self.written = []
        self.closed = False

    def write(self, data):
        self.written.append(data)

    def flush(self):
        pass

    def close(self):
        self.closed = True


class FakePopen:
    instances = []

    def __init__(self, argv, stdin=None, text=None):
        self.argv = argv
        self.stdin = FakePipe()
        self.waited = False
        FakePopen.instances.append(self)

    def wait(self):
        self.waited = True
        return 0


def test_dialog_gauge_protocol(monkeypatch):
    FakePopen.instances = []
    monkeypatch.setattr(reporters.subprocess, "Popen", FakePopen)

    with DialogReporter().gauge("Docker Installation", "Installing...") as g:
        g.update(20, "Preparing Docker installation...")
        g.update(100)

    proc = FakePopen.instances[0]
    assert proc.argv == ["dialog", "--title", "Docker Installation", "--gauge", "Installing...", "10", "50", "0"]
    assert proc.stdin.written == ["XXX\n20\nPreparing Docker installation...\nXXX\n", "100\n"]
    assert proc.stdin.closed and proc.waited


def test_dialog_msgbox_height_grows_with_lines(monkeypatch):
    calls = []
    monkeypatch.setattr(reporters.subprocess, "run", lambda argv, check=False: calls.append(argv))

    r = DialogReporter()
    r.notice("One", "single line")
    r.error("Two", "first\nsecond")

    assert calls[0] == ["dialog", "--title", "One", "--msgbox", "single line", "10", "50"]
    assert calls[1][-2:] == ["12", "50"]


def test_console_reporter_renders_notices_and_errors():
    out = io.StringIO()
    r = ConsoleReporter(Console(file=out, width=80))

    with r.gauge("System Preparation", "Preparing system components...") as g:
        g.update(10, "Updating package lists...")
        g.update(100)
    r.notice("Project Clone", "cloned")
    r.error("Installation Error", "Exit code: 100")

    text = out.getvalue()
    assert "System Preparation" in text
    assert "cloned" in text
    assert "Exit code: 100" in text


def test_select_reporter_falls_back_without_dialog(monkeypatch):
    monkeypatch.setattr(reporters, "has_command", lambda name: False)
    assert isinstance(select_reporter("dialog"), ConsoleReporter)

    monkeypatch.setattr(reporters, "has_command", lambda name: True)
    assert isinstance(select_reporter("dialog"), DialogReporter)
    assert isinstance(select_reporter("console"), ConsoleReporter)
