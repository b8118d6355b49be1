from __future__ import annotations

import logging
from pathlib import Path

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"
FALLBACK_LOG_NAME = "omnistream_install.log"


class InstallLogHandler(logging.FileHandler):
    """Append-only handler for the installer log file."""

    def __init__(self, path: str) -> None:
        super().__init__(path, mode="a", encoding="utf-8")


class InstallConsoleHandler(logging.StreamHandler):
    pass


def _open_log(log_path: str) -> InstallLogHandler:
    try:
        Path(log_path).parent.mkdir(parents=True, exist_ok=True)
        return InstallLogHandler(log_path)
    except OSError:
        return InstallLogHandler(str(Path.cwd() / FALLBACK_LOG_NAME))


def configure_logging(log_path: str, level: int = logging.DEBUG, also_console: bool = False) -> str:
    """Route the root logger to the installer log and return the file in use.

    The file is appended to and never truncated. When log_path cannot be
    opened the log lands in the working directory instead. Calling this
    again replaces the installer's own handlers rather than stacking them.
    The console handler (WARNING and up) is only for console mode: with
    dialog on screen, stray output would corrupt the widgets.
    """

    root = logging.getLogger()
    root.setLevel(level)
    for h in list(root.handlers):
        if isinstance(h, (InstallLogHandler, InstallConsoleHandler)):
            root.removeHandler(h)
            h.close()

    fmt = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    file_handler = _open_log(log_path)
    file_handler.setFormatter(fmt)
    root.addHandler(file_handler)

    if also_console:
        console = InstallConsoleHandler()
        console.setLevel(logging.WARNING)
        console.setFormatter(fmt)
        root.addHandler(console)

    actual = file_handler.baseFilename
    logging.getLogger(__name__).info("Logging initialized (requested=%s, actual=%s)", log_path, actual)
    return actual
