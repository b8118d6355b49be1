from __future__ import annotations

import logging
import subprocess
from contextlib import contextmanager
from typing import Iterator, Optional

from rich.console import Console
from rich.panel import Panel
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn

from .lib.pkg import has_command
from .progress import Gauge, ProgressEvent, ProgressReporter

logger = logging.getLogger(__name__)

DIALOG_WIDTH = "50"


def _box_height(text: str) -> str:
    return "12" if "\n" in text else "10"


class DialogReporter:
    """Draws gauges and message boxes with the ``dialog`` utility."""

    def __init__(self, dialog_bin: str = "dialog") -> None:
        self.dialog_bin = dialog_bin

    @contextmanager
    def gauge(self, title: str, text: str) -> Iterator[Gauge]:
        proc = subprocess.Popen(
            [self.dialog_bin, "--title", title, "--gauge", text, "10", DIALOG_WIDTH, "0"],
            stdin=subprocess.PIPE,
            text=True,
        )

        def sink(ev: ProgressEvent) -> None:
            if proc.stdin is None:
                return
            # An XXX block replaces the gauge text along with the percentage.
            if ev.message:
                payload = f"XXX\n{ev.percent}\n{ev.message}\nXXX\n"
            else:
                payload = f"{ev.percent}\n"
            try:
                proc.stdin.write(payload)
                proc.stdin.flush()
            except BrokenPipeError:
                logger.debug("dialog gauge exited early; dropping progress %s", ev)

        try:
            yield Gauge(title, sink)
        finally:
            if proc.stdin is not None:
                try:
                    proc.stdin.close()
                except BrokenPipeError:
                    pass
            proc.wait()
            # Leave the cursor below the widget.
            print()

    def _msgbox(self, title: str, text: str) -> None:
        subprocess.run(
            [self.dialog_bin, "--title", title, "--msgbox", text, _box_height(text), DIALOG_WIDTH],
            check=False,
        )

    def notice(self, title: str, text: str) -> None:
        logger.info("%s: %s", title, text)
        self._msgbox(title, text)

    def error(self, title: str, text: str) -> None:
        logger.error("%s: %s", title, text)
        self._msgbox(title, text)


class ConsoleReporter:
    """Plain terminal rendering with rich, for hosts without ``dialog``."""

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console()

    @contextmanager
    def gauge(self, title: str, text: str) -> Iterator[Gauge]:
        self.console.print(f"\n[bold cyan]{title}[/bold cyan]")
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TextColumn("{task.percentage:>3.0f}%"),
            console=self.console,
        ) as progress:
            task = progress.add_task(text, total=100)

            def sink(ev: ProgressEvent) -> None:
                if ev.message:
                    progress.update(task, completed=ev.percent, description=ev.message)
                else:
                    progress.update(task, completed=ev.percent)

            yield Gauge(title, sink)

    def notice(self, title: str, text: str) -> None:
        logger.info("%s: %s", title, text)
        self.console.print(Panel(text, title=title, border_style="green"))

    def error(self, title: str, text: str) -> None:
        logger.error("%s: %s", title, text)
        self.console.print(Panel(text, title=f"[bold]{title}[/bold]", border_style="red"))


def select_reporter(ui: str = "dialog") -> ProgressReporter:
    if ui == "dialog" and has_command("dialog"):
        return DialogReporter()
    if ui == "dialog":
        logger.info("dialog is not installed; using console output")
    return ConsoleReporter()
