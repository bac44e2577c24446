# ABOUTME: Pluggable progress reporting for batch image downloads
# ABOUTME: No-op default plus a Rich progress bar reporter for the CLI

import time
from typing import Protocol

from rich.console import Console
from rich.markup import escape
from rich.progress import BarColumn, MofNCompleteColumn, Progress, SpinnerColumn, TextColumn, TimeElapsedColumn


class ProgressReporter(Protocol):
    """Observer notified before, during and after a download batch."""

    def start(self, total: int) -> None: ...

    def update(self, completed: int, url: str, success: bool, error: BaseException | None) -> None: ...

    def finish(self) -> None: ...


class NoOpReporter:
    """Reporter that ignores every event."""

    def start(self, total: int) -> None:
        pass

    def update(self, completed: int, url: str, success: bool, error: BaseException | None) -> None:
        pass

    def finish(self) -> None:
        pass


class ConsoleReporter:
    """Rich progress bar; verbose mode also prints one line per finished URL."""

    def __init__(self, console: Console, verbose: bool = False):
        self.console = console
        self.verbose = verbose
        self.total = 0
        self._started_at = 0.0
        self._progress: Progress | None = None
        self._task_id = None

    def start(self, total: int) -> None:
        self.total = total
        self._started_at = time.perf_counter()

        if self.verbose:
            self.console.print(f"Starting download of {total} images...")

        self._progress = Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            MofNCompleteColumn(),
            TimeElapsedColumn(),
            console=self.console,
            transient=True,
        )
        self._task_id = self._progress.add_task("📥 Downloading images", total=total)
        self._progress.start()

    def update(self, completed: int, url: str, success: bool, error: BaseException | None) -> None:
        if self._progress is not None:
            self._progress.update(self._task_id, completed=completed)

        if not self.verbose:
            return
        if success:
            self.console.print(f"[green]✓[/green] [{completed}/{self.total}] Downloaded: {escape(url)}")
        else:
            self.console.print(f"[red]✗[/red] [{completed}/{self.total}] Failed: {escape(url)} - {escape(str(error))}")

    def finish(self) -> None:
        if self._progress is not None:
            self._progress.stop()
            self._progress = None

        elapsed = time.perf_counter() - self._started_at
        if self.verbose or self.total > 1:
            self.console.print(f"Download completed in {elapsed:.3f}s")
