"""Rich-based download progress display.

ConsoleEventHandler is the EventHandler a terminal front end registers on
the package manager. Each download operation gets a RichDownloadProgress,
which renders one progress bar per archive:

    avr-gcc-7.3.0.tar.bz2      ━━━━━━━━━━━╸━━━━━━━━   62%  24.1/38.9 MB  2.1 MB/s
    avrdude-6.3.0.tar.bz2      ━━━━━━━━━━━━━━━━━━━━  100%   1.2/1.2 MB  done

Thread-safe: download worker threads may report progress concurrently.
"""

import threading
from typing import Optional

from rich.console import Console
from rich.progress import (
    BarColumn,
    DownloadColumn,
    Progress,
    TaskID,
    TextColumn,
    TransferSpeedColumn,
)


class RichDownloadProgress:
    """DownloadProgressHandler rendering a rich progress bar per file.

    The display starts with the first download task and stops in
    on_processing_done().

    Args:
        console: Rich Console instance for rendering. If None, creates a new one.
    """

    def __init__(self, console: Optional[Console] = None) -> None:
        self._console = console if console is not None else Console()
        self._progress = Progress(
            TextColumn("{task.description}", style="bold"),
            BarColumn(),
            TextColumn("{task.percentage:>3.0f}%"),
            DownloadColumn(),
            TransferSpeedColumn(),
            TextColumn("{task.fields[status]}"),
            console=self._console,
        )
        self._tasks: dict[str, TaskID] = {}
        self._totals: dict[str, int] = {}
        self._downloaded: dict[str, int] = {}
        self._errors: dict[str, Exception] = {}
        self._lock = threading.Lock()
        self._started = False

    @property
    def errors(self) -> dict[str, Exception]:
        """Files whose download failed, with the error that stopped them."""
        with self._lock:
            return dict(self._errors)

    def on_new_download_task(self, file_name: str, total_size: int) -> None:
        with self._lock:
            if not self._started:
                self._progress.start()
                self._started = True
            if file_name in self._tasks:
                return
            self._totals[file_name] = total_size
            self._tasks[file_name] = self._progress.add_task(file_name, total=total_size or None, status="")

    def on_progress_changed(self, file_name: str, downloaded: int) -> None:
        with self._lock:
            task_id = self._tasks.get(file_name)
            if task_id is None:
                return
            self._downloaded[file_name] = downloaded
            self._progress.update(task_id, completed=downloaded)

    def on_download_finished(self, file_name: str, error: Optional[Exception]) -> None:
        with self._lock:
            task_id = self._tasks.get(file_name)
            if task_id is None:
                return
            if error is not None:
                self._errors[file_name] = error
                self._progress.update(task_id, status=f"[red]failed: {error}[/red]")
            else:
                completed = self._totals.get(file_name) or self._downloaded.get(file_name, 0)
                self._progress.update(task_id, completed=completed, status="[green]done[/green]")

    def on_processing_done(self) -> None:
        with self._lock:
            if self._started:
                self._progress.stop()
                self._started = False


class ConsoleEventHandler:
    """EventHandler that reports downloads on a rich Console.

    Args:
        console: Console shared by every progress display handed out.
    """

    def __init__(self, console: Optional[Console] = None) -> None:
        self._console = console if console is not None else Console()

    def on_downloading_something(self) -> RichDownloadProgress:
        return RichDownloadProgress(console=self._console)
