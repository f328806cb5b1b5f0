"""Event handler protocol for the package manager.

An external download/install layer asks the package manager for a
download-progress handle before fetching archives. The CLI (or any other
front end) provides that handle by registering an EventHandler.
"""

from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class DownloadProgressHandler(Protocol):
    """Protocol for receiving progress updates from parallel downloads.

    A single handle tracks every file of one download operation; updates for
    different files may arrive interleaved.
    """

    def on_new_download_task(self, file_name: str, total_size: int) -> None:
        """Called when a file starts downloading.

        Args:
            file_name: Archive file name (e.g. "avr-gcc-7.3.0-x86_64-pc-linux-gnu.tar.bz2").
            total_size: Expected size in bytes. May be 0 if unknown.
        """
        ...

    def on_progress_changed(self, file_name: str, downloaded: int) -> None:
        """Called with the number of bytes downloaded so far for a file."""
        ...

    def on_download_finished(self, file_name: str, error: Optional[Exception]) -> None:
        """Called once per file, with the error that stopped it (None on success)."""
        ...

    def on_processing_done(self) -> None:
        """Called after every file of the operation has finished."""
        ...


@runtime_checkable
class EventHandler(Protocol):
    """Protocol for objects that observe package manager operations."""

    def on_downloading_something(self) -> DownloadProgressHandler:
        """Return the progress handle to use for the download about to start."""
        ...


class NullDownloadProgress:
    """No-op progress handle for tests and non-interactive use.

    Silently discards all progress updates.
    """

    def on_new_download_task(self, file_name: str, total_size: int) -> None:
        pass

    def on_progress_changed(self, file_name: str, downloaded: int) -> None:
        pass

    def on_download_finished(self, file_name: str, error: Optional[Exception]) -> None:
        pass

    def on_processing_done(self) -> None:
        pass
