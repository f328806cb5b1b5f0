"""Package manager: board lookup, tool resolution and event handlers.

Public API:
    PackageManager: Registry of packages with board and tool lookups.
    EventHandler: Protocol for observers handing out download progress handles.
    ConsoleEventHandler: EventHandler rendering downloads with rich.
"""

from .actions import PackageActions, ToolActions, ToolReleaseActions
from .events import DownloadProgressHandler, EventHandler, NullDownloadProgress
from .manager import PackageManager
from .progress_display import ConsoleEventHandler, RichDownloadProgress

__all__ = [
    "ConsoleEventHandler",
    "DownloadProgressHandler",
    "EventHandler",
    "NullDownloadProgress",
    "PackageActions",
    "PackageManager",
    "RichDownloadProgress",
    "ToolActions",
    "ToolReleaseActions",
]
