"""Registry data model: packages, platforms, boards and tools."""

from .fqbn import FQBN
from .models import Board, DownloadResource, Package, Packages, Platform, PlatformRelease, Tool, ToolDependency, ToolRelease
from .versions import latest, version_sort_key

__all__ = [
    "FQBN",
    "Board",
    "DownloadResource",
    "Package",
    "Packages",
    "Platform",
    "PlatformRelease",
    "Tool",
    "ToolDependency",
    "ToolRelease",
    "latest",
    "version_sort_key",
]
