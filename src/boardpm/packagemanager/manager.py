"""Package manager: registry of installed hardware platform packages.

The PackageManager owns the registry of packages, platforms and tools and
answers the questions the build and install commands ask of it:

- which board does an FQBN, a USB id or a board id refer to,
- which release of a tool does a (package, tool, version) triple name,
- which tool releases are needed to build for a board.

The registry is plain shared state without locking. Index merges and
installation events must not run concurrently with lookups.
"""

import logging
from pathlib import Path
from typing import Optional

from .. import config
from ..cores.fqbn import FQBN
from ..cores.models import Board, Packages, ToolDependency, ToolRelease
from ..cores.versions import version_sort_key
from ..errors import (
    BoardNotFoundError,
    EventHandlerAlreadyRegisteredError,
    IndexLoadError,
    NotFoundError,
    PackageNotFoundError,
    PlatformNotInstalledError,
    ToolDependencyError,
)
from ..packageindex.index import load_index
from .actions import PackageActions
from .events import DownloadProgressHandler, EventHandler, NullDownloadProgress

logger = logging.getLogger(__name__)

# Logger whose level the debug output switch controls
_ROOT_LOGGER_NAME = "boardpm"


def _board_sort_key(board: Board) -> str:
    return board.fqbn


def _release_sort_key(release: ToolRelease) -> tuple:
    return (release.identity, version_sort_key(release.version))


class PackageManager:
    """Registry of packages plus the lookups performed on it.

    Each instance owns its own registry, so several managers can coexist
    (e.g. one per test).
    """

    def __init__(self) -> None:
        self._packages = Packages()
        self._event_handler: Optional[EventHandler] = None

    def clear(self) -> None:
        """Discard every package. The registered event handler is kept."""
        self._packages = Packages()

    def get_packages(self) -> Packages:
        return self._packages

    def enable_debug_output(self) -> None:
        logging.getLogger(_ROOT_LOGGER_NAME).setLevel(logging.DEBUG)

    def disable_debug_output(self) -> None:
        logging.getLogger(_ROOT_LOGGER_NAME).setLevel(logging.ERROR)

    # Board lookups

    def find_boards_with_vid_pid(self, vid: str, pid: str) -> list[Board]:
        """Return the boards of installed platforms declaring the USB id.

        Hex digits are compared case-insensitively. Returns an empty list when
        nothing matches.
        """
        boards = [
            board
            for release in self._packages.installed_platform_releases()
            for board in release.boards.values()
            if board.has_usb_id(vid, pid)
        ]
        return sorted(boards, key=_board_sort_key)

    def find_boards_with_id(self, board_id: str) -> list[Board]:
        """Return the boards of installed platforms with the given id.

        Board ids are only unique within a platform, so several boards from
        different packages may be returned.
        """
        boards = [
            release.boards[board_id]
            for release in self._packages.installed_platform_releases()
            if board_id in release.boards
        ]
        return sorted(boards, key=_board_sort_key)

    def find_board_with_fqbn(self, fqbn: str) -> Board:
        """Return the board identified by an FQBN.

        Args:
            fqbn: "packager:architecture:board_id" with optional ":menu_options"

        Raises:
            InvalidFQBNError: If fqbn is not shaped like an FQBN
            PackageNotFoundError: If no package is named like the packager
            PlatformNotInstalledError: If the platform has no installed release
            BoardNotFoundError: If the platform is unknown or lacks the board
        """
        parsed = FQBN.parse(fqbn)

        package = self._packages.get(parsed.packager)
        if package is None:
            raise PackageNotFoundError(parsed.packager)

        scope = f"{parsed.packager}:{parsed.architecture}"
        platform = package.platforms.get(parsed.architecture)
        if platform is None:
            raise BoardNotFoundError(parsed.board_id, scope)

        release = platform.get_installed()
        if release is None:
            raise PlatformNotInstalledError(scope)

        board = release.boards.get(parsed.board_id)
        if board is None:
            raise BoardNotFoundError(parsed.board_id, f"{scope}@{release.version}")
        return board

    # Event handlers

    def register_event_handler(self, event_handler: EventHandler) -> None:
        """Register the handler notified of package manager events.

        Raises:
            EventHandlerAlreadyRegisteredError: If a handler is already registered
        """
        if self._event_handler is not None:
            raise EventHandlerAlreadyRegisteredError(f"an event handler is already registered: {self._event_handler!r}")
        self._event_handler = event_handler

    def get_event_handlers(self) -> list[EventHandler]:
        """Return the registered event handlers (zero or one)."""
        if self._event_handler is None:
            return []
        return [self._event_handler]

    def download_progress(self) -> DownloadProgressHandler:
        """Return the progress handle for a download about to start.

        Falls back to a no-op handle when no event handler is registered.
        """
        if self._event_handler is None:
            return NullDownloadProgress()
        return self._event_handler.on_downloading_something()

    # Package indexes

    def merge_index(self, index_path: Path) -> None:
        """Load a local package index file and merge it into the registry.

        Raises:
            IndexLoadError: If the file cannot be read or parsed
        """
        index = load_index(index_path)
        index.merge_into_packages(self._packages)
        logger.info(f"Loaded package index {index_path} ({len(index.packages)} packages)")

    def load_package_index(self, url: str) -> None:
        """Merge the cached copy of the package index published at url.

        The index must already have been downloaded to the data directory.

        Raises:
            IndexPathError: If the URL cannot be mapped to a cache file
            IndexLoadError: If the cached file is missing or invalid
        """
        index_path = config.index_path_from_url(url)
        try:
            self.merge_index(index_path)
        except IndexLoadError as e:
            raise IndexLoadError(f"loading json index file {index_path} for {url}: {e}") from e

    # Tools

    def package(self, name: str) -> PackageActions:
        """Start a resolution chain at the package with the given name."""
        return PackageActions.lookup(self._packages.packages, name)

    def get_all_installed_tools_releases(self) -> list[ToolRelease]:
        releases = [
            release
            for package in self._packages
            for tool in package.tools.values()
            for release in tool.releases.values()
            if release.is_installed
        ]
        return sorted(releases, key=_release_sort_key)

    def find_tool_dependency(self, dep: ToolDependency) -> Optional[ToolRelease]:
        """Return the tool release a dependency names, or None if it is unknown."""
        try:
            return self._resolve_tool_dependency(dep)
        except NotFoundError:
            return None

    def _resolve_tool_dependency(self, dep: ToolDependency) -> ToolRelease:
        return self.package(dep.packager).tool(dep.name).release(dep.version).get()

    def find_tools_required_for_board(self, board: Board) -> list[ToolRelease]:
        """Return the tool releases needed to build for a board.

        Every tool starts out with its latest installed release, so platforms
        without declared dependencies (e.g. copied by hand into a sketchbook)
        still get a toolchain. The dependencies declared by the board's
        platform release then replace the default of the same tool.

        Returns:
            One release per tool, sorted by "packager:tool"

        Raises:
            ToolDependencyError: If a declared dependency names a release that
                is unknown or not installed
        """
        if board.platform_release is None:
            raise ToolDependencyError(f"board '{board.board_id}' does not belong to a platform release")

        # "packager:tool" -> release
        found_tools: dict[str, ToolRelease] = {}

        for package in self._packages:
            for tool in package.tools.values():
                release = tool.get_latest_installed()
                if release is not None:
                    found_tools[release.identity] = release

        for dep in board.platform_release.dependencies:
            try:
                release = self._resolve_tool_dependency(dep)
            except NotFoundError as e:
                raise ToolDependencyError(f"tool release not found: {dep}") from e
            if not release.is_installed:
                raise ToolDependencyError(f"tool release not installed: {dep}")
            if found_tools.get(release.identity) is not release:
                logger.debug(f"{board.fqbn}: using {release} as required by {board.platform_release}")
            found_tools[release.identity] = release

        return sorted(found_tools.values(), key=_release_sort_key)
