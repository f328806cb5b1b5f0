"""Registry data model for hardware platform packages.

The registry is a tree of entities:

    Packages
      └── Package (by name)
            ├── Platform (by architecture)
            │     └── PlatformRelease (by version, at most one installed)
            │           ├── Board (by board id)
            │           └── ToolDependency (value)
            └── Tool (by name)
                  └── ToolRelease (by version)

Entities are created or updated by index merges and installation events;
lookups only read them. Back-references (release -> platform -> package) are
excluded from equality and repr so entities compare and print by identity
instead of recursing through the tree.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, Optional

from .versions import latest


@dataclass(frozen=True)
class DownloadResource:
    """Archive that can be downloaded to install a release.

    Attributes:
        url: Download URL for the archive
        archive_file_name: File name of the archive in the download cache
        checksum: Checksum string as published (e.g. "SHA-256:abc...")
        size: Archive size in bytes
        host: Host triplet the archive targets (tool archives only)
    """

    url: str
    archive_file_name: str
    checksum: str = ""
    size: int = 0
    host: str = ""


@dataclass(frozen=True)
class ToolDependency:
    """Exact tool release a platform release needs to build."""

    packager: str
    name: str
    version: str

    def __str__(self) -> str:
        return f"{self.packager}:{self.name}@{self.version}"


@dataclass(eq=False)
class Board:
    """A buildable target defined by an installed platform release.

    Attributes:
        board_id: Identifier, unique only within its platform release
        properties: Flat board properties (e.g. "name", "vid.0", "build.mcu")
        platform_release: Platform release that defines the board
    """

    board_id: str
    properties: dict[str, str] = field(default_factory=dict)
    platform_release: Optional["PlatformRelease"] = field(default=None, repr=False)

    @property
    def name(self) -> str:
        return self.properties.get("name", self.board_id)

    @property
    def fqbn(self) -> str:
        """Fully qualified board name "packager:architecture:board_id"."""
        if self.platform_release is None:
            return self.board_id
        platform = self.platform_release.platform
        return f"{platform.package.name}:{platform.architecture}:{self.board_id}"

    @property
    def usb_ids(self) -> list[tuple[str, str]]:
        """USB (vid, pid) pairs declared as "vid.N"/"pid.N" properties."""
        pairs = []
        for key, vid in self.properties.items():
            if not key.startswith("vid."):
                continue
            index = key[len("vid.") :]
            pid = self.properties.get(f"pid.{index}")
            if pid is not None:
                pairs.append((vid, pid))
        return pairs

    def has_usb_id(self, vid: str, pid: str) -> bool:
        """Check whether the board declares the given USB id (case-insensitive)."""
        vid = vid.lower()
        pid = pid.lower()
        return any(v.lower() == vid and p.lower() == pid for v, p in self.usb_ids)

    def __str__(self) -> str:
        return self.fqbn


@dataclass(eq=False)
class PlatformRelease:
    """One version of a platform, with the boards and tools it brings."""

    version: str
    platform: "Platform" = field(repr=False)
    resource: Optional[DownloadResource] = None
    board_names: list[str] = field(default_factory=list)
    boards: dict[str, Board] = field(default_factory=dict)
    dependencies: list[ToolDependency] = field(default_factory=list)
    install_dir: Optional[Path] = None

    @property
    def is_installed(self) -> bool:
        return self.install_dir is not None

    def add_board(self, board_id: str, properties: Optional[dict[str, str]] = None) -> Board:
        """Define (or redefine) a board of this release."""
        board = Board(board_id=board_id, properties=dict(properties or {}), platform_release=self)
        self.boards[board_id] = board
        return board

    def __str__(self) -> str:
        return f"{self.platform}@{self.version}"


@dataclass(eq=False)
class Platform:
    """Architecture-specific board family of a package."""

    architecture: str
    package: "Package" = field(repr=False)
    name: str = ""
    category: str = ""
    releases: dict[str, PlatformRelease] = field(default_factory=dict)

    def get_release(self, version: str) -> Optional[PlatformRelease]:
        return self.releases.get(version)

    def get_or_create_release(self, version: str) -> PlatformRelease:
        release = self.releases.get(version)
        if release is None:
            release = PlatformRelease(version=version, platform=self)
            self.releases[version] = release
        return release

    def get_latest_release(self) -> Optional[PlatformRelease]:
        return latest(self.releases.values(), lambda r: r.version)

    def get_installed(self) -> Optional[PlatformRelease]:
        """Return the installed release, or None if nothing is installed."""
        for release in self.releases.values():
            if release.is_installed:
                return release
        return None

    def install(self, version: str, install_dir: Path) -> PlatformRelease:
        """Mark a release as the installed one.

        Any previously installed release is uninstalled first, so at most one
        release of a platform is installed at a time.

        Raises:
            KeyError: If the platform has no release with that version
        """
        release = self.releases[version]
        self.uninstall()
        release.install_dir = Path(install_dir)
        return release

    def uninstall(self) -> None:
        for release in self.releases.values():
            release.install_dir = None

    def __str__(self) -> str:
        return f"{self.package.name}:{self.architecture}"


@dataclass(eq=False)
class ToolRelease:
    """One installable version of a tool."""

    version: str
    tool: "Tool" = field(repr=False)
    resources: list[DownloadResource] = field(default_factory=list)
    install_dir: Optional[Path] = None

    @property
    def is_installed(self) -> bool:
        return self.install_dir is not None

    @property
    def identity(self) -> str:
        """Deduplication key "packager:tool" shared by all releases of a tool."""
        return str(self.tool)

    def install(self, install_dir: Path) -> None:
        self.install_dir = Path(install_dir)

    def uninstall(self) -> None:
        self.install_dir = None

    def __str__(self) -> str:
        return f"{self.tool}@{self.version}"


@dataclass(eq=False)
class Tool:
    """A named toolchain component (compiler, uploader, ...) of a package."""

    name: str
    package: "Package" = field(repr=False)
    releases: dict[str, ToolRelease] = field(default_factory=dict)

    def get_release(self, version: str) -> Optional[ToolRelease]:
        return self.releases.get(version)

    def get_or_create_release(self, version: str) -> ToolRelease:
        release = self.releases.get(version)
        if release is None:
            release = ToolRelease(version=version, tool=self)
            self.releases[version] = release
        return release

    def get_latest_installed(self) -> Optional[ToolRelease]:
        """Return the installed release with the highest version."""
        installed = [r for r in self.releases.values() if r.is_installed]
        return latest(installed, lambda r: r.version)

    def __str__(self) -> str:
        return f"{self.package.name}:{self.name}"


@dataclass(eq=False)
class Package:
    """A vendor's collection of platforms and tools."""

    name: str
    maintainer: str = ""
    website_url: str = ""
    email: str = ""
    help_online: str = ""
    platforms: dict[str, Platform] = field(default_factory=dict)
    tools: dict[str, Tool] = field(default_factory=dict)

    def get_or_create_platform(self, architecture: str) -> Platform:
        platform = self.platforms.get(architecture)
        if platform is None:
            platform = Platform(architecture=architecture, package=self)
            self.platforms[architecture] = platform
        return platform

    def get_or_create_tool(self, name: str) -> Tool:
        tool = self.tools.get(name)
        if tool is None:
            tool = Tool(name=name, package=self)
            self.tools[name] = tool
        return tool

    def __str__(self) -> str:
        return self.name


class Packages:
    """All packages known to a package manager, keyed by name."""

    def __init__(self) -> None:
        self.packages: dict[str, Package] = {}

    def get(self, name: str) -> Optional[Package]:
        return self.packages.get(name)

    def get_or_create_package(self, name: str) -> Package:
        package = self.packages.get(name)
        if package is None:
            package = Package(name=name)
            self.packages[name] = package
        return package

    def installed_platform_releases(self) -> Iterator[PlatformRelease]:
        """Yield the installed release of every platform of every package."""
        for package in self.packages.values():
            for platform in package.platforms.values():
                release = platform.get_installed()
                if release is not None:
                    yield release

    def __iter__(self) -> Iterator[Package]:
        return iter(self.packages.values())

    def __len__(self) -> int:
        return len(self.packages)

    def __contains__(self, name: object) -> bool:
        return name in self.packages
