"""Exceptions raised by the package manager.

All lookups raise subclasses of PackageManagerError. Not-found errors name
the missing key and the scope it was looked up in.
"""


class PackageManagerError(Exception):
    """Base class for package manager errors."""

    pass


class NotFoundError(PackageManagerError):
    """Raised when a package, tool, release, platform or board is missing."""

    pass


class PackageNotFoundError(NotFoundError):
    """Raised when no package has the requested name."""

    def __init__(self, package: str) -> None:
        super().__init__(f"package '{package}' not found")
        self.package = package


class ToolNotFoundError(NotFoundError):
    """Raised when a package has no tool with the requested name."""

    def __init__(self, tool: str, package: str) -> None:
        super().__init__(f"tool '{tool}' not found in package '{package}'")
        self.tool = tool
        self.package = package


class ReleaseNotFoundError(NotFoundError):
    """Raised when a tool has no release with the requested version."""

    def __init__(self, version: str, tool: str) -> None:
        super().__init__(f"release '{version}' not found for tool '{tool}'")
        self.version = version
        self.tool = tool


class PlatformNotInstalledError(NotFoundError):
    """Raised when a platform exists but none of its releases is installed."""

    def __init__(self, platform: str) -> None:
        super().__init__(f"platform '{platform}' not installed")
        self.platform = platform


class BoardNotFoundError(NotFoundError):
    """Raised when no installed platform defines the requested board."""

    def __init__(self, board_id: str, scope: str) -> None:
        super().__init__(f"board '{board_id}' not found in '{scope}'")
        self.board_id = board_id
        self.scope = scope


class InvalidFQBNError(PackageManagerError, ValueError):
    """Raised when an FQBN string does not have the expected shape."""

    pass


class ToolDependencyError(PackageManagerError):
    """Raised when a declared tool dependency cannot be resolved."""

    pass


class ConfigurationError(PackageManagerError):
    """Raised when the package manager is wired up incorrectly."""

    pass


class EventHandlerAlreadyRegisteredError(ConfigurationError):
    """Raised when registering an event handler while one is registered."""

    pass


class IndexLoadError(PackageManagerError):
    """Raised when a package index cannot be read or parsed."""

    pass


class IndexPathError(PackageManagerError):
    """Raised when a package index URL cannot be mapped to a cache path."""

    pass
