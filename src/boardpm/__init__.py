"""boardpm - package, board and toolchain resolution for hardware platforms."""

from .cores.fqbn import FQBN
from .errors import (
    BoardNotFoundError,
    ConfigurationError,
    EventHandlerAlreadyRegisteredError,
    IndexLoadError,
    IndexPathError,
    InvalidFQBNError,
    NotFoundError,
    PackageManagerError,
    PackageNotFoundError,
    PlatformNotInstalledError,
    ReleaseNotFoundError,
    ToolDependencyError,
    ToolNotFoundError,
)
from .packagemanager import PackageManager

__version__ = "0.1.0"

__all__ = [
    "FQBN",
    "BoardNotFoundError",
    "ConfigurationError",
    "EventHandlerAlreadyRegisteredError",
    "IndexLoadError",
    "IndexPathError",
    "InvalidFQBNError",
    "NotFoundError",
    "PackageManager",
    "PackageManagerError",
    "PackageNotFoundError",
    "PlatformNotInstalledError",
    "ReleaseNotFoundError",
    "ToolDependencyError",
    "ToolNotFoundError",
    "__version__",
]
