"""Fluent resolution chain: Package -> Tool -> ToolRelease.

Every stage returns a handle holding either the resolved entity or the
error of the first lookup that failed. Calling a later stage on a failed
handle forwards the same error, so a whole lookup can be written as one
expression and checked once at the end:

    release = pm.package("arduino").tool("avr-gcc").release("7.3.0-atmel3.6.1-arduino7").get()

get() raises the forwarded error (a NotFoundError subclass).
"""

from typing import Optional

from ..cores.models import Package, Tool, ToolRelease
from ..errors import PackageNotFoundError, PackageManagerError, ReleaseNotFoundError, ToolNotFoundError


class PackageActions:
    """Actions that can be performed on a Package."""

    def __init__(self, package: Optional[Package], forward_error: Optional[PackageManagerError] = None) -> None:
        if package is None and forward_error is None:
            raise ValueError("package or forward_error is required")
        self._package = package
        self._forward_error = forward_error

    @classmethod
    def lookup(cls, packages: dict[str, Package], name: str) -> "PackageActions":
        package = packages.get(name)
        if package is None:
            return cls(None, PackageNotFoundError(name))
        return cls(package)

    @property
    def error(self) -> Optional[PackageManagerError]:
        return self._forward_error

    def tool(self, name: str) -> "ToolActions":
        """Look up a tool of the package."""
        if self._forward_error is not None:
            return ToolActions(None, self._forward_error)
        tool = self._package.tools.get(name)
        if tool is None:
            return ToolActions(None, ToolNotFoundError(name, self._package.name))
        return ToolActions(tool)

    def get(self) -> Package:
        if self._forward_error is not None:
            raise self._forward_error
        return self._package


class ToolActions:
    """Actions that can be performed on a Tool."""

    def __init__(self, tool: Optional[Tool], forward_error: Optional[PackageManagerError] = None) -> None:
        if tool is None and forward_error is None:
            raise ValueError("tool or forward_error is required")
        self._tool = tool
        self._forward_error = forward_error

    @property
    def error(self) -> Optional[PackageManagerError]:
        return self._forward_error

    def release(self, version: str) -> "ToolReleaseActions":
        """Look up a release of the tool by exact version."""
        if self._forward_error is not None:
            return ToolReleaseActions(None, self._forward_error)
        release = self._tool.get_release(version)
        if release is None:
            return ToolReleaseActions(None, ReleaseNotFoundError(version, str(self._tool)))
        return ToolReleaseActions(release)

    def is_installed(self) -> bool:
        """Check whether any release of the tool is installed.

        Raises:
            NotFoundError: The error forwarded from an earlier stage
        """
        if self._forward_error is not None:
            raise self._forward_error
        return any(release.is_installed for release in self._tool.releases.values())

    def get(self) -> Tool:
        if self._forward_error is not None:
            raise self._forward_error
        return self._tool


class ToolReleaseActions:
    """Actions that can be performed on a ToolRelease."""

    def __init__(self, release: Optional[ToolRelease], forward_error: Optional[PackageManagerError] = None) -> None:
        if release is None and forward_error is None:
            raise ValueError("release or forward_error is required")
        self._release = release
        self._forward_error = forward_error

    @property
    def error(self) -> Optional[PackageManagerError]:
        return self._forward_error

    def get(self) -> ToolRelease:
        if self._forward_error is not None:
            raise self._forward_error
        return self._release
