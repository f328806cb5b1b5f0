"""
Package index model and merge into the registry.

A package index is a JSON document published by a vendor:

    {
      "packages": [{
        "name": "arduino",
        "maintainer": "Arduino",
        "platforms": [{
          "architecture": "avr", "version": "1.6.21", "name": "Arduino AVR Boards",
          "url": "...", "archiveFileName": "avr-1.6.21.tar.bz2", "checksum": "SHA-256:...", "size": "4897949",
          "boards": [{"name": "Arduino Uno"}],
          "toolsDependencies": [{"packager": "arduino", "name": "avr-gcc", "version": "5.4.0-atmel3.6.1-arduino2"}]
        }],
        "tools": [{
          "name": "avr-gcc", "version": "5.4.0-atmel3.6.1-arduino2",
          "systems": [{"host": "x86_64-pc-linux-gnu", "url": "...", "archiveFileName": "...", "checksum": "...", "size": "..."}]
        }]
      }]
    }

The whole document is parsed into frozen dataclasses before anything touches
the registry, so a malformed index never leaves a half-merged registry.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

from ..cores.models import DownloadResource, Packages, ToolDependency
from ..errors import IndexLoadError

logger = logging.getLogger(__name__)


def _size(value: Any) -> int:
    # Indexes publish sizes as strings
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def _require_str(data: Dict[str, Any], key: str, entry: str) -> str:
    value = data[key]
    if not isinstance(value, str):
        raise IndexLoadError(f"field '{key}' of {entry} must be a string, got {type(value).__name__}: {value!r}")
    return value


@dataclass(frozen=True)
class IndexPlatformRelease:
    """A platform release entry of the index."""

    architecture: str
    version: str
    name: str = ""
    category: str = ""
    resource: DownloadResource | None = None
    board_names: List[str] = field(default_factory=list)
    tool_dependencies: List[ToolDependency] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "IndexPlatformRelease":
        resource = None
        if data.get("url"):
            resource = DownloadResource(
                url=data["url"],
                archive_file_name=data.get("archiveFileName", ""),
                checksum=data.get("checksum", ""),
                size=_size(data.get("size")),
            )
        return cls(
            architecture=_require_str(data, "architecture", "platform"),
            version=_require_str(data, "version", "platform"),
            name=data.get("name", ""),
            category=data.get("category", ""),
            resource=resource,
            board_names=[board["name"] for board in data.get("boards", [])],
            tool_dependencies=[ToolDependency(packager=dep["packager"], name=dep["name"], version=dep["version"]) for dep in data.get("toolsDependencies", [])],
        )


@dataclass(frozen=True)
class IndexToolRelease:
    """A tool release entry of the index."""

    name: str
    version: str
    systems: List[DownloadResource] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "IndexToolRelease":
        systems = [
            DownloadResource(
                url=system["url"],
                archive_file_name=system.get("archiveFileName", ""),
                checksum=system.get("checksum", ""),
                size=_size(system.get("size")),
                host=system.get("host", ""),
            )
            for system in data.get("systems", [])
        ]
        return cls(name=_require_str(data, "name", "tool"), version=_require_str(data, "version", "tool"), systems=systems)


@dataclass(frozen=True)
class IndexPackage:
    """A package entry of the index."""

    name: str
    maintainer: str = ""
    website_url: str = ""
    email: str = ""
    help_online: str = ""
    platforms: List[IndexPlatformRelease] = field(default_factory=list)
    tools: List[IndexToolRelease] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "IndexPackage":
        return cls(
            name=_require_str(data, "name", "package"),
            maintainer=data.get("maintainer", ""),
            website_url=data.get("websiteURL", ""),
            email=data.get("email", ""),
            help_online=(data.get("help") or {}).get("online", ""),
            platforms=[IndexPlatformRelease.from_dict(p) for p in data.get("platforms", [])],
            tools=[IndexToolRelease.from_dict(t) for t in data.get("tools", [])],
        )


@dataclass(frozen=True)
class Index:
    """A parsed package index."""

    packages: List[IndexPackage] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Index":
        """
        Parse a package index from its JSON dictionary.

        Raises:
            IndexLoadError: If a required field is missing or has the wrong type
        """
        try:
            return cls(packages=[IndexPackage.from_dict(p) for p in data["packages"]])
        except KeyError as e:
            raise IndexLoadError(f"missing required field in package index: {e}") from e
        except (TypeError, AttributeError) as e:
            raise IndexLoadError(f"malformed package index: {e}") from e

    def merge_into_packages(self, packages: Packages) -> None:
        """
        Merge the index into the registry.

        Merging is idempotent: existing packages, platforms, tools and
        releases are updated in place (their install state is kept) and
        list-valued attributes are replaced, never appended to.
        """
        for index_package in self.packages:
            package = packages.get_or_create_package(index_package.name)
            package.maintainer = index_package.maintainer
            package.website_url = index_package.website_url
            package.email = index_package.email
            package.help_online = index_package.help_online

            for index_platform in index_package.platforms:
                platform = package.get_or_create_platform(index_platform.architecture)
                platform.name = index_platform.name
                platform.category = index_platform.category
                release = platform.get_or_create_release(index_platform.version)
                release.resource = index_platform.resource
                release.board_names = list(index_platform.board_names)
                release.dependencies = list(index_platform.tool_dependencies)

            for index_tool in index_package.tools:
                tool = package.get_or_create_tool(index_tool.name)
                tool_release = tool.get_or_create_release(index_tool.version)
                tool_release.resources = list(index_tool.systems)

            logger.debug(f"Merged package {index_package.name}: {len(index_package.platforms)} platform releases, {len(index_package.tools)} tool releases")


def load_index(path: Path) -> Index:
    """
    Load a package index from a JSON file.

    Args:
        path: Path to the index file

    Returns:
        Parsed Index

    Raises:
        IndexLoadError: If the file cannot be read or is not a valid index
    """
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise IndexLoadError(f"reading package index {path}: {e}") from e
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise IndexLoadError(f"parsing package index {path}: {e}") from e

    if not isinstance(data, dict):
        raise IndexLoadError(f"parsing package index {path}: top-level value is not an object")
    return Index.from_dict(data)
