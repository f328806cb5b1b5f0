"""
Data directory configuration.

Package indexes downloaded from a URL are cached as JSON files in the data
directory, named after the last path segment of the URL:

    https://downloads.arduino.cc/packages/package_index.json
        -> ~/.boardpm/package_index.json

Modes:
- Default: ~/.boardpm/
- Override (BOARDPM_DATA_DIR=<path>): the given directory
"""

import os
from pathlib import Path
from urllib.parse import urlparse

from .errors import IndexPathError

DATA_DIR_ENV = "BOARDPM_DATA_DIR"
DEFAULT_DATA_DIR = Path.home() / ".boardpm"


def data_dir() -> Path:
    """Return the directory holding cached package indexes."""
    override = os.environ.get(DATA_DIR_ENV)
    if override:
        return Path(override).expanduser()
    return DEFAULT_DATA_DIR


def index_path_from_url(url: str) -> Path:
    """Return the local cache path of the package index published at url.

    Args:
        url: Index URL (e.g. "https://example.com/package_index.json")

    Returns:
        Path of the cached index file (which may not exist yet)

    Raises:
        IndexPathError: If the URL path has no file name
    """
    path = urlparse(url).path
    file_name = path.rstrip("/").rsplit("/", 1)[-1] if path else ""
    if not file_name or path.endswith("/"):
        raise IndexPathError(f"invalid package index URL, no file name: {url}")
    return data_dir() / file_name
