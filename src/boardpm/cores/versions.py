"""Version ordering for tool and platform releases.

Package indexes publish versions such as "1.6.2", "7.3.0-atmel3.6.1-arduino7"
or "2.0.0-rc1". They are semver-shaped but not guaranteed to be PEP 440, so
ordering uses packaging.version for the numeric core and semver rules for the
pre-release suffix:

    1.6.2-arduino5 < 1.6.2 < 1.6.10 < 2.0.0-rc1 < 2.0.0-rc.2 < 2.0.0

Build metadata after "+" does not affect precedence. Versions whose core
cannot be parsed sort below every parseable version. The raw string is the
final tie-break, so the order is total and deterministic.
"""

from typing import Any, Iterable, Optional, TypeVar

from packaging.version import InvalidVersion, Version

T = TypeVar("T")


def _prerelease_key(prerelease: str) -> tuple[tuple[int, int, str], ...]:
    parts = []
    for ident in prerelease.split("."):
        if ident.isdigit():
            parts.append((0, int(ident), ""))
        else:
            parts.append((1, 0, ident))
    return tuple(parts)


def version_sort_key(version: str) -> tuple[Any, ...]:
    """Return a sort key implementing the release ordering described above.

    Args:
        version: Version string as published in a package index

    Returns:
        Tuple usable with sorted()/max()
    """
    text = version.strip()
    if text[:1] in ("v", "V"):
        text = text[1:]
    text, _, _build = text.partition("+")
    core, has_prerelease, prerelease = text.partition("-")

    try:
        parsed = Version(core)
    except InvalidVersion:
        return (0, (), 0, (), version)

    if has_prerelease:
        return (1, parsed, 0, _prerelease_key(prerelease), version)
    return (1, parsed, 1, (), version)


def latest(items: Iterable[T], version_of: Any = str) -> Optional[T]:
    """Return the item with the highest version, or None if there are none.

    Args:
        items: Objects to compare
        version_of: Callable extracting the version string from an item
    """
    candidates = list(items)
    if not candidates:
        return None
    return max(candidates, key=lambda item: version_sort_key(version_of(item)))
