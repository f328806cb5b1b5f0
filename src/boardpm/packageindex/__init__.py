"""Package index parsing and merging."""

from .index import Index, IndexPackage, IndexPlatformRelease, IndexToolRelease, load_index

__all__ = [
    "Index",
    "IndexPackage",
    "IndexPlatformRelease",
    "IndexToolRelease",
    "load_index",
]
