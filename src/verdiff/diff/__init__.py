"""Version diff engine.

Exports
-------
diff_versions
    Pure function partitioning two versioned collections into
    created / updated / deleted.
VersionDiffEngine
    Config-aware wrapper adding logging, metrics and debug dumps.
index_by_entity
    Build an entity-id index, optionally rejecting duplicate ids.
"""

from .engine import VersionDiffEngine, diff_versions
from .index import index_by_entity

__all__ = [
    "VersionDiffEngine",
    "diff_versions",
    "index_by_entity",
]
