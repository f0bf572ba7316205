"""Resource versioning: semver helpers, storage protocol and service.

Exports
-------
ResourceVersionService
    Create, query and compare resource versions.
VersionStore
    Protocol implemented by persistence backends.
InMemoryVersionStore
    Thread-safe dict-backed store.
parse_version, is_valid_version, sort_versions, previous_version
    Semantic version helpers.
"""

from .semver import is_valid_version, parse_version, previous_version, sort_versions
from .service import ResourceVersionService
from .store import InMemoryVersionStore, VersionStore

__all__ = [
    "InMemoryVersionStore",
    "ResourceVersionService",
    "VersionStore",
    "is_valid_version",
    "parse_version",
    "previous_version",
    "sort_versions",
]
