"""Persistence boundary for resource versions.

:class:`VersionStore` is the set of queries the versioning service relies
on.  Any backend (an ORM session, a remote API) can implement it.
:class:`InMemoryVersionStore` is a thread-safe, dict-backed implementation
used in tests and for embedding.
"""

from __future__ import annotations

import itertools
import threading
from collections.abc import Iterable
from typing import Protocol, runtime_checkable

from verdiff.errors import VersionConflictError
from verdiff.models import Resource, ResourceVersion, VersionedItem


@runtime_checkable
class VersionStore(Protocol):
    """Queries required by :class:`ResourceVersionService`."""

    def get_resource(self, resource_id: str) -> Resource | None:
        """Return the resource with *resource_id*, or ``None``."""
        ...

    def find_version(self, resource_id: str, version: str) -> ResourceVersion | None:
        """Return the version named *version* of a resource, or ``None``."""
        ...

    def get_version(self, version_id: str) -> ResourceVersion | None:
        """Return the resource version with id *version_id*, or ``None``."""
        ...

    def list_versions(self, resource_id: str | None = None) -> list[ResourceVersion]:
        """Return resource versions, newest ``created_at`` first.

        All resources are included when *resource_id* is ``None``.
        """
        ...

    def insert_version(self, resource_version: ResourceVersion) -> ResourceVersion:
        """Persist *resource_version* and return the stored record.

        Must raise :class:`~verdiff.errors.VersionConflictError` when the
        resource already has a version with the same name, atomically with
        the write (a unique constraint on ``(resource_id, version)``).
        """
        ...

    def latest_block_versions(self, resource_id: str) -> list[VersionedItem]:
        """Return the newest version of every block of a resource."""
        ...

    def latest_entity_versions(self, resource_id: str) -> list[VersionedItem]:
        """Return the newest version of every entity of a resource."""
        ...

    def block_versions_for(self, resource_version_id: str) -> list[VersionedItem]:
        """Return the block versions captured by a resource version."""
        ...


def _latest_per_entity(items: Iterable[VersionedItem]) -> list[VersionedItem]:
    """Keep the highest ``version_number`` per entity, in first-seen order."""
    latest: dict[str, VersionedItem] = {}
    for item in items:
        current = latest.get(item.entity_id)
        if current is None or item.version_number > current.version_number:
            latest[item.entity_id] = item
    return list(latest.values())


class InMemoryVersionStore:
    """Dict-backed :class:`VersionStore`.

    Resources, block versions and entity versions are seeded with
    :meth:`add_resource`, :meth:`add_block_version` and
    :meth:`add_entity_version`.  All access goes through a single lock.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._resources: dict[str, Resource] = {}
        self._versions: dict[str, ResourceVersion] = {}
        self._insert_order: dict[str, int] = {}
        self._names: dict[tuple[str, str], str] = {}
        self._blocks: dict[str, list[VersionedItem]] = {}
        self._entities: dict[str, list[VersionedItem]] = {}
        self._seq = itertools.count()

    # ── Seeding ─────────────────────────────────────────────────────────

    def add_resource(self, resource: Resource) -> Resource:
        with self._lock:
            self._resources[resource.id] = resource
        return resource

    def add_block_version(self, resource_id: str, item: VersionedItem) -> VersionedItem:
        with self._lock:
            self._blocks.setdefault(resource_id, []).append(item)
        return item

    def add_entity_version(self, resource_id: str, item: VersionedItem) -> VersionedItem:
        with self._lock:
            self._entities.setdefault(resource_id, []).append(item)
        return item

    # ── VersionStore ────────────────────────────────────────────────────

    def get_resource(self, resource_id: str) -> Resource | None:
        with self._lock:
            return self._resources.get(resource_id)

    def find_version(self, resource_id: str, version: str) -> ResourceVersion | None:
        with self._lock:
            version_id = self._names.get((resource_id, version))
            return None if version_id is None else self._versions[version_id]

    def get_version(self, version_id: str) -> ResourceVersion | None:
        with self._lock:
            return self._versions.get(version_id)

    def list_versions(self, resource_id: str | None = None) -> list[ResourceVersion]:
        with self._lock:
            selected = [
                rv
                for rv in self._versions.values()
                if resource_id is None or rv.resource_id == resource_id
            ]
            # Insertion order breaks ties between equal timestamps.
            selected.sort(
                key=lambda rv: (rv.created_at, self._insert_order[rv.id]),
                reverse=True,
            )
        return selected

    def insert_version(self, resource_version: ResourceVersion) -> ResourceVersion:
        with self._lock:
            if resource_version.id in self._versions:
                raise KeyError(f"Resource version {resource_version.id} already stored")
            key = (resource_version.resource_id, resource_version.version)
            if key in self._names:
                raise VersionConflictError(
                    f"Version {resource_version.version} already exists "
                    f"for resource {resource_version.resource_id}",
                    context={
                        "resource_id": resource_version.resource_id,
                        "version": resource_version.version,
                    },
                )
            self._names[key] = resource_version.id
            self._versions[resource_version.id] = resource_version
            self._insert_order[resource_version.id] = next(self._seq)
        return resource_version

    def latest_block_versions(self, resource_id: str) -> list[VersionedItem]:
        with self._lock:
            items = list(self._blocks.get(resource_id, []))
        return _latest_per_entity(items)

    def latest_entity_versions(self, resource_id: str) -> list[VersionedItem]:
        with self._lock:
            items = list(self._entities.get(resource_id, []))
        return _latest_per_entity(items)

    def block_versions_for(self, resource_version_id: str) -> list[VersionedItem]:
        with self._lock:
            resource_version = self._versions.get(resource_version_id)
        if resource_version is None:
            return []
        return list(resource_version.block_versions)
