"""Public data models for verdiff.

This module contains the versioned-item types consumed by the diff engine,
the diff result it produces, and the resource / resource-version records
handled by the versioning service.  All types are plain dataclasses, apart
from the ``UpdatedPair`` named tuple, with no behaviour beyond what is
needed for structural equality and hashing (where frozen).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, NamedTuple


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class ResourceType(str, Enum):
    """Kinds of resources managed by the platform."""

    SERVICE = "Service"
    SERVICE_TEMPLATE = "ServiceTemplate"
    PLUGIN_REPOSITORY = "PluginRepository"
    PROJECT_CONFIGURATION = "ProjectConfiguration"
    MESSAGE_BROKER = "MessageBroker"


# ---------------------------------------------------------------------------
# Diff engine types
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class VersionedItem:
    """One snapshot of a logical entity (a block version or entity version).

    Attributes
    ----------
    entity_id:
        Stable identity of the underlying entity.  The same across every
        version of that entity.
    version_number:
        Comparable marker of this particular snapshot.
    payload:
        Opaque data carried along for the caller.  Not interpreted by the
        diff engine and excluded from equality.
    id:
        Identifier of this snapshot row, when the store assigns one.
    """

    entity_id: str
    version_number: Any
    payload: Any = field(default=None, compare=False, hash=False)
    id: str | None = None


class UpdatedPair(NamedTuple):
    """Two snapshots of the same entity with different version numbers.

    Unpacks as ``(source, target)``.
    """

    source: Any
    target: Any


@dataclass
class DiffResult:
    """Partition of two versioned collections into created/updated/deleted.

    Attributes
    ----------
    created:
        Target items whose entity is absent from the source, in target order.
    updated:
        Pairs sharing an entity with differing version numbers, in source
        order.
    deleted:
        Source items whose entity is absent from the target, in source order.
    """

    created: list[Any] = field(default_factory=list)
    updated: list[UpdatedPair] = field(default_factory=list)
    deleted: list[Any] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (self.created or self.updated or self.deleted)

    def counts(self) -> dict[str, int]:
        return {
            "created": len(self.created),
            "updated": len(self.updated),
            "deleted": len(self.deleted),
        }


# ---------------------------------------------------------------------------
# Resources and resource versions
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Resource:
    """A top-level manageable entity (service, template, ...)."""

    id: str
    name: str
    resource_type: ResourceType


@dataclass(frozen=True)
class ResourceVersion:
    """A named snapshot of a resource's block and entity versions.

    Attributes
    ----------
    id:
        Store-assigned identifier.
    resource_id:
        The resource this version belongs to.
    version:
        Semantic version string, unique per resource.
    created_at:
        Timezone-aware creation timestamp.
    message:
        Free-form release note.
    commit_id:
        The commit the version was cut from, if any.
    block_versions:
        Block versions captured when the version was created.
    entity_versions:
        Entity versions captured when the version was created.
    """

    id: str
    resource_id: str
    version: str
    created_at: datetime
    message: str = ""
    commit_id: str | None = None
    block_versions: tuple[VersionedItem, ...] = ()
    entity_versions: tuple[VersionedItem, ...] = ()
