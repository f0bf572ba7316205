"""verdiff -- resource versioning and version diffs.

Public re-exports
-----------------

* **Diff:** :func:`diff_versions`, :class:`VersionDiffEngine`
* **Versioning:** :class:`ResourceVersionService`, :class:`InMemoryVersionStore`
* **Configuration:** :class:`VerdiffConfig`
* **Errors:** Every :class:`VerdiffError` subclass and :class:`ErrorCode`
* **Models:** Item, result and resource dataclasses

Usage::

    from verdiff import VersionedItem, diff_versions

    result = diff_versions(
        [VersionedItem("a", 1), VersionedItem("b", 1)],
        [VersionedItem("a", 2), VersionedItem("c", 1)],
    )
    [item.entity_id for item in result.created]   # ['c']
"""

from __future__ import annotations

# ── Alerts ─────────────────────────────────────────────────────────────
from verdiff.alerts import AlertHook, NoopAlertHook, WebhookAlertHook

# ── Configuration ───────────────────────────────────────────────────────
from verdiff.config import DEFAULT_VERSIONED_RESOURCE_TYPES, VerdiffConfig

# ── Diff ───────────────────────────────────────────────────────────────
from verdiff.diff import VersionDiffEngine, diff_versions

# ── Errors ──────────────────────────────────────────────────────────────
from verdiff.errors import (
    AlertDeliveryError,
    ErrorCode,
    InvalidInputError,
    ResourceNotFoundError,
    UnsupportedResourceTypeError,
    VerdiffError,
    VersionConflictError,
    VersionNotFoundError,
    VersionValidationError,
)

# ── Models ──────────────────────────────────────────────────────────────
from verdiff.models import (
    DiffResult,
    Resource,
    ResourceType,
    ResourceVersion,
    UpdatedPair,
    VersionedItem,
)

# ── Versioning ─────────────────────────────────────────────────────────
from verdiff.versioning import InMemoryVersionStore, ResourceVersionService, VersionStore

__all__ = [
    # Diff
    "diff_versions",
    "VersionDiffEngine",
    # Versioning
    "ResourceVersionService",
    "VersionStore",
    "InMemoryVersionStore",
    # Alerts
    "AlertHook",
    "NoopAlertHook",
    "WebhookAlertHook",
    # Configuration
    "VerdiffConfig",
    "DEFAULT_VERSIONED_RESOURCE_TYPES",
    # Errors
    "VerdiffError",
    "ErrorCode",
    "InvalidInputError",
    "VersionValidationError",
    "VersionConflictError",
    "VersionNotFoundError",
    "ResourceNotFoundError",
    "UnsupportedResourceTypeError",
    "AlertDeliveryError",
    # Models
    "VersionedItem",
    "UpdatedPair",
    "DiffResult",
    "Resource",
    "ResourceType",
    "ResourceVersion",
]
