"""Resource version management.

:class:`ResourceVersionService` cuts named semver snapshots of a resource's
current block and entity versions, looks versions up, and compares two
versions of a resource by diffing the block versions each one captured.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any

from verdiff.alerts import AlertHook, build_alert_hook
from verdiff.config import VerdiffConfig
from verdiff.diff import VersionDiffEngine
from verdiff.errors import (
    ResourceNotFoundError,
    UnsupportedResourceTypeError,
    VersionConflictError,
    VersionNotFoundError,
)
from verdiff.models import DiffResult, ResourceVersion
from verdiff.observability import NoopMetricsHook, get_logger, log_event

from .semver import parse_version, previous_version
from .store import VersionStore

log = get_logger("verdiff.versioning")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return uuid.uuid4().hex


class ResourceVersionService:
    """Create, query and compare resource versions.

    Parameters
    ----------
    store:
        Persistence backend satisfying :class:`VersionStore`.
    config:
        Library configuration.  Defaults to ``VerdiffConfig()``.
    alert_hook:
        Receiver of version-published alerts.  Defaults to the hook built
        from *config* by :func:`build_alert_hook`.  A hook built here is
        owned by the service and released by :meth:`close`.
    diff_engine:
        Engine used by :meth:`compare_resource_versions`.
    clock:
        Returns the creation timestamp for new versions.
    id_factory:
        Returns the id for new versions.
    """

    def __init__(
        self,
        store: VersionStore,
        config: VerdiffConfig | None = None,
        *,
        alert_hook: AlertHook | None = None,
        diff_engine: VersionDiffEngine | None = None,
        clock: Callable[[], datetime] = _utcnow,
        id_factory: Callable[[], str] = _new_id,
    ) -> None:
        self._store = store
        self._config = config or VerdiffConfig()
        self._owns_alerts = alert_hook is None
        self._alerts = alert_hook if alert_hook is not None else build_alert_hook(self._config)
        self._engine = diff_engine or VersionDiffEngine(self._config)
        self._clock = clock
        self._new_id = id_factory
        self._metrics: Any = (
            self._config.metrics if self._config.metrics is not None else NoopMetricsHook()
        )

    def close(self) -> None:
        """Release the alert hook if the service created it."""
        if self._owns_alerts:
            close = getattr(self._alerts, "close", None)
            if close is not None:
                close()

    def __enter__(self) -> ResourceVersionService:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    # ── Creation ────────────────────────────────────────────────────────

    def validate_version(self, resource_id: str, version: str) -> None:
        """Check that *version* may be created for *resource_id*.

        Raises
        ------
        VersionValidationError
            If *version* is empty or not a valid semantic version.
        VersionConflictError
            If the resource already has a version with this name.
        """
        parse_version(version)

        if self._store.find_version(resource_id, version) is not None:
            raise VersionConflictError(
                f"Version {version} already exists for resource {resource_id}",
                context={"resource_id": resource_id, "version": version},
            )

    def create(
        self,
        resource_id: str,
        version: str,
        *,
        message: str = "",
        commit_id: str | None = None,
    ) -> ResourceVersion:
        """Snapshot the current state of a resource as *version*.

        The latest block and entity versions of the resource are captured,
        the version is stored, and the alert hook is told which version it
        supersedes.

        Raises
        ------
        VersionValidationError, VersionConflictError
            See :meth:`validate_version`.
        ResourceNotFoundError
            If the resource does not exist.
        UnsupportedResourceTypeError
            If the resource type does not support versioning.
        AlertDeliveryError
            If the alert hook fails.  The version is stored regardless.
        """
        self.validate_version(resource_id, version)

        resource = self._store.get_resource(resource_id)
        if resource is None:
            raise ResourceNotFoundError(
                f"Resource {resource_id} not found",
                context={"resource_id": resource_id},
            )

        if resource.resource_type not in self._config.supported_resource_types:
            log_event(
                log,
                logging.ERROR,
                "resource type does not support versions",
                resource_id=resource_id,
                resource_type=resource.resource_type.value,
            )
            raise UnsupportedResourceTypeError(
                f"Resource version is supported only for "
                f"{', '.join(t.value for t in self._config.supported_resource_types)}, "
                f"but received resource of type {resource.resource_type.value} "
                f"with id {resource_id}",
                context={
                    "resource_id": resource_id,
                    "resource_type": resource.resource_type.value,
                },
            )

        entity_versions = self._store.latest_entity_versions(resource_id)
        block_versions = self._store.latest_block_versions(resource_id)
        previous = self.get_latest(resource_id)

        resource_version = self._store.insert_version(
            ResourceVersion(
                id=self._new_id(),
                resource_id=resource_id,
                version=version,
                created_at=self._clock(),
                message=message,
                commit_id=commit_id,
                block_versions=tuple(block_versions),
                entity_versions=tuple(entity_versions),
            )
        )

        self._metrics.increment(
            "verdiff.versions_created_total", tags={"resource_id": resource_id},
        )
        log_event(
            log,
            logging.INFO,
            "resource version created",
            resource_id=resource_id,
            version=version,
            previous_version=previous.version if previous else None,
            blocks=len(block_versions),
            entities=len(entity_versions),
        )

        self._alerts.version_published(
            resource_id,
            previous.version if previous else None,
            version,
        )

        return resource_version

    # ── Queries ─────────────────────────────────────────────────────────

    def count(self, resource_id: str | None = None) -> int:
        return len(self._store.list_versions(resource_id))

    def find_many(
        self,
        resource_id: str | None = None,
        *,
        skip: int = 0,
        take: int | None = None,
    ) -> list[ResourceVersion]:
        """Return versions newest first, paginated by *skip* / *take*."""
        if skip < 0:
            raise ValueError(f"skip must be >= 0, got {skip}")
        if take is not None and take < 0:
            raise ValueError(f"take must be >= 0, got {take}")

        versions = self._store.list_versions(resource_id)
        end = None if take is None else skip + take
        return versions[skip:end]

    def find_one(self, version_id: str) -> ResourceVersion | None:
        return self._store.get_version(version_id)

    def get_latest(self, resource_id: str) -> ResourceVersion | None:
        """Return the most recently created version of a resource."""
        versions = self._store.list_versions(resource_id)
        return versions[0] if versions else None

    def get_previous_version(
        self, resource_id: str, version: str
    ) -> ResourceVersion | None:
        """Return the version preceding *version* in semver order.

        Returns ``None`` when *version* is the resource's lowest version.

        Raises
        ------
        VersionNotFoundError
            If the resource has no version named *version*.
        """
        versions = self._store.list_versions(resource_id)
        by_name = {rv.version: rv for rv in versions}

        if version not in by_name:
            raise VersionNotFoundError(
                f"Resource version with version {version} not found "
                f"for resource {resource_id}",
                context={"resource_id": resource_id, "version": version},
            )

        previous_name = previous_version(by_name, version)
        if previous_name is None:
            return None
        return by_name[previous_name]

    # ── Comparison ──────────────────────────────────────────────────────

    def compare_resource_versions(
        self,
        resource_id: str,
        target_version: str,
        source_version: str | None = None,
    ) -> DiffResult:
        """Diff the block versions of two versions of a resource.

        When *source_version* is omitted, the version preceding
        *target_version* is used; if there is none, every block of the
        target is reported as created.

        Raises
        ------
        VersionNotFoundError
            If *target_version*, or an explicitly given *source_version*,
            does not exist.
        """
        target = self._require_version(resource_id, target_version)

        if source_version is not None:
            source: ResourceVersion | None = self._require_version(
                resource_id, source_version
            )
        else:
            source = self.get_previous_version(resource_id, target_version)

        source_blocks = self._store.block_versions_for(source.id) if source else []
        target_blocks = self._store.block_versions_for(target.id)

        result = self._engine.diff(source_blocks, target_blocks)
        log_event(
            log,
            logging.INFO,
            "resource versions compared",
            resource_id=resource_id,
            source_version=source.version if source else None,
            target_version=target_version,
            **result.counts(),
        )
        return result

    def _require_version(self, resource_id: str, version: str) -> ResourceVersion:
        resource_version = self._store.find_version(resource_id, version)
        if resource_version is None:
            raise VersionNotFoundError(
                f"Resource version with version {version} not found "
                f"for resource {resource_id}",
                context={"resource_id": resource_id, "version": version},
            )
        return resource_version
