"""Version diff: partition two versioned collections.

Given the items of a source snapshot and a target snapshot, items are
matched by entity id and sorted into three buckets:

- **created**: entity only present in the target.
- **updated**: entity present on both sides with different version numbers.
- **deleted**: entity only present in the source.

Entities present on both sides with the same version number are unchanged
and appear in no bucket.
"""

from __future__ import annotations

import json
import logging
import sys
import time
from collections.abc import Callable, Iterable
from typing import Any

from verdiff.config import VerdiffConfig
from verdiff.models import DiffResult, UpdatedPair
from verdiff.observability import NoopMetricsHook, get_logger, log_event

from .index import default_entity_key, default_version_key, index_by_entity

log = get_logger("verdiff.diff")


def diff_versions(
    source: Iterable[Any],
    target: Iterable[Any],
    *,
    entity_key: Callable[[Any], Any] = default_entity_key,
    version_key: Callable[[Any], Any] = default_version_key,
    check_duplicates: bool = True,
) -> DiffResult:
    """Compute the created/updated/deleted partition of *source* -> *target*.

    ``deleted`` and ``updated`` follow the iteration order of *source*;
    ``created`` follows the iteration order of *target*.  The function is
    pure: inputs are not modified and nothing is retained after the call.

    Parameters
    ----------
    source:
        Items of the older snapshot.
    target:
        Items of the newer snapshot.
    entity_key:
        Extracts the stable entity id.  Defaults to ``item.entity_id``.
    version_key:
        Extracts the version marker.  Defaults to ``item.version_number``.
    check_duplicates:
        Reject collections that repeat an entity id.

    Returns
    -------
    DiffResult

    Raises
    ------
    InvalidInputError
        If *check_duplicates* is set and either side repeats an entity id.
    """
    source_index = index_by_entity(
        source, entity_key=entity_key, side="source", check_duplicates=check_duplicates,
    )
    target_index = index_by_entity(
        target, entity_key=entity_key, side="target", check_duplicates=check_duplicates,
    )

    result = DiffResult()

    for key, source_item in source_index.items():
        if key not in target_index:
            result.deleted.append(source_item)
            continue
        target_item = target_index[key]
        if version_key(source_item) != version_key(target_item):
            result.updated.append(UpdatedPair(source=source_item, target=target_item))

    for key, target_item in target_index.items():
        if key not in source_index:
            result.created.append(target_item)

    return result


class VersionDiffEngine:
    """Config-aware front end to :func:`diff_versions`.

    Adds a debug log record and metrics for every diff, and the optional
    JSON dump controlled by ``config.debug_dump_diff``.

    Parameters
    ----------
    config:
        Library configuration.
    """

    def __init__(self, config: VerdiffConfig | None = None) -> None:
        self._config = config or VerdiffConfig()
        self._metrics = (
            self._config.metrics if self._config.metrics is not None else NoopMetricsHook()
        )

    def diff(
        self,
        source: Iterable[Any],
        target: Iterable[Any],
        *,
        entity_key: Callable[[Any], Any] = default_entity_key,
        version_key: Callable[[Any], Any] = default_version_key,
    ) -> DiffResult:
        """Diff *source* against *target*.  See :func:`diff_versions`."""
        started = time.monotonic()
        result = diff_versions(
            source,
            target,
            entity_key=entity_key,
            version_key=version_key,
            check_duplicates=self._config.diff_check_duplicates,
        )
        elapsed_ms = (time.monotonic() - started) * 1000

        counts = result.counts()
        for change, count in counts.items():
            if count:
                self._metrics.increment(
                    "verdiff.diff_items_total", count, tags={"change": change},
                )
        self._metrics.timing("verdiff.diff_duration_ms", elapsed_ms)
        log_event(log, logging.DEBUG, "diff computed", **counts)

        if self._config.debug_dump_diff:
            _dump_diff(result, entity_key, version_key)

        return result


def _dump_diff(
    result: DiffResult,
    entity_key: Callable[[Any], Any],
    version_key: Callable[[Any], Any],
) -> None:
    """Write the entity ids and versions of *result* to stderr as JSON."""

    def describe(item: Any) -> dict[str, Any]:
        return {"entity_id": entity_key(item), "version": version_key(item)}

    dump = {
        "created": [describe(item) for item in result.created],
        "updated": [
            {"source": describe(pair.source), "target": describe(pair.target)}
            for pair in result.updated
        ],
        "deleted": [describe(item) for item in result.deleted],
    }
    print(json.dumps(dump, indent=2, default=str), file=sys.stderr)
