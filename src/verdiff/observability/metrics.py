"""Metrics hook protocol and the no-op default.

verdiff reports counters at a few points of interest.  Without a configured
backend a :class:`NoopMetricsHook` is used, so call sites never need to
check for ``None``.  Any object satisfying :class:`MetricsHook` can route
the data to StatsD, Prometheus, Datadog, etc.

Emitted metric names:

* ``verdiff.diff_items_total``        -- counter, tagged ``change``
* ``verdiff.versions_created_total``  -- counter, tagged ``resource_id``
* ``verdiff.alerts_sent_total``       -- counter
* ``verdiff.alert_failures_total``    -- counter
* ``verdiff.diff_duration_ms``        -- timing
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class MetricsHook(Protocol):
    """Protocol that any metrics backend must satisfy.

    *tags* are string key/value pairs that the backend may map onto its own
    tagging or labelling scheme.
    """

    def increment(
        self,
        name: str,
        value: int = 1,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Increment the counter *name* by *value*."""
        ...

    def timing(
        self,
        name: str,
        ms: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Record a duration of *ms* milliseconds."""
        ...


class NoopMetricsHook:
    """Metrics backend that discards every data point."""

    __slots__ = ()

    def increment(
        self,
        name: str,
        value: int = 1,
        tags: dict[str, str] | None = None,
    ) -> None:
        pass

    def timing(
        self,
        name: str,
        ms: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        pass
