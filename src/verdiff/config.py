"""Library configuration for verdiff.

:class:`VerdiffConfig` is a plain dataclass that captures every tuneable
knob.  Instances are passed to :class:`VersionDiffEngine` and
:class:`ResourceVersionService`.

:data:`DEFAULT_VERSIONED_RESOURCE_TYPES` lists the resource types for which
versions may be created when nothing else is configured.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any

from verdiff.models import ResourceType

DEFAULT_VERSIONED_RESOURCE_TYPES: list[ResourceType] = [
    ResourceType.SERVICE_TEMPLATE,
]
"""Resource types that support versioning out of the box."""


@dataclass
class VerdiffConfig:
    """Complete configuration for verdiff.

    Every parameter has a default, so ``VerdiffConfig()`` is usable as is.

    Parameters
    ----------
    diff_check_duplicates:
        Raise :class:`InvalidInputError` when a diff input holds the same
        entity id twice.  When disabled, the last occurrence wins.
    supported_resource_types:
        Resource types for which :meth:`ResourceVersionService.create`
        accepts new versions.
    alert_webhook_url:
        If set, publishing a version POSTs an alert to this URL.
    alert_timeout_seconds:
        HTTP timeout for the alert webhook.
    alert_headers:
        Extra headers sent with the alert webhook (e.g. ``Authorization``).
        Values are never logged.
    metrics:
        A :class:`MetricsHook` implementation, or ``None`` for the no-op hook.
    debug_dump_diff:
        Write every diff result as JSON to *stderr*.
    """

    # ── Diff ────────────────────────────────────────────────────────────
    diff_check_duplicates: bool = True

    # ── Versioning ──────────────────────────────────────────────────────
    supported_resource_types: list[ResourceType] = field(
        default_factory=lambda: list(DEFAULT_VERSIONED_RESOURCE_TYPES),
    )

    # ── Alerts ──────────────────────────────────────────────────────────
    alert_webhook_url: str | None = None

    alert_timeout_seconds: float = 10.0

    alert_headers: dict[str, str] = field(default_factory=dict)

    # ── Observability ──────────────────────────────────────────────────
    metrics: Any | None = None

    # ── Debug ───────────────────────────────────────────────────────────
    debug_dump_diff: bool = False

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        from urllib.parse import urlparse

        if self.alert_webhook_url is not None:
            parsed = urlparse(self.alert_webhook_url)
            if parsed.scheme not in ("http", "https"):
                raise ValueError(
                    f"alert_webhook_url must be an http(s) URL, got '{self.alert_webhook_url}'"
                )
            if parsed.scheme == "http" and parsed.hostname not in (
                "localhost",
                "127.0.0.1",
                "::1",
            ):
                raise ValueError(
                    f"alert_webhook_url uses insecure HTTP for non-local host "
                    f"'{parsed.hostname}'. Use HTTPS, or target localhost for testing."
                )

        if self.alert_timeout_seconds <= 0:
            raise ValueError(
                f"alert_timeout_seconds must be > 0, got {self.alert_timeout_seconds}"
            )

    def __repr__(self) -> str:
        """Mask header values to prevent accidental credential leakage."""
        parts: list[str] = []
        for f in dataclasses.fields(self):
            val = getattr(self, f.name)
            if f.name == "alert_headers":
                masked = {k: "****" for k in val}
                parts.append(f"alert_headers={masked!r}")
            else:
                parts.append(f"{f.name}={val!r}")
        return f"VerdiffConfig({', '.join(parts)})"
