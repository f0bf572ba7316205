"""Alerts raised when a new resource version is published.

Services generated from a template need to learn that a newer template
version exists.  :class:`ResourceVersionService` calls an :class:`AlertHook`
after every successful version creation.  The default is
:class:`NoopAlertHook`; :class:`WebhookAlertHook` delivers over HTTP.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from verdiff.config import VerdiffConfig

from .webhook import EVENT_VERSION_PUBLISHED, WebhookAlertHook, build_payload


@runtime_checkable
class AlertHook(Protocol):
    """Receiver of version-published notifications."""

    def version_published(
        self,
        resource_id: str,
        previous_version: str | None,
        new_version: str,
    ) -> None:
        """Called once the version *new_version* of *resource_id* exists.

        *previous_version* is the latest version before this one, or
        ``None`` for a resource's first version.
        """
        ...


class NoopAlertHook:
    """Alert hook that ignores every notification."""

    __slots__ = ()

    def version_published(
        self,
        resource_id: str,
        previous_version: str | None,
        new_version: str,
    ) -> None:
        pass


def build_alert_hook(config: VerdiffConfig) -> AlertHook:
    """Return the alert hook described by *config*."""
    if config.alert_webhook_url:
        return WebhookAlertHook(
            config.alert_webhook_url,
            headers=config.alert_headers,
            timeout=config.alert_timeout_seconds,
            metrics=config.metrics,
        )
    return NoopAlertHook()


__all__ = [
    "EVENT_VERSION_PUBLISHED",
    "AlertHook",
    "NoopAlertHook",
    "WebhookAlertHook",
    "build_alert_hook",
    "build_payload",
]
