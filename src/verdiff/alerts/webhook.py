"""JSON webhook delivery of version-published alerts.

Consumers that track resources built from an older template version use
these alerts to flag themselves as outdated.  The payload::

    {"event": "resource_version.published",
     "resource_id": "tpl-1",
     "previous_version": "1.1.0",
     "new_version": "1.2.0"}

``previous_version`` is ``null`` for the first version of a resource.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from verdiff.errors import AlertDeliveryError
from verdiff.observability import NoopMetricsHook, get_logger, log_event

log = get_logger("verdiff.alerts")

EVENT_VERSION_PUBLISHED = "resource_version.published"


class WebhookAlertHook:
    """POST version-published alerts to a fixed URL.

    Parameters
    ----------
    url:
        Endpoint receiving the JSON payload.
    headers:
        Extra request headers (e.g. ``Authorization``).
    timeout:
        Request timeout in seconds.
    client:
        An existing :class:`httpx.Client`.  When omitted the hook creates
        and owns one, closing it in :meth:`close`.
    metrics:
        A :class:`MetricsHook`, or ``None`` for the no-op hook.
    """

    def __init__(
        self,
        url: str,
        *,
        headers: dict[str, str] | None = None,
        timeout: float = 10.0,
        client: httpx.Client | None = None,
        metrics: Any | None = None,
    ) -> None:
        if not url:
            raise ValueError("Webhook url must not be empty")
        self._url = url
        self._headers = {"Content-Type": "application/json", **(headers or {})}
        self._owns_client = client is None
        self._client = client if client is not None else httpx.Client(timeout=timeout)
        self._metrics = metrics if metrics is not None else NoopMetricsHook()

    def version_published(
        self,
        resource_id: str,
        previous_version: str | None,
        new_version: str,
    ) -> None:
        """Deliver one alert.

        Raises
        ------
        AlertDeliveryError
            On a transport failure or a non-2xx response.
        """
        payload = build_payload(resource_id, previous_version, new_version)
        try:
            response = self._client.post(self._url, json=payload, headers=self._headers)
        except httpx.HTTPError as exc:
            self._metrics.increment("verdiff.alert_failures_total")
            raise AlertDeliveryError(
                message=f"Alert delivery to {self._url} failed: {exc}",
                context={"url": self._url},
                cause=exc,
            ) from exc

        if not response.is_success:
            self._metrics.increment("verdiff.alert_failures_total")
            raise AlertDeliveryError(
                message=(
                    f"Alert delivery to {self._url} returned HTTP {response.status_code}"
                ),
                context={"url": self._url, "status_code": response.status_code},
            )

        self._metrics.increment("verdiff.alerts_sent_total")
        log_event(
            log,
            logging.INFO,
            "version alert delivered",
            resource_id=resource_id,
            new_version=new_version,
            status_code=response.status_code,
        )

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> WebhookAlertHook:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()


def build_payload(
    resource_id: str,
    previous_version: str | None,
    new_version: str,
) -> dict[str, Any]:
    return {
        "event": EVENT_VERSION_PUBLISHED,
        "resource_id": resource_id,
        "previous_version": previous_version,
        "new_version": new_version,
    }
