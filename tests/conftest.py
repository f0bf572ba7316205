"""Shared test fixtures for the verdiff test suite."""

from __future__ import annotations

import pytest

from factories import (
    SERVICE_ID,
    TEMPLATE_ID,
    RecordingAlertHook,
    RecordingMetrics,
    StepClock,
)
from verdiff.config import VerdiffConfig
from verdiff.models import Resource, ResourceType
from verdiff.versioning import InMemoryVersionStore, ResourceVersionService


@pytest.fixture
def metrics() -> RecordingMetrics:
    return RecordingMetrics()


@pytest.fixture
def config(metrics: RecordingMetrics) -> VerdiffConfig:
    """Default test configuration wired to the recording metrics hook."""
    return VerdiffConfig(metrics=metrics)


@pytest.fixture
def store() -> InMemoryVersionStore:
    """Store holding one service template and one plain service."""
    store = InMemoryVersionStore()
    store.add_resource(Resource(TEMPLATE_ID, "Billing template", ResourceType.SERVICE_TEMPLATE))
    store.add_resource(Resource(SERVICE_ID, "Billing", ResourceType.SERVICE))
    return store


@pytest.fixture
def alerts() -> RecordingAlertHook:
    return RecordingAlertHook()


@pytest.fixture
def service(
    store: InMemoryVersionStore,
    config: VerdiffConfig,
    alerts: RecordingAlertHook,
) -> ResourceVersionService:
    """Service with a stepping clock and sequential ids ``rv-1``, ``rv-2``, ..."""
    ids = iter(f"rv-{n}" for n in range(1, 1000))
    return ResourceVersionService(
        store,
        config,
        alert_hook=alerts,
        clock=StepClock(),
        id_factory=lambda: next(ids),
    )
