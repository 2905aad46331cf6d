"""
Shared pytest fixtures for edge metrics server tests.
"""
import os
from unittest.mock import patch

import pytest

from edge_metrics.application.services.fleet_prober import FleetProber
from edge_metrics.application.services.fleet_synchronizer import FleetSynchronizer
from edge_metrics.application.services.resource_builder import ResourceBuilder
from edge_metrics.application.services.resource_mirror import ResourceMirror
from tests.fakes import NAMESPACE, FakeDeviceClient, FakeKubernetesClient, InMemoryDeviceRepository


@pytest.fixture
def mock_env():
    """Fixture to set common test environment variables."""
    env_vars = {
        "MONGO_URI": "mongodb://localhost:27017",
        "MONGO_DB_NAME": "test_edge_metrics",
        "K8S_API_URL": "https://kubernetes.test",
        "K8S_NAMESPACE": NAMESPACE,
        "BULK_CONCURRENCY_LIMIT": "4",
    }
    with patch.dict(os.environ, env_vars, clear=False):
        yield env_vars


@pytest.fixture
def repository():
    return InMemoryDeviceRepository()


@pytest.fixture
def k8s():
    return FakeKubernetesClient()


@pytest.fixture
def device_client():
    return FakeDeviceClient()


@pytest.fixture
def builder():
    return ResourceBuilder(prefix="edge-device-")


@pytest.fixture
def mirror(k8s, builder):
    return ResourceMirror(kubernetes_client=k8s, builder=builder)


@pytest.fixture
def prober(device_client):
    return FleetProber(device_client=device_client, concurrency_limit=4)


@pytest.fixture
def synchronizer(repository, prober, mirror):
    return FleetSynchronizer(
        device_repository=repository,
        prober=prober,
        mirror=mirror,
        concurrency_limit=4,
    )
