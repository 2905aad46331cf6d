"""
Fixtures for API tests: the app runs its real lifespan against a mocked
container, so no MongoDB or Kubernetes is needed.
"""
from contextlib import ExitStack
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from edge_metrics.domain.repositories.device_repository import DeviceRepository
from edge_metrics.infrastructure.external.kubernetes_client import KubernetesClient


@pytest.fixture
def make_client():
    """
    Build a TestClient whose controllers resolve use cases from `use_cases`.

    Usage: make_client({SomeUseCase: mock}, "config_controller")
    """
    stack = ExitStack()

    def build(use_cases, *controllers):
        services = {
            DeviceRepository: AsyncMock(),
            KubernetesClient: AsyncMock(),
            **use_cases,
        }
        container = MagicMock()
        container.get.side_effect = lambda cls: services.get(cls, None)

        from edge_metrics.main import app

        stack.enter_context(patch("edge_metrics.main.get_container", return_value=container))
        for controller in controllers:
            stack.enter_context(
                patch(f"edge_metrics.api.v1.{controller}.get_container", return_value=container)
            )
        return stack.enter_context(TestClient(app))

    yield build
    stack.close()
