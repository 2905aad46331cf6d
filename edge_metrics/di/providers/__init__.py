from .database_provider import DatabaseProvider
from .repository_provider import RepositoryProvider
from .infrastructure_provider import InfrastructureProvider
from .device_provider import DeviceProvider
from .kubernetes_provider import KubernetesProvider


__all__ = [
    "DatabaseProvider",
    "RepositoryProvider",
    "InfrastructureProvider",
    "DeviceProvider",
    "KubernetesProvider",
]
