"""External service clients for communicating with external systems"""

from .device_client import DeviceClient
from .kubernetes_client import KubernetesClient

__all__ = [
    "DeviceClient",
    "KubernetesClient",
]
