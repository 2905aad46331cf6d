"""Constants for domain model field names"""

from .device_fields import DeviceFields
from .kubernetes_labels import KubernetesLabels

__all__ = [
    "DeviceFields",
    "KubernetesLabels",
]
