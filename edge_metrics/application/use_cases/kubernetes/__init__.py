from .get_device_resources import GetDeviceResourcesUseCase
from .get_namespace_sync_status import GetNamespaceSyncStatusUseCase
from .check_kubernetes_health import CheckKubernetesHealthUseCase
from .sync_device import SyncDeviceUseCase
from .sync_all_devices import SyncAllDevicesUseCase
from .delete_device_resources import DeleteDeviceResourcesUseCase
from .cleanup_namespace import CleanupNamespaceUseCase
from .render_manifests import RenderManifestsUseCase

__all__ = [
    "GetDeviceResourcesUseCase",
    "GetNamespaceSyncStatusUseCase",
    "CheckKubernetesHealthUseCase",
    "SyncDeviceUseCase",
    "SyncAllDevicesUseCase",
    "DeleteDeviceResourcesUseCase",
    "CleanupNamespaceUseCase",
    "RenderManifestsUseCase",
]
