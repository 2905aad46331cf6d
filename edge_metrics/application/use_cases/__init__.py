from .device import (
    ListDeviceConfigsUseCase,
    GetDeviceConfigUseCase,
    CreateDeviceConfigUseCase,
    UpdateDeviceConfigUseCase,
    PatchDeviceConfigUseCase,
    UpdateDeviceIdentityUseCase,
    DeleteDeviceConfigUseCase,
    ListDeviceStatesUseCase,
    GetDeviceStatusUseCase,
    GetDeviceLocalConfigUseCase,
    ReloadDeviceUseCase,
    BulkReloadDevicesUseCase,
    GetMetricsSummaryUseCase,
)
from .kubernetes import (
    GetDeviceResourcesUseCase,
    GetNamespaceSyncStatusUseCase,
    CheckKubernetesHealthUseCase,
    SyncDeviceUseCase,
    SyncAllDevicesUseCase,
    DeleteDeviceResourcesUseCase,
    CleanupNamespaceUseCase,
    RenderManifestsUseCase,
)

__all__ = [
    "ListDeviceConfigsUseCase",
    "GetDeviceConfigUseCase",
    "CreateDeviceConfigUseCase",
    "UpdateDeviceConfigUseCase",
    "PatchDeviceConfigUseCase",
    "UpdateDeviceIdentityUseCase",
    "DeleteDeviceConfigUseCase",
    "ListDeviceStatesUseCase",
    "GetDeviceStatusUseCase",
    "GetDeviceLocalConfigUseCase",
    "ReloadDeviceUseCase",
    "BulkReloadDevicesUseCase",
    "GetMetricsSummaryUseCase",
    "GetDeviceResourcesUseCase",
    "GetNamespaceSyncStatusUseCase",
    "CheckKubernetesHealthUseCase",
    "SyncDeviceUseCase",
    "SyncAllDevicesUseCase",
    "DeleteDeviceResourcesUseCase",
    "CleanupNamespaceUseCase",
    "RenderManifestsUseCase",
]
