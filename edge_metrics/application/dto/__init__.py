from .device_dto import (
    DeviceConfigRequest,
    DeviceConfigPatchRequest,
    DeviceIdentityUpdateRequest,
    ConfigsResponse,
    ConfigMutationResponse,
    DeviceStateResponse,
    DevicesResponse,
    MetricsSummaryResponse,
    ReloadResultResponse,
    BulkReloadRequest,
    BulkReloadResponse,
    HealthResponse,
)
from .kubernetes_dto import (
    SyncRequest,
    SyncResultResponse,
    KubernetesSyncResponse,
    KubernetesResourceStatus,
    KubernetesStatusResponse,
    KubernetesHealthResponse,
    KubernetesPort,
    KubernetesServiceInfo,
    KubernetesEndpointsInfo,
    KubernetesDeviceResourcesResponse,
    CleanupFailure,
    KubernetesCleanupResponse,
)

__all__ = [
    "DeviceConfigRequest",
    "DeviceConfigPatchRequest",
    "DeviceIdentityUpdateRequest",
    "ConfigsResponse",
    "ConfigMutationResponse",
    "DeviceStateResponse",
    "DevicesResponse",
    "MetricsSummaryResponse",
    "ReloadResultResponse",
    "BulkReloadRequest",
    "BulkReloadResponse",
    "HealthResponse",
    "SyncRequest",
    "SyncResultResponse",
    "KubernetesSyncResponse",
    "KubernetesResourceStatus",
    "KubernetesStatusResponse",
    "KubernetesHealthResponse",
    "KubernetesPort",
    "KubernetesServiceInfo",
    "KubernetesEndpointsInfo",
    "KubernetesDeviceResourcesResponse",
    "CleanupFailure",
    "KubernetesCleanupResponse",
]
