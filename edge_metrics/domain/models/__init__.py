from .device import (
    Device,
    DeviceType,
    DeviceExtension,
    JetsonExtension,
    BoardExtension,
    ShellyExtension,
)
from .device_state import DeviceState, DeviceStatus
from .orchestration import (
    NamedPort,
    ServiceInfo,
    EndpointsInfo,
    ResourcePair,
    MirrorObservation,
    MirrorUnavailable,
    MirrorLookup,
    ManagedResource,
    ManagedResourceIndex,
    DeviceSyncEntry,
    NamespaceSyncStatus,
    OrchestrationHealth,
)
from .bulk import (
    SyncAction,
    ResourceAction,
    SyncOutcome,
    BulkSyncResult,
    ReloadStatus,
    ReloadResult,
    BulkReloadResult,
    CleanupResult,
)

__all__ = [
    "Device",
    "DeviceType",
    "DeviceExtension",
    "JetsonExtension",
    "BoardExtension",
    "ShellyExtension",
    "DeviceState",
    "DeviceStatus",
    "NamedPort",
    "ServiceInfo",
    "EndpointsInfo",
    "ResourcePair",
    "MirrorObservation",
    "MirrorUnavailable",
    "MirrorLookup",
    "ManagedResource",
    "ManagedResourceIndex",
    "DeviceSyncEntry",
    "NamespaceSyncStatus",
    "OrchestrationHealth",
    "SyncAction",
    "ResourceAction",
    "SyncOutcome",
    "BulkSyncResult",
    "ReloadStatus",
    "ReloadResult",
    "BulkReloadResult",
    "CleanupResult",
]
