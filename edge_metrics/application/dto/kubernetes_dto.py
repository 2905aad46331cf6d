from typing import Dict, List, Optional

from pydantic import BaseModel

from ...domain.models.bulk import SyncOutcome
from ...domain.models.orchestration import EndpointsInfo, NamedPort, ServiceInfo


class SyncRequest(BaseModel):
    """DTO for a namespace-wide sync request"""
    namespace: Optional[str] = None  # Defaults to the configured namespace


class SyncResultResponse(BaseModel):
    """One device's sync / delete outcome"""
    device_id: str
    service: str
    status: str
    service_status: Optional[str] = None
    endpoints_status: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def from_outcome(cls, outcome: SyncOutcome) -> "SyncResultResponse":
        return cls(
            device_id=outcome.device_id,
            service=outcome.service,
            status=outcome.action.value,
            service_status=outcome.service_action.value if outcome.service_action else None,
            endpoints_status=outcome.endpoints_action.value if outcome.endpoints_action else None,
            error=outcome.error,
        )


class KubernetesSyncResponse(BaseModel):
    status: str
    namespace: str
    created: List[SyncResultResponse]
    updated: List[SyncResultResponse]
    unchanged: List[SyncResultResponse]
    deleted: List[SyncResultResponse]
    skipped: List[SyncResultResponse]
    failed: List[SyncResultResponse]
    total: int
    total_healthy: int


class KubernetesResourceStatus(BaseModel):
    device_id: str
    service_exists: bool
    endpoints_exists: bool
    synced: bool
    error: Optional[str] = None


class KubernetesStatusResponse(BaseModel):
    kubernetes_enabled: bool
    namespace: str
    total_k8s_resources: int
    total_registered_devices: int
    synced: int
    unsynced: int
    resources: List[KubernetesResourceStatus]


class KubernetesHealthResponse(BaseModel):
    namespace: str
    kubernetes_available: bool
    client_initialized: bool
    namespace_accessible: bool
    rbac_permissions: Dict[str, str]


class KubernetesPort(BaseModel):
    name: str
    port: int
    target_port: Optional[int] = None

    @classmethod
    def from_port(cls, port: NamedPort) -> "KubernetesPort":
        return cls(name=port.name, port=port.port, target_port=port.target_port)


class KubernetesServiceInfo(BaseModel):
    name: str
    exists: bool
    cluster_ip: Optional[str] = None
    ports: List[KubernetesPort] = []

    @classmethod
    def from_info(cls, info: ServiceInfo) -> "KubernetesServiceInfo":
        return cls(
            name=info.name,
            exists=info.exists,
            cluster_ip=info.cluster_ip,
            ports=[KubernetesPort.from_port(port) for port in info.ports],
        )


class KubernetesEndpointsInfo(BaseModel):
    name: str
    exists: bool
    ready_addresses: List[str] = []
    not_ready_addresses: List[str] = []
    ports: List[KubernetesPort] = []

    @classmethod
    def from_info(cls, info: EndpointsInfo) -> "KubernetesEndpointsInfo":
        return cls(
            name=info.name,
            exists=info.exists,
            ready_addresses=list(info.ready_addresses),
            not_ready_addresses=list(info.not_ready_addresses),
            ports=[KubernetesPort.from_port(port) for port in info.ports],
        )


class KubernetesDeviceResourcesResponse(BaseModel):
    device_id: str
    namespace: str
    synced: bool
    service: KubernetesServiceInfo
    endpoints: KubernetesEndpointsInfo
    prometheus_target: Optional[str] = None


class CleanupFailure(BaseModel):
    kind: str
    name: str
    error: str


class KubernetesCleanupResponse(BaseModel):
    status: str
    namespace: str
    deleted_services: List[str]
    deleted_endpoints: List[str]
    failed: List[CleanupFailure] = []
