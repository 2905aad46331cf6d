# Standard library imports
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union

# Local application imports
from ..constants import KubernetesLabels


@dataclass(frozen=True)
class NamedPort:
    """A named port on a Service or an Endpoints subset."""
    name: str
    port: int
    target_port: Optional[int] = None


@dataclass
class ServiceInfo:
    """Observed state of a device's Service resource."""
    name: str
    exists: bool
    cluster_ip: Optional[str] = None
    ports: List[NamedPort] = field(default_factory=list)
    labels: Dict[str, str] = field(default_factory=dict)
    annotations: Dict[str, str] = field(default_factory=dict)
    resource_version: Optional[str] = None

    def port_named(self, name: str) -> Optional[NamedPort]:
        for port in self.ports:
            if port.name == name:
                return port
        return None


@dataclass
class EndpointsInfo:
    """Observed state of a device's Endpoints resource."""
    name: str
    exists: bool
    ready_addresses: List[str] = field(default_factory=list)
    not_ready_addresses: List[str] = field(default_factory=list)
    ports: List[NamedPort] = field(default_factory=list)
    labels: Dict[str, str] = field(default_factory=dict)
    annotations: Dict[str, str] = field(default_factory=dict)
    resource_version: Optional[str] = None


@dataclass
class ResourcePair:
    """
    The Service + Endpoints mirrored for one device.

    A device is synced only when both resources exist. One resource without
    the other is a normal, observable unsynced state.
    """
    device_id: str
    service: ServiceInfo
    endpoints: EndpointsInfo

    @property
    def synced(self) -> bool:
        return self.service.exists and self.endpoints.exists

    @property
    def any_exists(self) -> bool:
        return self.service.exists or self.endpoints.exists

    def metrics_target(self, metrics_path: str = "/metrics") -> Optional[str]:
        """host:port/path a scraper would hit, when the mapping is complete."""
        if not self.synced or not self.endpoints.ready_addresses:
            return None
        port = self.service.port_named(KubernetesLabels.METRICS_PORT_NAME)
        if port is None:
            return None
        target_port = port.target_port or port.port
        return f"{self.endpoints.ready_addresses[0]}:{target_port}{metrics_path}"


# -----------------------------------------------------------------------------
# Lookup result: resources observed (present or absent) vs. platform unavailable
# -----------------------------------------------------------------------------


@dataclass
class MirrorObservation:
    """The platform answered; the pair may be fully, partly or not present."""
    pair: ResourcePair

    @property
    def synced(self) -> bool:
        return self.pair.synced


@dataclass
class MirrorUnavailable:
    """The platform could not be asked. Not the same thing as 'absent'."""
    device_id: str
    reason: str
    status_code: Optional[int] = None


MirrorLookup = Union[MirrorObservation, MirrorUnavailable]


@dataclass
class ManagedResource:
    """A Service or Endpoints found by listing this service's label selector."""
    kind: str
    name: str
    device_id: str


@dataclass
class ManagedResourceIndex:
    """Managed resources in a namespace, keyed by device id."""
    namespace: str
    services: Dict[str, ManagedResource] = field(default_factory=dict)
    endpoints: Dict[str, ManagedResource] = field(default_factory=dict)

    def device_ids(self) -> List[str]:
        seen: Dict[str, None] = {}
        for device_id in list(self.services) + list(self.endpoints):
            seen.setdefault(device_id, None)
        return list(seen)

    def complete_pair_ids(self) -> List[str]:
        """Device ids with both a Service and an Endpoints object."""
        return [device_id for device_id in self.services if device_id in self.endpoints]


# -----------------------------------------------------------------------------
# Reconciliation reports
# -----------------------------------------------------------------------------


@dataclass
class DeviceSyncEntry:
    """One row of the namespace sync report."""
    device_id: str
    service_exists: bool
    endpoints_exists: bool
    error: Optional[str] = None

    @property
    def synced(self) -> bool:
        return self.service_exists and self.endpoints_exists


@dataclass
class NamespaceSyncStatus:
    namespace: str
    total_registered: int
    total_k8s_resource_pairs_observed: int
    devices: List[DeviceSyncEntry] = field(default_factory=list)

    @property
    def synced_count(self) -> int:
        return sum(1 for entry in self.devices if entry.synced)

    @property
    def unsynced_count(self) -> int:
        return len(self.devices) - self.synced_count


@dataclass
class OrchestrationHealth:
    """
    Independent platform checks. `kubernetes_available` tracks reachability
    only; credential, namespace and per-kind RBAC results are reported beside it.
    """
    namespace: str
    kubernetes_available: bool = False
    client_initialized: bool = False
    namespace_accessible: bool = False
    rbac_permissions: Dict[str, str] = field(default_factory=dict)
