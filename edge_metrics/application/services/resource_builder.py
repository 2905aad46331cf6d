# Standard library imports
import hashlib
import re
from typing import Any, Dict, List, Optional, Set, Tuple

# Local application imports
from ...domain.constants import KubernetesLabels
from ...domain.models.device import Device
from ...domain.models.orchestration import EndpointsInfo, NamedPort, ServiceInfo

_DNS_LABEL_MAX = 63
_INVALID_NAME_CHARS = re.compile(r"[^a-z0-9-]+")
_INVALID_LABEL_CHARS = re.compile(r"[^A-Za-z0-9_.-]+")


def _short_hash(value: str) -> str:
    return hashlib.sha1(value.encode("utf-8")).hexdigest()[:8]


def sanitize_label_value(value: str) -> str:
    """Label values: at most 63 chars of [A-Za-z0-9_.-], alphanumeric at both ends."""
    cleaned = _INVALID_LABEL_CHARS.sub("-", value)
    if len(cleaned) > _DNS_LABEL_MAX:
        cleaned = f"{cleaned[:_DNS_LABEL_MAX - 9]}-{_short_hash(value)}"
    return cleaned.strip("-_.")


class ResourceBuilder:
    """
    Naming convention and desired manifests for a device's Service/Endpoints.

    Both resources share one name, `<prefix><device_id>` reduced to a DNS-1035
    label. The Service has no selector; its Endpoints object points straight
    at the device IP, which is how an off-cluster host becomes a scrape target.
    """

    def __init__(self, prefix: str = "edge-device-") -> None:
        self.prefix = prefix

    # ------------------------------------------------------------------
    # Naming
    # ------------------------------------------------------------------

    def name_for(self, device_id: str) -> str:
        """
        Resource name for a device id.

        Ids that are already valid DNS-1035 labels keep a readable name. Any id
        that had to be rewritten (case, characters, length) gets a hash suffix
        of the original id, so two distinct ids never share a name.
        """
        verbatim = f"{self.prefix}{device_id}"
        name = _INVALID_NAME_CHARS.sub("-", verbatim.lower())
        name = re.sub(r"-{2,}", "-", name).strip("-")
        if name == verbatim and len(name) <= _DNS_LABEL_MAX:
            return name
        stem = name[:_DNS_LABEL_MAX - 9].rstrip("-")
        return f"{stem}-{_short_hash(device_id)}"

    def device_id_of(self, name: str, annotations: Dict[str, str]) -> str:
        """Map an observed resource back to the device id it was written for."""
        device_id = annotations.get(KubernetesLabels.DEVICE_ID_ANNOTATION)
        if device_id:
            return device_id
        if name.startswith(self.prefix):
            return name[len(self.prefix):]
        return name

    # ------------------------------------------------------------------
    # Desired state
    # ------------------------------------------------------------------

    def labels_for(self, device: Device) -> Dict[str, str]:
        return {
            KubernetesLabels.MANAGED_BY: KubernetesLabels.MANAGED_BY_VALUE,
            KubernetesLabels.COMPONENT: KubernetesLabels.COMPONENT_VALUE,
            KubernetesLabels.DEVICE_ID: sanitize_label_value(device.device_id),
            KubernetesLabels.DEVICE_TYPE: device.device_type.value,
        }

    def annotations_for(self, device: Device) -> Dict[str, str]:
        return {KubernetesLabels.DEVICE_ID_ANNOTATION: device.device_id}

    def desired_ports(self, device: Device) -> List[NamedPort]:
        ports = [NamedPort(KubernetesLabels.METRICS_PORT_NAME, device.port, device.port)]
        # A Service may not expose the same port number twice
        if device.reload_port != device.port:
            ports.append(
                NamedPort(KubernetesLabels.RELOAD_PORT_NAME, device.reload_port, device.reload_port)
            )
        return ports

    def _metadata(self, device: Device, namespace: str) -> Dict[str, Any]:
        return {
            "name": self.name_for(device.device_id),
            "namespace": namespace,
            "labels": self.labels_for(device),
            "annotations": self.annotations_for(device),
        }

    def build_service(
        self,
        device: Device,
        namespace: str,
        observed: Optional[ServiceInfo] = None,
    ) -> Dict[str, Any]:
        """
        Service manifest for a device.

        When `observed` is given the manifest is meant for a replace: it keeps
        the allocated clusterIP (immutable) and the resourceVersion.
        """
        metadata = self._metadata(device, namespace)
        spec: Dict[str, Any] = {
            "type": "ClusterIP",
            "ports": [
                {"name": port.name, "port": port.port, "targetPort": port.target_port, "protocol": "TCP"}
                for port in self.desired_ports(device)
            ],
        }
        if observed is not None and observed.exists:
            if observed.resource_version:
                metadata["resourceVersion"] = observed.resource_version
            if observed.cluster_ip:
                spec["clusterIP"] = observed.cluster_ip
        return {"apiVersion": "v1", "kind": "Service", "metadata": metadata, "spec": spec}

    def build_endpoints(
        self,
        device: Device,
        namespace: str,
        observed: Optional[EndpointsInfo] = None,
    ) -> Dict[str, Any]:
        metadata = self._metadata(device, namespace)
        if observed is not None and observed.exists and observed.resource_version:
            metadata["resourceVersion"] = observed.resource_version
        return {
            "apiVersion": "v1",
            "kind": "Endpoints",
            "metadata": metadata,
            "subsets": [
                {
                    "addresses": [{"ip": device.ip_address}],
                    "ports": [
                        {"name": port.name, "port": port.port, "protocol": "TCP"}
                        for port in self.desired_ports(device)
                    ],
                }
            ],
        }

    # ------------------------------------------------------------------
    # Drift detection
    # ------------------------------------------------------------------

    def _metadata_matches(
        self, device: Device, labels: Dict[str, str], annotations: Dict[str, str]
    ) -> bool:
        desired_labels = self.labels_for(device)
        desired_annotations = self.annotations_for(device)
        return (
            all(labels.get(key) == value for key, value in desired_labels.items())
            and all(annotations.get(key) == value for key, value in desired_annotations.items())
        )

    def service_matches(self, device: Device, observed: ServiceInfo) -> bool:
        if not observed.exists:
            return False
        desired: Set[Tuple[str, int, Optional[int]]] = {
            (port.name, port.port, port.target_port) for port in self.desired_ports(device)
        }
        actual = {(port.name, port.port, port.target_port) for port in observed.ports}
        return desired == actual and self._metadata_matches(device, observed.labels, observed.annotations)

    def endpoints_match(self, device: Device, observed: EndpointsInfo) -> bool:
        if not observed.exists:
            return False
        desired = {(port.name, port.port) for port in self.desired_ports(device)}
        actual = {(port.name, port.port) for port in observed.ports}
        return (
            observed.ready_addresses == [device.ip_address]
            and not observed.not_ready_addresses
            and desired == actual
            and self._metadata_matches(device, observed.labels, observed.annotations)
        )
