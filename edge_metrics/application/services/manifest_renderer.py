# Standard library imports
from typing import Any, Dict, List, Sequence

# External package imports
import yaml

# Local application imports
from .resource_builder import ResourceBuilder
from ...domain.models.device import Device


class ManifestRenderer:
    """Renders the desired Service/Endpoints pairs as a multi-document YAML stream."""

    def __init__(self, builder: ResourceBuilder) -> None:
        self.builder = builder

    def documents(self, devices: Sequence[Device], namespace: str) -> List[Dict[str, Any]]:
        documents: List[Dict[str, Any]] = []
        for device in devices:
            documents.append(self.builder.build_service(device, namespace))
            documents.append(self.builder.build_endpoints(device, namespace))
        return documents

    def render(self, devices: Sequence[Device], namespace: str) -> str:
        documents = self.documents(devices, namespace)
        if not documents:
            return ""
        return yaml.safe_dump_all(documents, sort_keys=False, default_flow_style=False)
