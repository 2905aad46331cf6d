# Standard library imports
import logging

# Local application imports
from ....core.config import get_settings
from ....core.exceptions import DeviceNotFoundError, OrchestrationUnavailableError
from ....domain.models.orchestration import MirrorUnavailable
from ....domain.repositories.device_repository import DeviceRepository
from ...dto.kubernetes_dto import (
    KubernetesDeviceResourcesResponse,
    KubernetesEndpointsInfo,
    KubernetesServiceInfo,
)
from ...services.resource_mirror import ResourceMirror

logger = logging.getLogger(__name__)


class GetDeviceResourcesUseCase:
    """Use case for one device's sync status and mirrored resources"""

    def __init__(
        self,
        device_repository: DeviceRepository,
        mirror: ResourceMirror,
    ) -> None:
        self.device_repository = device_repository
        self.mirror = mirror

    async def execute(self, device_id: str, namespace: str) -> KubernetesDeviceResourcesResponse:
        """
        Report whether the device's Service and Endpoints both exist

        Absent resources are a normal answer (synced=False). A platform that
        cannot be asked is not: it raises instead.

        Raises:
            DeviceNotFoundError: If the device is not registered
            OrchestrationUnavailableError: If the resources could not be read
        """
        if not await self.device_repository.exists(device_id):
            raise DeviceNotFoundError(device_id)

        lookup = await self.mirror.lookup(device_id, namespace)
        if isinstance(lookup, MirrorUnavailable):
            logger.error(f"Cannot read resources of device {device_id} in {namespace}: {lookup.reason}")
            raise OrchestrationUnavailableError(lookup.reason, status_code=lookup.status_code)

        pair = lookup.pair
        return KubernetesDeviceResourcesResponse(
            device_id=device_id,
            namespace=namespace,
            synced=pair.synced,
            service=KubernetesServiceInfo.from_info(pair.service),
            endpoints=KubernetesEndpointsInfo.from_info(pair.endpoints),
            prometheus_target=pair.metrics_target(get_settings().metrics_path),
        )
