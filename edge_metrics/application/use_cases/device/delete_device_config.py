# Standard library imports
import logging
from typing import Optional

# Local application imports
from ....core.config import get_settings
from ....core.exceptions import DeviceNotFoundError
from ....domain.models.bulk import SyncAction
from ....domain.repositories.device_repository import DeviceRepository
from ...dto.device_dto import ConfigMutationResponse
from ...services.resource_mirror import ResourceMirror

logger = logging.getLogger(__name__)


class DeleteDeviceConfigUseCase:
    """Use case for unregistering a device and removing its mirrored resources"""

    def __init__(
        self,
        device_repository: DeviceRepository,
        mirror: ResourceMirror,
    ) -> None:
        self.device_repository = device_repository
        self.mirror = mirror

    async def execute(
        self,
        device_id: str,
        namespace: Optional[str] = None,
    ) -> ConfigMutationResponse:
        """
        Delete a device from the registry, then its Service/Endpoints

        The registry delete is authoritative. If the resource cleanup fails the
        next namespace sync collects the leftovers, so the failure is reported
        in kubernetes_cleanup rather than raised.

        Raises:
            DeviceNotFoundError: If the device is not registered
        """
        namespace = namespace or get_settings().k8s_namespace
        if not await self.device_repository.delete(device_id):
            raise DeviceNotFoundError(device_id)
        logger.info(f"Deleted device {device_id} from the registry")

        outcome = await self.mirror.remove(device_id, namespace)
        if outcome.action == SyncAction.FAILED:
            cleanup = f"failed: {outcome.error}"
        else:
            cleanup = "deleted"
        return ConfigMutationResponse(
            status="deleted",
            device_id=device_id,
            kubernetes_cleanup=cleanup,
        )
