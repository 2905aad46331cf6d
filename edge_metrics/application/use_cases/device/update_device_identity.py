# Standard library imports
import logging

# Local application imports
from ....core.exceptions import DeviceNotFoundError
from ....domain.repositories.device_repository import DeviceRepository
from ...dto.device_dto import ConfigMutationResponse, DeviceIdentityUpdateRequest

logger = logging.getLogger(__name__)


class UpdateDeviceIdentityUseCase:
    """Use case for editing type, address and ports without replacing the config block"""

    def __init__(
        self,
        device_repository: DeviceRepository,
    ) -> None:
        self.device_repository = device_repository

    async def execute(
        self,
        device_id: str,
        request: DeviceIdentityUpdateRequest,
    ) -> ConfigMutationResponse:
        device = await self.device_repository.find_by_id(device_id)
        if device is None:
            raise DeviceNotFoundError(device_id)

        updated = device.with_identity(**request.model_dump(exclude_none=True))
        saved = await self.device_repository.replace(updated)
        logger.info(
            f"Updated identity of device {saved.device_id}: {saved.device_type.value} "
            f"{saved.ip_address}:{saved.port} (reload {saved.reload_port})"
        )
        return ConfigMutationResponse(status="updated", device_id=saved.device_id)
