# Standard library imports
import logging
from typing import Optional, Tuple

# Local application imports
from ....core.exceptions import (
    DeviceNotFoundError,
    DeviceRequestError,
    DeviceValidationError,
    UpstreamUnavailableError,
)
from ....domain.models.device import Device
from ....domain.repositories.device_repository import DeviceRepository
from ....infrastructure.external.device_client import DeviceClient
from ...dto.device_dto import ConfigMutationResponse, DeviceConfigRequest

logger = logging.getLogger(__name__)


async def push_and_reload(
    device_client: DeviceClient,
    device: Device,
) -> Tuple[bool, Optional[str]]:
    """
    Push the stored config to the device and trigger a reload.

    Best effort: the registry write has already happened, so a device that
    cannot be reached only shows up as reload_triggered=False.
    """
    try:
        await device_client.push_local_config(device)
        await device_client.trigger_reload(device)
    except (UpstreamUnavailableError, DeviceRequestError) as e:
        logger.warning(f"Config for device {device.device_id} saved but not applied on the device: {e.message}")
        return False, e.message
    return True, None


class UpdateDeviceConfigUseCase:
    """Use case for replacing a device config"""

    def __init__(
        self,
        device_repository: DeviceRepository,
        device_client: DeviceClient,
    ) -> None:
        self.device_repository = device_repository
        self.device_client = device_client

    async def execute(
        self,
        device_id: str,
        request: DeviceConfigRequest,
    ) -> ConfigMutationResponse:
        """
        Replace a device config and apply it on the device

        Args:
            device_id: ID of the device (from the path)
            request: Complete config body

        Returns:
            ConfigMutationResponse with status "updated" and reload_triggered

        Raises:
            DeviceNotFoundError: If the device is not registered
            DeviceValidationError: If the config is malformed or the body ID differs
        """
        if request.device_id is not None and request.device_id != device_id:
            raise DeviceValidationError(
                f"Body device_id '{request.device_id}' does not match path '{device_id}'",
                details={"field": "device_id"},
            )
        if not await self.device_repository.exists(device_id):
            raise DeviceNotFoundError(device_id)

        device = Device.from_config(request.to_config(device_id))
        saved = await self.device_repository.replace(device)
        logger.info(f"Replaced config of device {saved.device_id}")

        reload_triggered, reload_error = await push_and_reload(self.device_client, saved)
        return ConfigMutationResponse(
            status="updated",
            device_id=saved.device_id,
            reload_triggered=reload_triggered,
            reload_error=reload_error,
        )
