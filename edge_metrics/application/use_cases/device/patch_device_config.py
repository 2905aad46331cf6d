# Standard library imports
import logging
from typing import Any, Dict

# Local application imports
from .update_device_config import push_and_reload
from ....core.exceptions import DeviceNotFoundError, DeviceValidationError
from ....domain.constants import DeviceFields
from ....domain.models.device import Device
from ....domain.repositories.device_repository import DeviceRepository
from ....infrastructure.external.device_client import DeviceClient
from ...dto.device_dto import ConfigMutationResponse, DeviceConfigPatchRequest

logger = logging.getLogger(__name__)


class PatchDeviceConfigUseCase:
    """Use case for partially updating a device config"""

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
        request: DeviceConfigPatchRequest,
    ) -> ConfigMutationResponse:
        """
        Merge the given fields into the stored config, validate the result as a
        whole, then store and apply it. A null value removes the key.

        Raises:
            DeviceNotFoundError: If the device is not registered
            DeviceValidationError: If the merged config is malformed
        """
        current = await self.device_repository.find_by_id(device_id)
        if current is None:
            raise DeviceNotFoundError(device_id)

        changes = request.model_dump(exclude_unset=True)
        if changes.get(DeviceFields.DEVICE_ID, device_id) != device_id:
            raise DeviceValidationError(
                "device_id cannot be changed",
                details={"field": DeviceFields.DEVICE_ID},
            )

        merged: Dict[str, Any] = current.to_config()
        for key, value in changes.items():
            if value is None:
                merged.pop(key, None)
            else:
                merged[key] = value
        merged[DeviceFields.DEVICE_ID] = device_id

        device = Device.from_config(merged)
        saved = await self.device_repository.replace(device)
        logger.info(f"Patched config of device {saved.device_id}: {', '.join(sorted(changes)) or 'no fields'}")

        reload_triggered, reload_error = await push_and_reload(self.device_client, saved)
        return ConfigMutationResponse(
            status="updated",
            device_id=saved.device_id,
            reload_triggered=reload_triggered,
            reload_error=reload_error,
        )
