# Standard library imports
from typing import Any, Dict

# Local application imports
from ....core.exceptions import DeviceNotFoundError
from ....domain.repositories.device_repository import DeviceRepository


class GetDeviceConfigUseCase:
    """Use case for getting one device config by ID"""

    def __init__(
        self,
        device_repository: DeviceRepository,
    ) -> None:
        self.device_repository = device_repository

    async def execute(self, device_id: str) -> Dict[str, Any]:
        """
        Get a device config by ID

        Args:
            device_id: ID of the device

        Returns:
            Flat config document

        Raises:
            DeviceNotFoundError: If the device is not registered
        """
        device = await self.device_repository.find_by_id(device_id)
        if device is None:
            raise DeviceNotFoundError(device_id)
        return device.to_config()
