# Standard library imports
from typing import Any, Dict

# Local application imports
from ....core.exceptions import DeviceNotFoundError
from ....domain.repositories.device_repository import DeviceRepository
from ....infrastructure.external.device_client import DeviceClient


class GetDeviceLocalConfigUseCase:
    """Use case for reading the config a device is currently serving"""

    def __init__(
        self,
        device_repository: DeviceRepository,
        device_client: DeviceClient,
    ) -> None:
        self.device_repository = device_repository
        self.device_client = device_client

    async def execute(self, device_id: str) -> Dict[str, Any]:
        """
        Raises:
            DeviceNotFoundError: If the device is not registered
            DeviceUnreachableError: If the device did not answer
            DeviceRequestError: If the device answered with an error
        """
        device = await self.device_repository.find_by_id(device_id)
        if device is None:
            raise DeviceNotFoundError(device_id)
        return await self.device_client.get_local_config(device)
