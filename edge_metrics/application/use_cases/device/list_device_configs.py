# Local application imports
from ....domain.repositories.device_repository import DeviceRepository
from ...dto.device_dto import ConfigsResponse


class ListDeviceConfigsUseCase:
    """Use case for listing every registered device config"""

    def __init__(
        self,
        device_repository: DeviceRepository,
    ) -> None:
        self.device_repository = device_repository

    async def execute(self) -> ConfigsResponse:
        """
        List all device configs in registration order

        Returns:
            ConfigsResponse with the flat config documents
        """
        devices = await self.device_repository.list_all()
        return ConfigsResponse(
            configs=[device.to_config() for device in devices],
            total=len(devices),
        )
