# Local application imports
from ....core.exceptions import DeviceNotFoundError
from ....domain.repositories.device_repository import DeviceRepository
from ....infrastructure.external.device_client import DeviceClient
from ...dto.device_dto import DeviceStateResponse


class GetDeviceStatusUseCase:
    """Use case for probing one device"""

    def __init__(
        self,
        device_repository: DeviceRepository,
        device_client: DeviceClient,
    ) -> None:
        self.device_repository = device_repository
        self.device_client = device_client

    async def execute(self, device_id: str) -> DeviceStateResponse:
        device = await self.device_repository.find_by_id(device_id)
        if device is None:
            raise DeviceNotFoundError(device_id)
        state = await self.device_client.probe(device)
        return DeviceStateResponse.from_state(state)
