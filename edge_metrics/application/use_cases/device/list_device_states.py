# Local application imports
from ....domain.repositories.device_repository import DeviceRepository
from ...dto.device_dto import DevicesResponse, DeviceStateResponse
from ...services.fleet_prober import FleetProber


class ListDeviceStatesUseCase:
    """Use case for probing every registered device"""

    def __init__(
        self,
        device_repository: DeviceRepository,
        prober: FleetProber,
    ) -> None:
        self.device_repository = device_repository
        self.prober = prober

    async def execute(self) -> DevicesResponse:
        devices = await self.device_repository.list_all()
        states = await self.prober.probe_all(devices)
        healthy = sum(1 for state in states if state.is_healthy)
        return DevicesResponse(
            devices=[DeviceStateResponse.from_state(state) for state in states],
            total=len(states),
            healthy=healthy,
            unhealthy=len(states) - healthy,
        )
