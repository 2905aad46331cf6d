# Standard library imports
from collections import Counter

# Local application imports
from ....domain.repositories.device_repository import DeviceRepository
from ...dto.device_dto import MetricsSummaryResponse
from ...services.fleet_prober import FleetProber


class GetMetricsSummaryUseCase:
    """Use case for fleet-wide health counts"""

    def __init__(
        self,
        device_repository: DeviceRepository,
        prober: FleetProber,
    ) -> None:
        self.device_repository = device_repository
        self.prober = prober

    async def execute(self) -> MetricsSummaryResponse:
        devices = await self.device_repository.list_all()
        states = await self.prober.probe_all(devices)
        healthy = sum(1 for state in states if state.is_healthy)
        by_type = Counter(device.device_type.value for device in devices)
        return MetricsSummaryResponse(
            total=len(devices),
            healthy=healthy,
            unhealthy=len(devices) - healthy,
            by_device_type=dict(by_type),
        )
