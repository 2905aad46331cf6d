# Standard library imports
import logging

# Local application imports
from ....core.exceptions import DeviceNotFoundError
from ....domain.repositories.device_repository import DeviceRepository
from ....infrastructure.external.device_client import DeviceClient
from ...dto.kubernetes_dto import SyncResultResponse
from ...services.fleet_synchronizer import FleetSynchronizer

logger = logging.getLogger(__name__)


class SyncDeviceUseCase:
    """Use case for syncing one device's Service/Endpoints"""

    def __init__(
        self,
        device_repository: DeviceRepository,
        device_client: DeviceClient,
        synchronizer: FleetSynchronizer,
    ) -> None:
        self.device_repository = device_repository
        self.device_client = device_client
        self.synchronizer = synchronizer

    async def execute(self, device_id: str, namespace: str) -> SyncResultResponse:
        """
        Probe the device, then create, update or remove its resources

        Write failures are part of the returned outcome (status "failed").

        Raises:
            DeviceNotFoundError: If the device is not registered
            OrchestrationUnavailableError: If the current resources could not be read
        """
        device = await self.device_repository.find_by_id(device_id)
        if device is None:
            raise DeviceNotFoundError(device_id)

        state = await self.device_client.probe(device)
        outcome = await self.synchronizer.sync_device(device, state, namespace)
        logger.info(f"Sync of device {device_id} in {namespace}: {outcome.action.value}")
        return SyncResultResponse.from_outcome(outcome)
