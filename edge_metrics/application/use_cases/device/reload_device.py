# Standard library imports
import logging

# Local application imports
from ....core.exceptions import DeviceNotFoundError, DeviceRequestError, UpstreamUnavailableError
from ....domain.models.bulk import ReloadResult, ReloadStatus
from ....domain.models.device import Device
from ....domain.repositories.device_repository import DeviceRepository
from ....infrastructure.external.device_client import DeviceClient
from ...dto.device_dto import ReloadResultResponse

logger = logging.getLogger(__name__)


async def reload_one(device_client: DeviceClient, device: Device) -> ReloadResult:
    """Trigger a reload and record the outcome; never raises for device errors."""
    try:
        await device_client.trigger_reload(device)
    except (UpstreamUnavailableError, DeviceRequestError) as e:
        logger.warning(f"Reload of device {device.device_id} failed: {e.message}")
        return ReloadResult(device.device_id, ReloadStatus.FAILED, error=e.message)
    return ReloadResult(device.device_id, ReloadStatus.SUCCESS)


class ReloadDeviceUseCase:
    """Use case for reloading one device"""

    def __init__(
        self,
        device_repository: DeviceRepository,
        device_client: DeviceClient,
    ) -> None:
        self.device_repository = device_repository
        self.device_client = device_client

    async def execute(self, device_id: str) -> ReloadResultResponse:
        """
        Raises:
            DeviceNotFoundError: If the device is not registered
        """
        device = await self.device_repository.find_by_id(device_id)
        if device is None:
            raise DeviceNotFoundError(device_id)
        result = await reload_one(self.device_client, device)
        return ReloadResultResponse.from_result(result)
