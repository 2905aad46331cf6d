# Standard library imports
import logging
from typing import List, Optional

# Local application imports
from .reload_device import reload_one
from ....core.config import get_settings
from ....domain.models.bulk import BulkReloadResult, ReloadResult, ReloadStatus
from ....domain.repositories.device_repository import DeviceRepository
from ....infrastructure.external.device_client import DeviceClient
from ...dto.device_dto import BulkReloadResponse, ReloadResultResponse
from ...services.bulk_executor import run_bounded

logger = logging.getLogger(__name__)


class BulkReloadDevicesUseCase:
    """
    Use case for reloading many devices at once.

    Every submitted id yields exactly one result: unknown ids fail with a
    not-registered error, and a slow device is cut off at its own timeout
    without holding back the others.
    """

    def __init__(
        self,
        device_repository: DeviceRepository,
        device_client: DeviceClient,
        concurrency_limit: Optional[int] = None,
        item_timeout: Optional[float] = None,
    ) -> None:
        settings = get_settings()
        self.device_repository = device_repository
        self.device_client = device_client
        self.concurrency_limit = concurrency_limit or settings.bulk_concurrency_limit
        # The client's own timeout normally fires first
        self.item_timeout = item_timeout or settings.device_reload_timeout + 1.0

    async def execute(self, device_ids: Optional[List[str]] = None) -> BulkReloadResponse:
        """
        Args:
            device_ids: Devices to reload. None means every registered device.
        """
        devices = await self.device_repository.list_all()
        by_id = {device.device_id: device for device in devices}
        if device_ids is None:
            device_ids = list(by_id)

        async def worker(device_id: str) -> ReloadResult:
            device = by_id.get(device_id)
            if device is None:
                return ReloadResult(device_id, ReloadStatus.FAILED, error=f"Device {device_id} not found")
            return await reload_one(self.device_client, device)

        def on_error(device_id: str, error: Exception) -> ReloadResult:
            return ReloadResult(device_id, ReloadStatus.FAILED, error=str(error))

        result = BulkReloadResult(
            results=await run_bounded(
                device_ids,
                worker,
                on_error,
                limit=self.concurrency_limit,
                item_timeout=self.item_timeout,
            )
        )
        logger.info(f"Bulk reload: {result.success}/{result.total} succeeded, {result.failed} failed")
        return BulkReloadResponse(
            results=[ReloadResultResponse.from_result(item) for item in result.results],
            total=result.total,
            success=result.success,
            failed=result.failed,
        )
