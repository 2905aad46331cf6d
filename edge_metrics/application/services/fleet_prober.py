# Standard library imports
import logging
from typing import Dict, List, Optional, Sequence

# Local application imports
from .bulk_executor import run_bounded
from ...core.config import get_settings
from ...domain.models.device import Device
from ...domain.models.device_state import DeviceState, DeviceStatus
from ...infrastructure.external.device_client import DeviceClient

logger = logging.getLogger(__name__)


class FleetProber:
    """Probes many devices concurrently and hands back states in registry order."""

    def __init__(self, device_client: DeviceClient, concurrency_limit: Optional[int] = None) -> None:
        self.device_client = device_client
        self.concurrency_limit = concurrency_limit or get_settings().bulk_concurrency_limit

    async def probe_all(self, devices: Sequence[Device]) -> List[DeviceState]:
        by_id: Dict[str, Device] = {device.device_id: device for device in devices}

        def on_error(device: Device, error: Exception) -> DeviceState:
            return DeviceState.for_device(device, DeviceStatus.UNKNOWN, error=str(error))

        states = await run_bounded(
            list(by_id.values()),
            self.device_client.probe,
            on_error,
            limit=self.concurrency_limit,
        )
        states_by_id = {state.device_id: state for state in states}
        ordered = [states_by_id[device.device_id] for device in by_id.values()]

        healthy = sum(1 for state in ordered if state.is_healthy)
        logger.debug(f"Probed {len(ordered)} device(s): {healthy} healthy")
        return ordered
