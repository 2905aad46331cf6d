"""
Namespace-wide and single-device synchronization of the resource mirror.

Only healthy devices are written. A device that fails its health probe keeps
no scrape target: if it still has resources they are removed, otherwise it is
reported as skipped. Resources whose device is no longer registered are
garbage-collected in the same batch.
"""
# Standard library imports
import logging
from dataclasses import dataclass
from typing import List, Optional

# Local application imports
from .bulk_executor import run_bounded
from .fleet_prober import FleetProber
from .resource_mirror import ResourceMirror
from ...core.config import get_settings
from ...domain.models.bulk import BulkSyncResult, SyncAction, SyncOutcome
from ...domain.models.device import Device
from ...domain.models.device_state import DeviceState
from ...domain.models.orchestration import ManagedResourceIndex
from ...domain.repositories.device_repository import DeviceRepository

logger = logging.getLogger(__name__)


@dataclass
class _SyncTask:
    device_id: str
    device: Optional[Device] = None
    service_name: Optional[str] = None
    endpoints_name: Optional[str] = None

    @property
    def is_write(self) -> bool:
        return self.device is not None


class FleetSynchronizer:
    def __init__(
        self,
        device_repository: DeviceRepository,
        prober: FleetProber,
        mirror: ResourceMirror,
        concurrency_limit: Optional[int] = None,
    ) -> None:
        self.device_repository = device_repository
        self.prober = prober
        self.mirror = mirror
        self.concurrency_limit = concurrency_limit or get_settings().bulk_concurrency_limit

    async def sync_device(self, device: Device, state: DeviceState, namespace: str) -> SyncOutcome:
        """
        Bring one device's mirror in line with its registry record and health.

        Raises:
            OrchestrationUnavailableError: Current resources could not be read
        """
        if state.is_healthy:
            return await self.mirror.apply(device, namespace)

        pair = await self.mirror.fetch_pair(device.device_id, namespace)
        if pair.any_exists:
            logger.info(f"Device {device.device_id} is {state.status.value}; removing its resources")
            return await self.mirror.remove(
                device.device_id,
                namespace,
                service_name=pair.service.name,
                endpoints_name=pair.endpoints.name,
            )
        return self._skipped(device.device_id, state)

    async def sync_all(self, namespace: str) -> BulkSyncResult:
        """
        Sync every registered device and collect stale mirrors.

        Raises:
            RegistryUnavailableError: Registry could not be listed
            OrchestrationUnavailableError: Namespace could not be listed
        """
        devices = await self.device_repository.list_all()
        index = await self.mirror.index(namespace)
        states = await self.prober.probe_all(devices)

        result = BulkSyncResult(namespace=namespace)
        result.total_healthy = sum(1 for state in states if state.is_healthy)

        indexed = index.device_ids()
        tasks: List[_SyncTask] = []
        registered = set()
        for device, state in zip(devices, states):
            registered.add(device.device_id)
            if state.is_healthy:
                tasks.append(_SyncTask(device.device_id, device=device))
            elif device.device_id in indexed:
                tasks.append(self._removal_task(device.device_id, index))
            else:
                result.add(self._skipped(device.device_id, state))

        for device_id in indexed:
            if device_id not in registered:
                logger.info(f"Resources for unregistered device {device_id} found in {namespace}; collecting")
                tasks.append(self._removal_task(device_id, index))

        async def run(task: _SyncTask) -> SyncOutcome:
            if task.is_write:
                return await self.mirror.apply(task.device, namespace)
            return await self.mirror.remove(
                task.device_id,
                namespace,
                service_name=task.service_name,
                endpoints_name=task.endpoints_name,
            )

        def on_error(task: _SyncTask, error: Exception) -> SyncOutcome:
            return SyncOutcome(
                device_id=task.device_id,
                service=task.service_name or self.mirror.builder.name_for(task.device_id),
                action=SyncAction.FAILED,
                error=str(error),
            )

        outcomes = await run_bounded(
            tasks, run, on_error, limit=self.concurrency_limit, on_result=result.add
        )

        logger.info(
            f"Sync of {namespace}: {len(result.created)} created, {len(result.updated)} updated, "
            f"{len(result.unchanged)} unchanged, {len(result.deleted)} deleted, "
            f"{len(result.skipped)} skipped, {len(result.failed)} failed "
            f"({len(outcomes)} write task(s), {result.total_healthy} healthy)"
        )
        return result

    @staticmethod
    def _removal_task(device_id: str, index: ManagedResourceIndex) -> _SyncTask:
        service = index.services.get(device_id)
        endpoints = index.endpoints.get(device_id)
        return _SyncTask(
            device_id,
            service_name=service.name if service else None,
            endpoints_name=endpoints.name if endpoints else None,
        )

    def _skipped(self, device_id: str, state: DeviceState) -> SyncOutcome:
        return SyncOutcome(
            device_id=device_id,
            service=self.mirror.builder.name_for(device_id),
            action=SyncAction.SKIPPED,
            error=state.error or f"Device is {state.status.value}",
        )
