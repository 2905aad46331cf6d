# Standard library imports
import logging
from typing import List, Optional

# Local application imports
from ....core.config import get_settings
from ....domain.models.device import Device
from ....domain.models.orchestration import DeviceSyncEntry, MirrorUnavailable, NamespaceSyncStatus
from ....domain.repositories.device_repository import DeviceRepository
from ...dto.kubernetes_dto import KubernetesResourceStatus, KubernetesStatusResponse
from ...services.bulk_executor import run_bounded
from ...services.resource_mirror import ResourceMirror

logger = logging.getLogger(__name__)


class GetNamespaceSyncStatusUseCase:
    """
    Use case for the namespace-wide sync report.

    A device whose lookup fails is listed as unsynced with the error attached;
    only a namespace that cannot be listed at all fails the call.
    """

    def __init__(
        self,
        device_repository: DeviceRepository,
        mirror: ResourceMirror,
        concurrency_limit: Optional[int] = None,
    ) -> None:
        self.device_repository = device_repository
        self.mirror = mirror
        self.concurrency_limit = concurrency_limit or get_settings().bulk_concurrency_limit

    async def execute(self, namespace: str) -> KubernetesStatusResponse:
        """
        Raises:
            RegistryUnavailableError: If the registry could not be listed
            OrchestrationUnavailableError: If the namespace could not be listed
        """
        devices = await self.device_repository.list_all()
        if not self.mirror.kubernetes_client.is_configured:
            return self._disabled(namespace, len(devices), [device.device_id for device in devices])
        index = await self.mirror.index(namespace)

        async def lookup(device: Device) -> DeviceSyncEntry:
            result = await self.mirror.lookup(device.device_id, namespace)
            if isinstance(result, MirrorUnavailable):
                return DeviceSyncEntry(device.device_id, False, False, error=result.reason)
            return DeviceSyncEntry(
                device.device_id,
                service_exists=result.pair.service.exists,
                endpoints_exists=result.pair.endpoints.exists,
            )

        def on_error(device: Device, error: Exception) -> DeviceSyncEntry:
            return DeviceSyncEntry(device.device_id, False, False, error=str(error))

        entries = await run_bounded(devices, lookup, on_error, limit=self.concurrency_limit)
        by_id = {entry.device_id: entry for entry in entries}

        status = NamespaceSyncStatus(
            namespace=namespace,
            total_registered=len(devices),
            total_k8s_resource_pairs_observed=len(index.complete_pair_ids()),
            devices=[by_id[device.device_id] for device in devices],
        )
        logger.debug(
            f"Namespace {namespace}: {status.synced_count} synced, "
            f"{status.unsynced_count} unsynced of {status.total_registered}"
        )
        return KubernetesStatusResponse(
            kubernetes_enabled=True,
            namespace=namespace,
            total_k8s_resources=status.total_k8s_resource_pairs_observed,
            total_registered_devices=status.total_registered,
            synced=status.synced_count,
            unsynced=status.unsynced_count,
            resources=[
                KubernetesResourceStatus(
                    device_id=entry.device_id,
                    service_exists=entry.service_exists,
                    endpoints_exists=entry.endpoints_exists,
                    synced=entry.synced,
                    error=entry.error,
                )
                for entry in status.devices
            ],
        )

    @staticmethod
    def _disabled(namespace: str, total: int, device_ids: List[str]) -> KubernetesStatusResponse:
        reason = "Kubernetes API is not configured"
        return KubernetesStatusResponse(
            kubernetes_enabled=False,
            namespace=namespace,
            total_k8s_resources=0,
            total_registered_devices=total,
            synced=0,
            unsynced=total,
            resources=[
                KubernetesResourceStatus(
                    device_id=device_id,
                    service_exists=False,
                    endpoints_exists=False,
                    synced=False,
                    error=reason,
                )
                for device_id in device_ids
            ],
        )
