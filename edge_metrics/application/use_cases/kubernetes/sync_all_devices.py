# Local application imports
from ...dto.kubernetes_dto import KubernetesSyncResponse, SyncResultResponse
from ...services.fleet_synchronizer import FleetSynchronizer


class SyncAllDevicesUseCase:
    """Use case for syncing every device in a namespace"""

    def __init__(self, synchronizer: FleetSynchronizer) -> None:
        self.synchronizer = synchronizer

    async def execute(self, namespace: str) -> KubernetesSyncResponse:
        result = await self.synchronizer.sync_all(namespace)

        def convert(outcomes):
            return [SyncResultResponse.from_outcome(outcome) for outcome in outcomes]

        return KubernetesSyncResponse(
            status=result.status,
            namespace=result.namespace,
            created=convert(result.created),
            updated=convert(result.updated),
            unchanged=convert(result.unchanged),
            deleted=convert(result.deleted),
            skipped=convert(result.skipped),
            failed=convert(result.failed),
            total=result.total,
            total_healthy=result.total_healthy,
        )
