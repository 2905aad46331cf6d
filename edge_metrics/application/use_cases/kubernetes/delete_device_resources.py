# Local application imports
from ...dto.kubernetes_dto import SyncResultResponse
from ...services.resource_mirror import ResourceMirror


class DeleteDeviceResourcesUseCase:
    """
    Use case for deleting one device's Service/Endpoints.

    Does not consult the registry, so resources of an already-unregistered
    device can be removed too. Deleting absent resources succeeds.
    """

    def __init__(self, mirror: ResourceMirror) -> None:
        self.mirror = mirror

    async def execute(self, device_id: str, namespace: str) -> SyncResultResponse:
        outcome = await self.mirror.remove(device_id, namespace)
        return SyncResultResponse.from_outcome(outcome)
