# Local application imports
from ....domain.repositories.device_repository import DeviceRepository
from ...services.manifest_renderer import ManifestRenderer


class RenderManifestsUseCase:
    """Use case for exporting the desired resources as YAML"""

    def __init__(
        self,
        device_repository: DeviceRepository,
        renderer: ManifestRenderer,
    ) -> None:
        self.device_repository = device_repository
        self.renderer = renderer

    async def execute(self, namespace: str) -> str:
        """One Service + Endpoints document pair per registered device."""
        devices = await self.device_repository.list_all()
        return self.renderer.render(devices, namespace)
