from typing import TYPE_CHECKING
from ...domain.repositories.device_repository import DeviceRepository
from ...infrastructure.external.device_client import DeviceClient
from ...infrastructure.external.kubernetes_client import KubernetesClient
from ...application.services.fleet_synchronizer import FleetSynchronizer
from ...application.services.manifest_renderer import ManifestRenderer
from ...application.services.resource_mirror import ResourceMirror
from ...application.use_cases.kubernetes import (
    CheckKubernetesHealthUseCase,
    CleanupNamespaceUseCase,
    DeleteDeviceResourcesUseCase,
    GetDeviceResourcesUseCase,
    GetNamespaceSyncStatusUseCase,
    RenderManifestsUseCase,
    SyncAllDevicesUseCase,
    SyncDeviceUseCase,
)

if TYPE_CHECKING:
    from ..base_container import BaseContainer


class KubernetesProvider:
    """Kubernetes use case provider - registers reconciliation and bulk sync use cases"""

    @staticmethod
    def register(container: "BaseContainer") -> None:
        """
        Register all Kubernetes use cases.
        Use cases are created on-demand via factories.
        """
        container.register_factory(
            GetDeviceResourcesUseCase,
            lambda: GetDeviceResourcesUseCase(
                device_repository=container.get(DeviceRepository),
                mirror=container.get(ResourceMirror),
            )
        )

        container.register_factory(
            GetNamespaceSyncStatusUseCase,
            lambda: GetNamespaceSyncStatusUseCase(
                device_repository=container.get(DeviceRepository),
                mirror=container.get(ResourceMirror),
            )
        )

        container.register_factory(
            CheckKubernetesHealthUseCase,
            lambda: CheckKubernetesHealthUseCase(
                kubernetes_client=container.get(KubernetesClient),
            )
        )

        container.register_factory(
            SyncDeviceUseCase,
            lambda: SyncDeviceUseCase(
                device_repository=container.get(DeviceRepository),
                device_client=container.get(DeviceClient),
                synchronizer=container.get(FleetSynchronizer),
            )
        )

        container.register_factory(
            SyncAllDevicesUseCase,
            lambda: SyncAllDevicesUseCase(
                synchronizer=container.get(FleetSynchronizer),
            )
        )

        container.register_factory(
            DeleteDeviceResourcesUseCase,
            lambda: DeleteDeviceResourcesUseCase(
                mirror=container.get(ResourceMirror),
            )
        )

        container.register_factory(
            CleanupNamespaceUseCase,
            lambda: CleanupNamespaceUseCase(
                mirror=container.get(ResourceMirror),
                kubernetes_client=container.get(KubernetesClient),
            )
        )

        container.register_factory(
            RenderManifestsUseCase,
            lambda: RenderManifestsUseCase(
                device_repository=container.get(DeviceRepository),
                renderer=container.get(ManifestRenderer),
            )
        )
