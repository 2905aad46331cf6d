from typing import TYPE_CHECKING
from ...core.config import get_settings
from ...domain.repositories.device_repository import DeviceRepository
from ...infrastructure.external.device_client import DeviceClient
from ...infrastructure.external.kubernetes_client import KubernetesClient
from ...application.services.fleet_prober import FleetProber
from ...application.services.fleet_synchronizer import FleetSynchronizer
from ...application.services.manifest_renderer import ManifestRenderer
from ...application.services.resource_builder import ResourceBuilder
from ...application.services.resource_mirror import ResourceMirror

if TYPE_CHECKING:
    from ..base_container import BaseContainer


class InfrastructureProvider:
    """Clients and application services - all stateless or connection-pooled, so singletons"""

    @staticmethod
    def register(container: "BaseContainer") -> None:
        settings = get_settings()

        device_client = DeviceClient()
        kubernetes_client = KubernetesClient()
        builder = ResourceBuilder(prefix=settings.k8s_resource_prefix)
        mirror = ResourceMirror(kubernetes_client=kubernetes_client, builder=builder)
        prober = FleetProber(device_client=device_client)

        container.register_singleton(DeviceClient, device_client)
        container.register_singleton(KubernetesClient, kubernetes_client)
        container.register_singleton(ResourceBuilder, builder)
        container.register_singleton(ResourceMirror, mirror)
        container.register_singleton(FleetProber, prober)
        container.register_singleton(ManifestRenderer, ManifestRenderer(builder=builder))
        container.register_singleton(
            FleetSynchronizer,
            FleetSynchronizer(
                device_repository=container.get(DeviceRepository),
                prober=prober,
                mirror=mirror,
            )
        )
