# Local application imports
from .base_container import BaseContainer
from .providers import (
    DatabaseProvider,
    DeviceProvider,
    InfrastructureProvider,
    KubernetesProvider,
    RepositoryProvider,
)


class DIContainer(BaseContainer):
    """
    Container wiring the registry, the device and Kubernetes clients, the
    reconciliation services and the use cases the controllers resolve.

    Providers run in dependency order: the Mongo collection first, then the
    device repository, then the HTTP clients with the mirror, prober and
    synchronizer built on them, and finally the device and Kubernetes use cases.
    """

    def __init__(self) -> None:
        super().__init__()
        self.setup()

    def setup(self) -> None:
        DatabaseProvider.register(self)
        RepositoryProvider.register(self)
        InfrastructureProvider.register(self)
        DeviceProvider.register(self)
        KubernetesProvider.register(self)


_container: DIContainer | None = None


def get_container() -> DIContainer:
    """Process-wide container, built on first use."""
    global _container
    if _container is None:
        _container = DIContainer()
    return _container
