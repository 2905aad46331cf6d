from typing import TYPE_CHECKING
from ...domain.repositories.device_repository import DeviceRepository
from ...infrastructure.external.device_client import DeviceClient
from ...application.services.fleet_prober import FleetProber
from ...application.services.resource_mirror import ResourceMirror
from ...application.use_cases.device import (
    BulkReloadDevicesUseCase,
    CreateDeviceConfigUseCase,
    DeleteDeviceConfigUseCase,
    GetDeviceConfigUseCase,
    GetDeviceLocalConfigUseCase,
    GetDeviceStatusUseCase,
    GetMetricsSummaryUseCase,
    ListDeviceConfigsUseCase,
    ListDeviceStatesUseCase,
    PatchDeviceConfigUseCase,
    ReloadDeviceUseCase,
    UpdateDeviceConfigUseCase,
    UpdateDeviceIdentityUseCase,
)

if TYPE_CHECKING:
    from ..base_container import BaseContainer


class DeviceProvider:
    """Device use case provider - registers registry, live-status and reload use cases"""

    @staticmethod
    def register(container: "BaseContainer") -> None:
        """
        Register all device use cases.
        Use cases are created on-demand via factories.
        """
        container.register_factory(
            ListDeviceConfigsUseCase,
            lambda: ListDeviceConfigsUseCase(
                device_repository=container.get(DeviceRepository),
            )
        )

        container.register_factory(
            GetDeviceConfigUseCase,
            lambda: GetDeviceConfigUseCase(
                device_repository=container.get(DeviceRepository),
            )
        )

        container.register_factory(
            CreateDeviceConfigUseCase,
            lambda: CreateDeviceConfigUseCase(
                device_repository=container.get(DeviceRepository),
            )
        )

        container.register_factory(
            UpdateDeviceConfigUseCase,
            lambda: UpdateDeviceConfigUseCase(
                device_repository=container.get(DeviceRepository),
                device_client=container.get(DeviceClient),
            )
        )

        container.register_factory(
            PatchDeviceConfigUseCase,
            lambda: PatchDeviceConfigUseCase(
                device_repository=container.get(DeviceRepository),
                device_client=container.get(DeviceClient),
            )
        )

        container.register_factory(
            UpdateDeviceIdentityUseCase,
            lambda: UpdateDeviceIdentityUseCase(
                device_repository=container.get(DeviceRepository),
            )
        )

        container.register_factory(
            DeleteDeviceConfigUseCase,
            lambda: DeleteDeviceConfigUseCase(
                device_repository=container.get(DeviceRepository),
                mirror=container.get(ResourceMirror),
            )
        )

        container.register_factory(
            ListDeviceStatesUseCase,
            lambda: ListDeviceStatesUseCase(
                device_repository=container.get(DeviceRepository),
                prober=container.get(FleetProber),
            )
        )

        container.register_factory(
            GetDeviceStatusUseCase,
            lambda: GetDeviceStatusUseCase(
                device_repository=container.get(DeviceRepository),
                device_client=container.get(DeviceClient),
            )
        )

        container.register_factory(
            GetDeviceLocalConfigUseCase,
            lambda: GetDeviceLocalConfigUseCase(
                device_repository=container.get(DeviceRepository),
                device_client=container.get(DeviceClient),
            )
        )

        container.register_factory(
            ReloadDeviceUseCase,
            lambda: ReloadDeviceUseCase(
                device_repository=container.get(DeviceRepository),
                device_client=container.get(DeviceClient),
            )
        )

        container.register_factory(
            BulkReloadDevicesUseCase,
            lambda: BulkReloadDevicesUseCase(
                device_repository=container.get(DeviceRepository),
                device_client=container.get(DeviceClient),
            )
        )

        container.register_factory(
            GetMetricsSummaryUseCase,
            lambda: GetMetricsSummaryUseCase(
                device_repository=container.get(DeviceRepository),
                prober=container.get(FleetProber),
            )
        )
