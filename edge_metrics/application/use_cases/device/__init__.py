from .list_device_configs import ListDeviceConfigsUseCase
from .get_device_config import GetDeviceConfigUseCase
from .create_device_config import CreateDeviceConfigUseCase
from .update_device_config import UpdateDeviceConfigUseCase
from .patch_device_config import PatchDeviceConfigUseCase
from .update_device_identity import UpdateDeviceIdentityUseCase
from .delete_device_config import DeleteDeviceConfigUseCase
from .list_device_states import ListDeviceStatesUseCase
from .get_device_status import GetDeviceStatusUseCase
from .get_device_local_config import GetDeviceLocalConfigUseCase
from .reload_device import ReloadDeviceUseCase
from .bulk_reload_devices import BulkReloadDevicesUseCase
from .get_metrics_summary import GetMetricsSummaryUseCase

__all__ = [
    "ListDeviceConfigsUseCase",
    "GetDeviceConfigUseCase",
    "CreateDeviceConfigUseCase",
    "UpdateDeviceConfigUseCase",
    "PatchDeviceConfigUseCase",
    "UpdateDeviceIdentityUseCase",
    "DeleteDeviceConfigUseCase",
    "ListDeviceStatesUseCase",
    "GetDeviceStatusUseCase",
    "GetDeviceLocalConfigUseCase",
    "ReloadDeviceUseCase",
    "BulkReloadDevicesUseCase",
    "GetMetricsSummaryUseCase",
]
