# Standard library imports
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

# Local application imports
from .device import Device, DeviceType


class DeviceStatus(str, Enum):
    """Live status of a device as seen by a health probe."""
    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"
    UNREACHABLE = "unreachable"
    UNKNOWN = "unknown"


@dataclass
class DeviceState:
    """
    Result of probing one device. Never persisted: a new one is produced by
    every probe and lives for a single request.
    """
    device_id: str
    device_type: DeviceType
    ip_address: str
    port: int
    reload_port: int
    status: DeviceStatus
    last_seen: Optional[datetime] = None
    error: Optional[str] = None

    @classmethod
    def for_device(
        cls,
        device: Device,
        status: DeviceStatus,
        last_seen: Optional[datetime] = None,
        error: Optional[str] = None,
    ) -> "DeviceState":
        return cls(
            device_id=device.device_id,
            device_type=device.device_type,
            ip_address=device.ip_address,
            port=device.port,
            reload_port=device.reload_port,
            status=status,
            last_seen=last_seen,
            error=error,
        )

    @property
    def is_healthy(self) -> bool:
        return self.status == DeviceStatus.HEALTHY
