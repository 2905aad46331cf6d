from abc import ABC, abstractmethod
from typing import Optional
from ..models.device import Device


class DeviceRepository(ABC):
    """Repository interface - defines contract for the device registry"""

    @abstractmethod
    async def find_by_id(self, device_id: str) -> Optional[Device]:
        """Find device by ID"""
        pass

    @abstractmethod
    async def list_all(self) -> list[Device]:
        """List every registered device in insertion order"""
        pass

    @abstractmethod
    async def exists(self, device_id: str) -> bool:
        """Check whether a device ID is registered"""
        pass

    @abstractmethod
    async def create(self, device: Device) -> Device:
        """Insert a new device; raises DeviceAlreadyExistsError on duplicate ID"""
        pass

    @abstractmethod
    async def replace(self, device: Device) -> Device:
        """Replace an existing device record; raises DeviceNotFoundError if absent"""
        pass

    @abstractmethod
    async def delete(self, device_id: str) -> bool:
        """Delete device; returns False if it was not registered"""
        pass
