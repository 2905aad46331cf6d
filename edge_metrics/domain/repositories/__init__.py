from .device_repository import DeviceRepository

__all__ = ["DeviceRepository"]
