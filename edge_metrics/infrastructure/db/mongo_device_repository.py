# Standard library imports
import logging
from typing import Optional, List, Dict, Any

# External package imports
from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo import ASCENDING
from pymongo.errors import DuplicateKeyError, PyMongoError

# Local application imports
from ...domain.repositories.device_repository import DeviceRepository
from ...domain.models.device import Device
from ...domain.constants import DeviceFields
from ...core.exceptions import (
    DeviceAlreadyExistsError,
    DeviceNotFoundError,
    RegistryUnavailableError,
)
from .mongo_connection import get_device_collection

logger = logging.getLogger(__name__)


class MongoDeviceRepository(DeviceRepository):
    """MongoDB implementation of DeviceRepository"""

    def __init__(self, device_collection: Optional[AsyncIOMotorCollection] = None) -> None:
        self.device_collection = device_collection if device_collection is not None else get_device_collection()

    async def ensure_indexes(self) -> None:
        """Create the unique device_id index (idempotent)"""
        try:
            await self.device_collection.create_index(
                [(DeviceFields.DEVICE_ID, ASCENDING)],
                unique=True,
                name="device_id_unique",
            )
        except PyMongoError as e:
            raise RegistryUnavailableError(f"Error creating registry indexes: {e}")

    async def find_by_id(self, device_id: str) -> Optional[Device]:
        """Find device by ID"""
        if not device_id:
            return None

        try:
            document = await self.device_collection.find_one({DeviceFields.DEVICE_ID: device_id})
        except PyMongoError as e:
            raise RegistryUnavailableError(f"Error finding device by ID: {e}")

        if document is None:
            return None
        return self._document_to_device(document)

    async def list_all(self) -> List[Device]:
        """List every device, oldest registration first"""
        try:
            # ObjectIds grow with insertion time
            cursor = self.device_collection.find({}).sort(DeviceFields.MONGO_ID, ASCENDING)
            documents = [document async for document in cursor]
        except PyMongoError as e:
            raise RegistryUnavailableError(f"Error listing devices: {e}")

        devices = []
        for document in documents:
            try:
                devices.append(self._document_to_device(document))
            except ValueError as e:
                # A record written by an older schema should not hide the rest of the fleet
                logger.warning(
                    f"Skipping invalid registry record {document.get(DeviceFields.DEVICE_ID)!r}: {e}"
                )
        return devices

    async def exists(self, device_id: str) -> bool:
        """Check whether a device ID is registered"""
        try:
            count = await self.device_collection.count_documents(
                {DeviceFields.DEVICE_ID: device_id}, limit=1
            )
        except PyMongoError as e:
            raise RegistryUnavailableError(f"Error checking device existence: {e}")
        return count > 0

    async def create(self, device: Device) -> Device:
        """Insert a new device"""
        if await self.exists(device.device_id):
            raise DeviceAlreadyExistsError(device.device_id)

        try:
            await self.device_collection.insert_one(self._device_to_dict(device))
        except DuplicateKeyError:
            raise DeviceAlreadyExistsError(device.device_id)
        except PyMongoError as e:
            raise RegistryUnavailableError(f"Error saving device: {e}")
        return device

    async def replace(self, device: Device) -> Device:
        """Replace an existing device record, keeping its _id (and so its list position)"""
        try:
            result = await self.device_collection.replace_one(
                {DeviceFields.DEVICE_ID: device.device_id},
                self._device_to_dict(device),
            )
        except PyMongoError as e:
            raise RegistryUnavailableError(f"Error replacing device: {e}")

        if result.matched_count == 0:
            raise DeviceNotFoundError(device.device_id)
        return device

    async def delete(self, device_id: str) -> bool:
        """Delete device by ID"""
        try:
            result = await self.device_collection.delete_one({DeviceFields.DEVICE_ID: device_id})
        except PyMongoError as e:
            raise RegistryUnavailableError(f"Error deleting device: {e}")
        return result.deleted_count > 0

    def _document_to_device(self, document: Dict[str, Any]) -> Device:
        """Convert MongoDB document to Device domain model"""
        if not document:
            raise ValueError("Invalid document: document is None or empty")

        config = {key: value for key, value in document.items() if key != DeviceFields.MONGO_ID}
        return Device.from_config(config)

    def _device_to_dict(self, device: Device) -> Dict[str, Any]:
        """Convert Device domain model to MongoDB document"""
        if not device:
            raise ValueError("Device cannot be None")
        return device.to_config()
