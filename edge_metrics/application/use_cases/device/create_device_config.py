# Standard library imports
import logging

# Local application imports
from ....core.exceptions import DeviceValidationError
from ....domain.models.device import Device
from ....domain.repositories.device_repository import DeviceRepository
from ...dto.device_dto import ConfigMutationResponse, DeviceConfigRequest

logger = logging.getLogger(__name__)


class CreateDeviceConfigUseCase:
    """Use case for registering a new device"""

    def __init__(
        self,
        device_repository: DeviceRepository,
    ) -> None:
        self.device_repository = device_repository

    async def execute(
        self,
        device_id: str,
        request: DeviceConfigRequest,
    ) -> ConfigMutationResponse:
        """
        Register a new device

        Args:
            device_id: ID of the device (from the path)
            request: Config body

        Returns:
            ConfigMutationResponse with status "created"

        Raises:
            DeviceValidationError: If the config is malformed or the body ID differs
            DeviceAlreadyExistsError: If the device ID is already registered
        """
        if request.device_id is not None and request.device_id != device_id:
            raise DeviceValidationError(
                f"Body device_id '{request.device_id}' does not match path '{device_id}'",
                details={"field": "device_id"},
            )

        # Validate before touching the registry
        device = Device.from_config(request.to_config(device_id))
        saved = await self.device_repository.create(device)

        logger.info(f"Registered device {saved.device_id} ({saved.device_type.value}) at {saved.ip_address}")
        return ConfigMutationResponse(status="created", device_id=saved.device_id)
