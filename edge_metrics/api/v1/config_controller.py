# Standard library imports
from typing import Any, Dict

# External package imports
from fastapi import APIRouter, status

# Local application imports
from ...application.dto.device_dto import (
    ConfigMutationResponse,
    ConfigsResponse,
    DeviceConfigPatchRequest,
    DeviceConfigRequest,
)
from ...application.use_cases.device import (
    CreateDeviceConfigUseCase,
    DeleteDeviceConfigUseCase,
    GetDeviceConfigUseCase,
    ListDeviceConfigsUseCase,
    PatchDeviceConfigUseCase,
    UpdateDeviceConfigUseCase,
)
from ...core.exceptions import EdgeMetricsError
from ...di.container import get_container
from .errors import to_http_exception


router = APIRouter(tags=["config"])


@router.get("", response_model=ConfigsResponse)
async def list_configs() -> ConfigsResponse:
    """
    List every registered device config

    Returns:
        ConfigsResponse with configs in registration order
    """
    container = get_container()
    list_configs_use_case = container.get(ListDeviceConfigsUseCase)

    try:
        return await list_configs_use_case.execute()
    except EdgeMetricsError as exception:
        raise to_http_exception(exception)


@router.get("/{device_id}")
async def get_config(device_id: str) -> Dict[str, Any]:
    """
    Get one device config

    Args:
        device_id: ID of the device

    Returns:
        Flat config document
    """
    container = get_container()
    get_config_use_case = container.get(GetDeviceConfigUseCase)

    try:
        return await get_config_use_case.execute(device_id)
    except EdgeMetricsError as exception:
        raise to_http_exception(exception)


@router.post("/{device_id}", response_model=ConfigMutationResponse, status_code=status.HTTP_201_CREATED,
             response_model_exclude_none=True)
async def create_config(device_id: str, request: DeviceConfigRequest) -> ConfigMutationResponse:
    """
    Register a new device

    Args:
        device_id: ID of the device
        request: Device config

    Returns:
        ConfigMutationResponse with status "created"
    """
    container = get_container()
    create_config_use_case = container.get(CreateDeviceConfigUseCase)

    try:
        return await create_config_use_case.execute(device_id=device_id, request=request)
    except EdgeMetricsError as exception:
        raise to_http_exception(exception)


@router.put("/{device_id}", response_model=ConfigMutationResponse, response_model_exclude_none=True)
async def update_config(device_id: str, request: DeviceConfigRequest) -> ConfigMutationResponse:
    """
    Replace a device config, push it to the device and trigger a reload

    Returns:
        ConfigMutationResponse with reload_triggered
    """
    container = get_container()
    update_config_use_case = container.get(UpdateDeviceConfigUseCase)

    try:
        return await update_config_use_case.execute(device_id=device_id, request=request)
    except EdgeMetricsError as exception:
        raise to_http_exception(exception)


@router.patch("/{device_id}", response_model=ConfigMutationResponse, response_model_exclude_none=True)
async def patch_config(device_id: str, request: DeviceConfigPatchRequest) -> ConfigMutationResponse:
    """
    Merge fields into a device config, push it to the device and trigger a reload

    Returns:
        ConfigMutationResponse with reload_triggered
    """
    container = get_container()
    patch_config_use_case = container.get(PatchDeviceConfigUseCase)

    try:
        return await patch_config_use_case.execute(device_id=device_id, request=request)
    except EdgeMetricsError as exception:
        raise to_http_exception(exception)


@router.delete("/{device_id}", response_model=ConfigMutationResponse, response_model_exclude_none=True)
async def delete_config(device_id: str) -> ConfigMutationResponse:
    """
    Unregister a device and delete its Kubernetes resources in the default namespace

    Returns:
        ConfigMutationResponse with the Kubernetes cleanup outcome
    """
    container = get_container()
    delete_config_use_case = container.get(DeleteDeviceConfigUseCase)

    try:
        return await delete_config_use_case.execute(device_id=device_id)
    except EdgeMetricsError as exception:
        raise to_http_exception(exception)
