# Standard library imports
from typing import Any, Dict, Optional

# External package imports
from fastapi import APIRouter, Body

# Local application imports
from ...application.dto.device_dto import (
    BulkReloadRequest,
    BulkReloadResponse,
    ConfigMutationResponse,
    DeviceIdentityUpdateRequest,
    DevicesResponse,
    DeviceStateResponse,
    ReloadResultResponse,
)
from ...application.use_cases.device import (
    BulkReloadDevicesUseCase,
    GetDeviceLocalConfigUseCase,
    GetDeviceStatusUseCase,
    ListDeviceStatesUseCase,
    ReloadDeviceUseCase,
    UpdateDeviceIdentityUseCase,
)
from ...core.exceptions import EdgeMetricsError
from ...di.container import get_container
from .errors import to_http_exception


router = APIRouter(tags=["devices"])


@router.get("", response_model=DevicesResponse)
async def list_devices() -> DevicesResponse:
    """
    Probe every registered device

    Returns:
        DevicesResponse with live states and healthy/unhealthy counts
    """
    container = get_container()
    list_devices_use_case = container.get(ListDeviceStatesUseCase)

    try:
        return await list_devices_use_case.execute()
    except EdgeMetricsError as exception:
        raise to_http_exception(exception)


@router.post("/reload", response_model=BulkReloadResponse)
async def reload_devices(
    request: Optional[BulkReloadRequest] = Body(None),
) -> BulkReloadResponse:
    """
    Trigger a reload on many devices concurrently

    Args:
        request: Optional list of device IDs; all registered devices when omitted

    Returns:
        BulkReloadResponse with one result per requested device
    """
    container = get_container()
    bulk_reload_use_case = container.get(BulkReloadDevicesUseCase)

    try:
        return await bulk_reload_use_case.execute(
            device_ids=request.device_ids if request else None,
        )
    except EdgeMetricsError as exception:
        raise to_http_exception(exception)


@router.get("/{device_id}/status", response_model=DeviceStateResponse)
async def get_device_status(device_id: str) -> DeviceStateResponse:
    """Probe one device"""
    container = get_container()
    get_status_use_case = container.get(GetDeviceStatusUseCase)

    try:
        return await get_status_use_case.execute(device_id)
    except EdgeMetricsError as exception:
        raise to_http_exception(exception)


@router.get("/{device_id}/local-config")
async def get_device_local_config(device_id: str) -> Dict[str, Any]:
    """Read the config document the device's exporter is serving"""
    container = get_container()
    local_config_use_case = container.get(GetDeviceLocalConfigUseCase)

    try:
        return await local_config_use_case.execute(device_id)
    except EdgeMetricsError as exception:
        raise to_http_exception(exception)


@router.post("/{device_id}/reload", response_model=ReloadResultResponse, response_model_exclude_none=True)
async def reload_device(device_id: str) -> ReloadResultResponse:
    """
    Trigger a reload on one device

    A device that cannot be reached is reported with status "failed"; only an
    unknown device ID is an error.
    """
    container = get_container()
    reload_use_case = container.get(ReloadDeviceUseCase)

    try:
        return await reload_use_case.execute(device_id)
    except EdgeMetricsError as exception:
        raise to_http_exception(exception)


@router.patch("/{device_id}", response_model=ConfigMutationResponse, response_model_exclude_none=True)
async def update_device_identity(
    device_id: str,
    request: DeviceIdentityUpdateRequest,
) -> ConfigMutationResponse:
    """Edit type, IP address and ports of a device, keeping its config block"""
    container = get_container()
    update_identity_use_case = container.get(UpdateDeviceIdentityUseCase)

    try:
        return await update_identity_use_case.execute(device_id=device_id, request=request)
    except EdgeMetricsError as exception:
        raise to_http_exception(exception)
