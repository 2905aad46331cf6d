# Standard library imports
import logging
from typing import Optional

# External package imports
from fastapi import APIRouter, Body, Depends
from fastapi.responses import PlainTextResponse

# Local application imports
from ...application.dto.kubernetes_dto import (
    KubernetesCleanupResponse,
    KubernetesDeviceResourcesResponse,
    KubernetesHealthResponse,
    KubernetesStatusResponse,
    KubernetesSyncResponse,
    SyncRequest,
    SyncResultResponse,
)
from ...application.use_cases.kubernetes import (
    CheckKubernetesHealthUseCase,
    CleanupNamespaceUseCase,
    DeleteDeviceResourcesUseCase,
    GetDeviceResourcesUseCase,
    GetNamespaceSyncStatusUseCase,
    RenderManifestsUseCase,
    SyncAllDevicesUseCase,
    SyncDeviceUseCase,
)
from ...core.config import get_settings
from ...core.exceptions import EdgeMetricsError
from ...di.container import get_container
from .dependencies import require_confirmation, resolve_namespace, validate_namespace
from .errors import to_http_exception

logger = logging.getLogger(__name__)

router = APIRouter(tags=["kubernetes"])


@router.get("/status", response_model=KubernetesStatusResponse)
async def get_sync_status(
    namespace: str = Depends(resolve_namespace),
) -> KubernetesStatusResponse:
    """
    Sync status of every registered device in a namespace

    Args:
        namespace: Target namespace (query parameter, defaults to the configured one)

    Returns:
        KubernetesStatusResponse with per-device rows and synced/unsynced counts
    """
    container = get_container()
    status_use_case = container.get(GetNamespaceSyncStatusUseCase)

    try:
        return await status_use_case.execute(namespace)
    except EdgeMetricsError as exception:
        raise to_http_exception(exception)


@router.get("/health", response_model=KubernetesHealthResponse)
async def get_kubernetes_health(
    namespace: str = Depends(resolve_namespace),
) -> KubernetesHealthResponse:
    """Reachability, credential, namespace and per-kind RBAC checks"""
    container = get_container()
    health_use_case = container.get(CheckKubernetesHealthUseCase)
    return await health_use_case.execute(namespace)


@router.post("/sync", response_model=KubernetesSyncResponse)
async def sync_all_devices(
    request: Optional[SyncRequest] = Body(None),
) -> KubernetesSyncResponse:
    """
    Sync every healthy device and collect stale resources

    Per-device failures are listed in `failed`; the call itself only fails when
    the registry or the namespace cannot be read.
    """
    namespace = validate_namespace((request.namespace if request else None) or get_settings().k8s_namespace)

    container = get_container()
    sync_all_use_case = container.get(SyncAllDevicesUseCase)

    try:
        return await sync_all_use_case.execute(namespace)
    except EdgeMetricsError as exception:
        logger.error(f"Sync of namespace {namespace} aborted: {exception.message}")
        raise to_http_exception(exception)


@router.post("/sync/{device_id}", response_model=SyncResultResponse)
async def sync_device(
    device_id: str,
    namespace: str = Depends(resolve_namespace),
) -> SyncResultResponse:
    """Sync one device's Service/Endpoints"""
    container = get_container()
    sync_device_use_case = container.get(SyncDeviceUseCase)

    try:
        return await sync_device_use_case.execute(device_id, namespace)
    except EdgeMetricsError as exception:
        raise to_http_exception(exception)


@router.get("/resources/{device_id}", response_model=KubernetesDeviceResourcesResponse)
async def get_device_resources(
    device_id: str,
    namespace: str = Depends(resolve_namespace),
) -> KubernetesDeviceResourcesResponse:
    """
    One device's Service/Endpoints and its scrape target

    Returns 503, not synced=false, when Kubernetes cannot be asked.
    """
    container = get_container()
    resources_use_case = container.get(GetDeviceResourcesUseCase)

    try:
        return await resources_use_case.execute(device_id, namespace)
    except EdgeMetricsError as exception:
        raise to_http_exception(exception)


@router.delete(
    "/resources/{device_id}",
    response_model=SyncResultResponse,
    dependencies=[Depends(require_confirmation)],
)
async def delete_device_resources(
    device_id: str,
    namespace: str = Depends(resolve_namespace),
) -> SyncResultResponse:
    """Delete one device's Service/Endpoints, registered or not (requires confirm=true)"""
    container = get_container()
    delete_use_case = container.get(DeleteDeviceResourcesUseCase)

    try:
        return await delete_use_case.execute(device_id, namespace)
    except EdgeMetricsError as exception:
        raise to_http_exception(exception)


@router.delete(
    "/cleanup",
    response_model=KubernetesCleanupResponse,
    dependencies=[Depends(require_confirmation)],
)
async def cleanup_namespace(
    namespace: str = Depends(resolve_namespace),
) -> KubernetesCleanupResponse:
    """Delete every managed Service/Endpoints in the namespace (requires confirm=true)"""
    container = get_container()
    cleanup_use_case = container.get(CleanupNamespaceUseCase)

    try:
        return await cleanup_use_case.execute(namespace)
    except EdgeMetricsError as exception:
        raise to_http_exception(exception)


@router.get("/manifests", response_class=PlainTextResponse)
async def get_manifests(
    namespace: str = Depends(resolve_namespace),
) -> PlainTextResponse:
    """Desired resources for every registered device as multi-document YAML"""
    container = get_container()
    manifests_use_case = container.get(RenderManifestsUseCase)

    try:
        manifests = await manifests_use_case.execute(namespace)
    except EdgeMetricsError as exception:
        raise to_http_exception(exception)
    return PlainTextResponse(content=manifests, media_type="application/x-yaml")
