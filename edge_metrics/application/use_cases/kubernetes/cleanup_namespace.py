# Standard library imports
import logging
from typing import Optional, Tuple

# Local application imports
from ....core.config import get_settings
from ....core.exceptions import OrchestrationRequestError, UpstreamUnavailableError
from ....domain.models.bulk import CleanupResult
from ....domain.models.orchestration import ManagedResource
from ....infrastructure.external.kubernetes_client import KubernetesClient
from ...dto.kubernetes_dto import CleanupFailure, KubernetesCleanupResponse
from ...services.bulk_executor import run_bounded
from ...services.resource_mirror import ResourceMirror

logger = logging.getLogger(__name__)


class CleanupNamespaceUseCase:
    """
    Use case for deleting every managed Service/Endpoints in a namespace.

    Registry-agnostic: only the managed-by label decides what is deleted.
    """

    def __init__(
        self,
        mirror: ResourceMirror,
        kubernetes_client: KubernetesClient,
        concurrency_limit: Optional[int] = None,
    ) -> None:
        self.mirror = mirror
        self.kubernetes_client = kubernetes_client
        self.concurrency_limit = concurrency_limit or get_settings().bulk_concurrency_limit

    async def execute(self, namespace: str) -> KubernetesCleanupResponse:
        """
        Raises:
            OrchestrationUnavailableError: If the namespace could not be listed
        """
        index = await self.mirror.index(namespace)
        resources = list(index.services.values()) + list(index.endpoints.values())
        logger.warning(f"Cleaning up {len(resources)} managed resource(s) in {namespace}")

        async def delete(resource: ManagedResource) -> Tuple[ManagedResource, Optional[str]]:
            try:
                if resource.kind == "Service":
                    await self.kubernetes_client.delete_service(namespace, resource.name)
                else:
                    await self.kubernetes_client.delete_endpoints(namespace, resource.name)
            except (UpstreamUnavailableError, OrchestrationRequestError) as e:
                return resource, e.message
            return resource, None

        def on_error(resource: ManagedResource, error: Exception) -> Tuple[ManagedResource, Optional[str]]:
            return resource, str(error)

        result = CleanupResult(namespace=namespace)
        for resource, error in await run_bounded(
            resources, delete, on_error, limit=self.concurrency_limit
        ):
            if error:
                result.failed.append({"kind": resource.kind, "name": resource.name, "error": error})
            elif resource.kind == "Service":
                result.deleted_services.append(resource.name)
            else:
                result.deleted_endpoints.append(resource.name)

        logger.info(
            f"Cleanup of {namespace}: {len(result.deleted_services)} service(s), "
            f"{len(result.deleted_endpoints)} endpoints deleted, {len(result.failed)} failed"
        )
        return KubernetesCleanupResponse(
            status=result.status,
            namespace=namespace,
            deleted_services=sorted(result.deleted_services),
            deleted_endpoints=sorted(result.deleted_endpoints),
            failed=[CleanupFailure(**failure) for failure in result.failed],
        )
