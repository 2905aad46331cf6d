# Standard library imports
import asyncio
import logging
from typing import Tuple

# Local application imports
from ....core.exceptions import OrchestrationRequestError, OrchestrationUnavailableError
from ....domain.models.orchestration import OrchestrationHealth
from ....infrastructure.external.kubernetes_client import KubernetesClient
from ...dto.kubernetes_dto import KubernetesHealthResponse

logger = logging.getLogger(__name__)

RBAC_VERBS = ("get", "list", "create", "update", "delete")

_K8S_ERRORS = (OrchestrationUnavailableError, OrchestrationRequestError)


class CheckKubernetesHealthUseCase:
    """
    Use case for the platform health / RBAC report.

    Reachability, credentials, namespace access and per-kind permissions are
    checked independently. kubernetes_available only reflects whether the API
    server answered at all, so a reachable server with a broken service
    account still shows as available.
    """

    def __init__(self, kubernetes_client: KubernetesClient) -> None:
        self.kubernetes_client = kubernetes_client

    async def execute(self, namespace: str) -> KubernetesHealthResponse:
        health = OrchestrationHealth(namespace=namespace)

        (
            health.kubernetes_available,
            health.client_initialized,
            (health.namespace_accessible, namespace_permission),
            services_permission,
            endpoints_permission,
        ) = await asyncio.gather(
            self._check_reachable(),
            self._check_credentials(),
            self._check_namespace(namespace),
            self._check_permissions(namespace, "services"),
            self._check_permissions(namespace, "endpoints"),
        )
        health.rbac_permissions = {
            "namespace": namespace_permission,
            "services": services_permission,
            "endpoints": endpoints_permission,
        }

        if not health.kubernetes_available:
            logger.error(f"Kubernetes API unreachable at {self.kubernetes_client.api_url or '<unset>'}")
        elif any(value != "ok" for value in health.rbac_permissions.values()):
            logger.warning(f"Kubernetes permissions incomplete in {namespace}: {health.rbac_permissions}")

        return KubernetesHealthResponse(
            namespace=health.namespace,
            kubernetes_available=health.kubernetes_available,
            client_initialized=health.client_initialized,
            namespace_accessible=health.namespace_accessible,
            rbac_permissions=health.rbac_permissions,
        )

    async def _check_reachable(self) -> bool:
        try:
            await self.kubernetes_client.get_version()
        except OrchestrationUnavailableError as e:
            # Any HTTP status means the server answered
            return e.status_code is not None
        except OrchestrationRequestError:
            return True
        return True

    async def _check_credentials(self) -> bool:
        if not self.kubernetes_client.is_configured:
            return False
        try:
            await self.kubernetes_client.get_api_resources()
        except _K8S_ERRORS:
            return False
        return True

    async def _check_namespace(self, namespace: str) -> Tuple[bool, str]:
        try:
            await self.kubernetes_client.read_namespace(namespace)
        except OrchestrationUnavailableError as e:
            if e.status_code in (401, 403):
                return False, f"denied: {e.message}"
            return False, f"error: {e.message}"
        except OrchestrationRequestError as e:
            return False, f"error: {e.message}"
        return True, "ok"

    async def _check_permissions(self, namespace: str, resource: str) -> str:
        try:
            allowed = await asyncio.gather(
                *(self.kubernetes_client.check_access(namespace, resource, verb) for verb in RBAC_VERBS)
            )
        except _K8S_ERRORS as e:
            return f"error: {e.message}"
        denied = [verb for verb, ok in zip(RBAC_VERBS, allowed) if not ok]
        if denied:
            return f"denied: {', '.join(denied)}"
        return "ok"
