# Standard library imports
import asyncio
import logging
from typing import Awaitable, Callable, Optional, Tuple

# Local application imports
from .resource_builder import ResourceBuilder
from ...core.exceptions import (
    OrchestrationRequestError,
    OrchestrationUnavailableError,
    UpstreamUnavailableError,
)
from ...domain.constants import KubernetesLabels
from ...domain.models.bulk import ResourceAction, SyncAction, SyncOutcome
from ...domain.models.device import Device
from ...domain.models.orchestration import (
    EndpointsInfo,
    ManagedResource,
    ManagedResourceIndex,
    MirrorLookup,
    MirrorObservation,
    MirrorUnavailable,
    ResourcePair,
    ServiceInfo,
)
from ...infrastructure.external.kubernetes_client import KubernetesClient

logger = logging.getLogger(__name__)

_WRITE_ERRORS = (UpstreamUnavailableError, OrchestrationRequestError)


class ResourceMirror:
    """
    Reads and writes the Service/Endpoints pair that mirrors each device.

    Writes to the two resources are attempted independently: a denied
    Endpoints write does not stop the Service write, and the outcome records
    what happened to each.
    """

    def __init__(self, kubernetes_client: KubernetesClient, builder: ResourceBuilder) -> None:
        self.kubernetes_client = kubernetes_client
        self.builder = builder

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def fetch_pair(self, device_id: str, namespace: str) -> ResourcePair:
        """
        Raises:
            OrchestrationUnavailableError: The platform could not be asked
        """
        name = self.builder.name_for(device_id)
        service, endpoints = await asyncio.gather(
            self.kubernetes_client.get_service(namespace, name),
            self.kubernetes_client.get_endpoints(namespace, name),
        )
        return ResourcePair(device_id=device_id, service=service, endpoints=endpoints)

    async def lookup(self, device_id: str, namespace: str) -> MirrorLookup:
        """Like fetch_pair, but an unavailable platform is a result, not an exception."""
        try:
            return MirrorObservation(pair=await self.fetch_pair(device_id, namespace))
        except (OrchestrationUnavailableError, OrchestrationRequestError) as e:
            return MirrorUnavailable(
                device_id=device_id,
                reason=e.message,
                status_code=getattr(e, "status_code", None),
            )

    async def index(self, namespace: str) -> ManagedResourceIndex:
        """
        List every resource carrying this service's managed-by label.

        Raises:
            OrchestrationUnavailableError: Namespace cannot be listed
        """
        selector = KubernetesLabels.MANAGED_SELECTOR
        services, endpoints = await asyncio.gather(
            self.kubernetes_client.list_services(namespace, selector),
            self.kubernetes_client.list_endpoints(namespace, selector),
        )
        index = ManagedResourceIndex(namespace=namespace)
        for service in services:
            device_id = self.builder.device_id_of(service.name, service.annotations)
            index.services[device_id] = ManagedResource("Service", service.name, device_id)
        for item in endpoints:
            device_id = self.builder.device_id_of(item.name, item.annotations)
            index.endpoints[device_id] = ManagedResource("Endpoints", item.name, device_id)
        return index

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    async def apply(self, device: Device, namespace: str) -> SyncOutcome:
        """
        Create-or-update both resources for a device.

        Raises:
            OrchestrationUnavailableError: The current pair could not be read
        """
        pair = await self.fetch_pair(device.device_id, namespace)
        service_action, service_error = await self._apply_service(device, namespace, pair.service)
        endpoints_action, endpoints_error = await self._apply_endpoints(
            device, namespace, pair.endpoints
        )

        name = self.builder.name_for(device.device_id)
        errors = [
            f"{kind}: {error}"
            for kind, error in (("service", service_error), ("endpoints", endpoints_error))
            if error
        ]
        if errors:
            action = SyncAction.FAILED
        elif not pair.any_exists:
            action = SyncAction.CREATED
        elif service_action == ResourceAction.UNCHANGED and endpoints_action == ResourceAction.UNCHANGED:
            action = SyncAction.UNCHANGED
        else:
            action = SyncAction.UPDATED

        if action in (SyncAction.CREATED, SyncAction.UPDATED):
            logger.info(f"Device {device.device_id} {action.value} in {namespace} as {name}")
        elif action == SyncAction.FAILED:
            logger.warning(f"Sync of device {device.device_id} in {namespace} failed: {'; '.join(errors)}")

        return SyncOutcome(
            device_id=device.device_id,
            service=name,
            action=action,
            service_action=service_action,
            endpoints_action=endpoints_action,
            error="; ".join(errors) or None,
        )

    async def _apply_service(
        self, device: Device, namespace: str, observed: ServiceInfo
    ) -> Tuple[ResourceAction, Optional[str]]:
        if self.builder.service_matches(device, observed):
            return ResourceAction.UNCHANGED, None
        if observed.exists:
            manifest = self.builder.build_service(device, namespace, observed)
            return await self._write(
                ResourceAction.UPDATED,
                lambda: self.kubernetes_client.replace_service(namespace, observed.name, manifest),
            )
        manifest = self.builder.build_service(device, namespace)
        return await self._write(
            ResourceAction.CREATED,
            lambda: self.kubernetes_client.create_service(namespace, manifest),
        )

    async def _apply_endpoints(
        self, device: Device, namespace: str, observed: EndpointsInfo
    ) -> Tuple[ResourceAction, Optional[str]]:
        if self.builder.endpoints_match(device, observed):
            return ResourceAction.UNCHANGED, None
        if observed.exists:
            manifest = self.builder.build_endpoints(device, namespace, observed)
            return await self._write(
                ResourceAction.UPDATED,
                lambda: self.kubernetes_client.replace_endpoints(namespace, observed.name, manifest),
            )
        manifest = self.builder.build_endpoints(device, namespace)
        return await self._write(
            ResourceAction.CREATED,
            lambda: self.kubernetes_client.create_endpoints(namespace, manifest),
        )

    @staticmethod
    async def _write(
        action: ResourceAction, call: Callable[[], Awaitable[object]]
    ) -> Tuple[ResourceAction, Optional[str]]:
        try:
            await call()
        except _WRITE_ERRORS as e:
            return ResourceAction.FAILED, e.message
        return action, None

    async def remove(
        self,
        device_id: str,
        namespace: str,
        service_name: Optional[str] = None,
        endpoints_name: Optional[str] = None,
    ) -> SyncOutcome:
        """
        Delete both resources for a device. Already-absent resources count as
        success, so calling this twice is harmless.
        """
        default_name = self.builder.name_for(device_id)
        service_name = service_name or default_name
        endpoints_name = endpoints_name or default_name

        service_action, service_error = await self._delete(
            lambda: self.kubernetes_client.delete_service(namespace, service_name)
        )
        endpoints_action, endpoints_error = await self._delete(
            lambda: self.kubernetes_client.delete_endpoints(namespace, endpoints_name)
        )

        errors = [
            f"{kind}: {error}"
            for kind, error in (("service", service_error), ("endpoints", endpoints_error))
            if error
        ]
        if errors:
            logger.warning(f"Removing resources of device {device_id} in {namespace} failed: {'; '.join(errors)}")
        else:
            logger.info(
                f"Removed resources of device {device_id} in {namespace} "
                f"(service {service_action.value}, endpoints {endpoints_action.value})"
            )
        return SyncOutcome(
            device_id=device_id,
            service=service_name,
            action=SyncAction.FAILED if errors else SyncAction.DELETED,
            service_action=service_action,
            endpoints_action=endpoints_action,
            error="; ".join(errors) or None,
        )

    @staticmethod
    async def _delete(call: Callable[[], Awaitable[bool]]) -> Tuple[ResourceAction, Optional[str]]:
        try:
            existed = await call()
        except _WRITE_ERRORS as e:
            return ResourceAction.FAILED, e.message
        return (ResourceAction.DELETED if existed else ResourceAction.ABSENT), None
