# Standard library imports
import logging
import os
from typing import Any, Dict, List, Optional, Union

# External package imports
import httpx

# Local application imports
from ...core.config import get_settings
from ...core.exceptions import OrchestrationRequestError, OrchestrationUnavailableError
from ...domain.models.orchestration import EndpointsInfo, NamedPort, ServiceInfo

logger = logging.getLogger(__name__)


class KubernetesClient:
    """
    HTTP client for the Kubernetes API server (core/v1 Services and Endpoints).

    Talks REST directly with the pod's service-account token. Every call has
    an explicit timeout. Failures are split in two:

    - OrchestrationUnavailableError: unreachable, timeout, 401/403, 5xx
    - OrchestrationRequestError: any other non-2xx (conflict, invalid body)

    A 404 on a single-resource read or delete is not an error; it means absent.
    """

    def __init__(
        self,
        api_url: Optional[str] = None,
        token: Optional[str] = None,
        token_path: Optional[str] = None,
        ca_path: Optional[str] = None,
        verify_ssl: Optional[bool] = None,
        timeout: Optional[float] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize Kubernetes client.

        Args:
            api_url: API server base URL. If None, reads from env / in-cluster vars.
            token: Bearer token. If None, read from token_path on every request.
            token_path: Service-account token file.
            ca_path: CA bundle used to verify the API server certificate.
            verify_ssl: Set False to skip certificate verification.
            timeout: Per-request timeout in seconds.
            http_client: Pre-built AsyncClient (tests inject a mock transport).
        """
        settings = get_settings()
        self.api_url = (api_url if api_url is not None else settings.k8s_api_url).rstrip("/")
        self._token = token
        self.token_path = token_path or settings.k8s_token_path
        self.ca_path = ca_path or settings.k8s_ca_path
        self.verify_ssl = settings.k8s_verify_ssl if verify_ssl is None else verify_ssl
        self.timeout = timeout if timeout is not None else settings.k8s_request_timeout
        self._http_client = http_client

    # ------------------------------------------------------------------
    # Plumbing
    # ------------------------------------------------------------------

    @property
    def is_configured(self) -> bool:
        """True when an API server URL and a credential source are known."""
        return bool(self.api_url) and (self._token is not None or os.path.exists(self.token_path))

    @property
    def http_client(self) -> httpx.AsyncClient:
        if self._http_client is None:
            verify: Union[bool, str] = self.verify_ssl
            if self.verify_ssl and os.path.exists(self.ca_path):
                verify = self.ca_path
            self._http_client = httpx.AsyncClient(verify=verify, timeout=self.timeout)
        return self._http_client

    async def close(self) -> None:
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None

    def _auth_headers(self) -> Dict[str, str]:
        token = self._token
        if token is None and os.path.exists(self.token_path):
            # Projected tokens rotate; read the file each time
            with open(self.token_path, "r", encoding="utf-8") as token_file:
                token = token_file.read().strip()
        if not token:
            return {}
        return {"Authorization": f"Bearer {token}"}

    async def _request(
        self,
        method: str,
        path: str,
        json: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
        allow_not_found: bool = False,
    ) -> Optional[Dict[str, Any]]:
        if not self.api_url:
            raise OrchestrationUnavailableError("Kubernetes API URL is not configured")

        url = f"{self.api_url}{path}"
        try:
            response = await self.http_client.request(
                method,
                url,
                json=json,
                params=params,
                headers=self._auth_headers(),
                timeout=self.timeout,
            )
        except httpx.TimeoutException:
            raise OrchestrationUnavailableError(f"Timeout after {self.timeout}s: {method} {path}")
        except httpx.RequestError as e:
            raise OrchestrationUnavailableError(f"Kubernetes API unreachable: {method} {path}: {e}")

        if response.status_code == 404 and allow_not_found:
            return None

        if response.is_success:
            try:
                return response.json() if response.content else {}
            except ValueError:
                return {}

        reason = self._failure_reason(response)
        if response.status_code in (401, 403) or response.status_code >= 500:
            raise OrchestrationUnavailableError(
                f"{method} {path} failed with HTTP {response.status_code}: {reason}",
                status_code=response.status_code,
            )
        raise OrchestrationRequestError(
            f"{method} {path} rejected with HTTP {response.status_code}: {reason}",
            status_code=response.status_code,
        )

    @staticmethod
    def _failure_reason(response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.text[:200]
        if isinstance(body, dict):
            return str(body.get("message") or body.get("reason") or body)
        return str(body)

    # ------------------------------------------------------------------
    # Cluster probes
    # ------------------------------------------------------------------

    async def get_version(self) -> Dict[str, Any]:
        """GET /version - reachable even without credentials on most clusters."""
        return await self._request("GET", "/version") or {}

    async def get_api_resources(self) -> Dict[str, Any]:
        """GET /api/v1 - requires a valid credential."""
        return await self._request("GET", "/api/v1") or {}

    async def read_namespace(self, namespace: str) -> Dict[str, Any]:
        return await self._request("GET", f"/api/v1/namespaces/{namespace}") or {}

    async def check_access(
        self,
        namespace: str,
        resource: str,
        verb: str,
        group: str = "",
    ) -> bool:
        """Ask the API server whether this service account may `verb` `resource`."""
        body = {
            "apiVersion": "authorization.k8s.io/v1",
            "kind": "SelfSubjectAccessReview",
            "spec": {
                "resourceAttributes": {
                    "namespace": namespace,
                    "group": group,
                    "resource": resource,
                    "verb": verb,
                }
            },
        }
        result = await self._request(
            "POST",
            "/apis/authorization.k8s.io/v1/selfsubjectaccessreviews",
            json=body,
        ) or {}
        return bool(result.get("status", {}).get("allowed", False))

    # ------------------------------------------------------------------
    # Services
    # ------------------------------------------------------------------

    async def get_service(self, namespace: str, name: str) -> ServiceInfo:
        body = await self._request(
            "GET", f"/api/v1/namespaces/{namespace}/services/{name}", allow_not_found=True
        )
        if body is None:
            return ServiceInfo(name=name, exists=False)
        return self.parse_service(body)

    async def list_services(self, namespace: str, label_selector: str) -> List[ServiceInfo]:
        body = await self._request(
            "GET",
            f"/api/v1/namespaces/{namespace}/services",
            params={"labelSelector": label_selector},
        ) or {}
        return [self.parse_service(item) for item in body.get("items", [])]

    async def create_service(self, namespace: str, manifest: Dict[str, Any]) -> ServiceInfo:
        body = await self._request(
            "POST", f"/api/v1/namespaces/{namespace}/services", json=manifest
        )
        return self.parse_service(body or manifest)

    async def replace_service(
        self, namespace: str, name: str, manifest: Dict[str, Any]
    ) -> ServiceInfo:
        body = await self._request(
            "PUT", f"/api/v1/namespaces/{namespace}/services/{name}", json=manifest
        )
        return self.parse_service(body or manifest)

    async def delete_service(self, namespace: str, name: str) -> bool:
        """Returns False when the Service was already gone."""
        body = await self._request(
            "DELETE", f"/api/v1/namespaces/{namespace}/services/{name}", allow_not_found=True
        )
        return body is not None

    # ------------------------------------------------------------------
    # Endpoints
    # ------------------------------------------------------------------

    async def get_endpoints(self, namespace: str, name: str) -> EndpointsInfo:
        body = await self._request(
            "GET", f"/api/v1/namespaces/{namespace}/endpoints/{name}", allow_not_found=True
        )
        if body is None:
            return EndpointsInfo(name=name, exists=False)
        return self.parse_endpoints(body)

    async def list_endpoints(self, namespace: str, label_selector: str) -> List[EndpointsInfo]:
        body = await self._request(
            "GET",
            f"/api/v1/namespaces/{namespace}/endpoints",
            params={"labelSelector": label_selector},
        ) or {}
        return [self.parse_endpoints(item) for item in body.get("items", [])]

    async def create_endpoints(self, namespace: str, manifest: Dict[str, Any]) -> EndpointsInfo:
        body = await self._request(
            "POST", f"/api/v1/namespaces/{namespace}/endpoints", json=manifest
        )
        return self.parse_endpoints(body or manifest)

    async def replace_endpoints(
        self, namespace: str, name: str, manifest: Dict[str, Any]
    ) -> EndpointsInfo:
        body = await self._request(
            "PUT", f"/api/v1/namespaces/{namespace}/endpoints/{name}", json=manifest
        )
        return self.parse_endpoints(body or manifest)

    async def delete_endpoints(self, namespace: str, name: str) -> bool:
        """Returns False when the Endpoints object was already gone."""
        body = await self._request(
            "DELETE", f"/api/v1/namespaces/{namespace}/endpoints/{name}", allow_not_found=True
        )
        return body is not None

    # ------------------------------------------------------------------
    # Parsing
    # ------------------------------------------------------------------

    @staticmethod
    def parse_service(body: Dict[str, Any]) -> ServiceInfo:
        metadata = body.get("metadata", {})
        spec = body.get("spec", {})
        ports = []
        for port in spec.get("ports", []) or []:
            target = port.get("targetPort")
            ports.append(
                NamedPort(
                    name=port.get("name", ""),
                    port=int(port.get("port", 0)),
                    target_port=target if isinstance(target, int) else None,
                )
            )
        return ServiceInfo(
            name=metadata.get("name", ""),
            exists=True,
            cluster_ip=spec.get("clusterIP"),
            ports=ports,
            labels=dict(metadata.get("labels") or {}),
            annotations=dict(metadata.get("annotations") or {}),
            resource_version=metadata.get("resourceVersion"),
        )

    @staticmethod
    def parse_endpoints(body: Dict[str, Any]) -> EndpointsInfo:
        metadata = body.get("metadata", {})
        ready: List[str] = []
        not_ready: List[str] = []
        ports: List[NamedPort] = []
        for subset in body.get("subsets", []) or []:
            ready.extend(address["ip"] for address in subset.get("addresses", []) or [] if "ip" in address)
            not_ready.extend(
                address["ip"] for address in subset.get("notReadyAddresses", []) or [] if "ip" in address
            )
            for port in subset.get("ports", []) or []:
                ports.append(NamedPort(name=port.get("name", ""), port=int(port.get("port", 0))))
        return EndpointsInfo(
            name=metadata.get("name", ""),
            exists=True,
            ready_addresses=ready,
            not_ready_addresses=not_ready,
            ports=ports,
            labels=dict(metadata.get("labels") or {}),
            annotations=dict(metadata.get("annotations") or {}),
            resource_version=metadata.get("resourceVersion"),
        )
