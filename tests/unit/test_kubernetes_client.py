"""
Unit tests for KubernetesClient error classification and parsing.
"""
import httpx
import pytest

from edge_metrics.core.exceptions import OrchestrationRequestError, OrchestrationUnavailableError
from edge_metrics.infrastructure.external.kubernetes_client import KubernetesClient


def _client(handler, api_url="https://k8s.test") -> KubernetesClient:
    return KubernetesClient(
        api_url=api_url,
        token="secret-token",
        timeout=1.0,
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )


SERVICE_BODY = {
    "metadata": {
        "name": "edge-device-rpi-01",
        "resourceVersion": "7",
        "labels": {"app.kubernetes.io/managed-by": "edge-metrics-server"},
        "annotations": {"edge-metrics.io/device-id": "rpi-01"},
    },
    "spec": {
        "clusterIP": "10.96.0.12",
        "ports": [{"name": "metrics", "port": 9100, "targetPort": 9100}],
    },
}


class TestRequests:
    @pytest.mark.asyncio
    async def test_sends_bearer_token(self):
        headers = []

        def handler(request):
            headers.append(request.headers.get("Authorization"))
            return httpx.Response(200, json={"gitVersion": "v1.29.0"})

        assert (await _client(handler).get_version())["gitVersion"] == "v1.29.0"
        assert headers == ["Bearer secret-token"]

    @pytest.mark.asyncio
    async def test_get_missing_service_is_absent(self):
        info = await _client(lambda request: httpx.Response(404, json={"reason": "NotFound"})).get_service(
            "monitoring", "edge-device-x"
        )
        assert info.exists is False
        assert info.name == "edge-device-x"

    @pytest.mark.asyncio
    async def test_get_service_parses_body(self):
        def handler(request):
            assert request.url.path == "/api/v1/namespaces/monitoring/services/edge-device-rpi-01"
            return httpx.Response(200, json=SERVICE_BODY)

        info = await _client(handler).get_service("monitoring", "edge-device-rpi-01")
        assert info.exists
        assert info.cluster_ip == "10.96.0.12"
        assert info.resource_version == "7"
        assert info.port_named("metrics").target_port == 9100

    @pytest.mark.asyncio
    async def test_list_passes_label_selector(self):
        selectors = []

        def handler(request):
            selectors.append(request.url.params.get("labelSelector"))
            return httpx.Response(200, json={"items": [SERVICE_BODY]})

        services = await _client(handler).list_services("monitoring", "a=b")
        assert selectors == ["a=b"]
        assert [service.name for service in services] == ["edge-device-rpi-01"]

    @pytest.mark.asyncio
    async def test_delete_missing_returns_false(self):
        deleted = await _client(lambda request: httpx.Response(404)).delete_endpoints("monitoring", "x")
        assert deleted is False

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status_code", [401, 403, 500, 503])
    async def test_denied_and_server_errors_are_unavailable(self, status_code):
        handler = lambda request: httpx.Response(status_code, json={"message": "nope"})
        with pytest.raises(OrchestrationUnavailableError) as error:
            await _client(handler).list_services("monitoring", "a=b")
        assert error.value.status_code == status_code
        assert "nope" in error.value.message

    @pytest.mark.asyncio
    async def test_conflict_is_request_error(self):
        handler = lambda request: httpx.Response(409, json={"message": "already exists"})
        with pytest.raises(OrchestrationRequestError) as error:
            await _client(handler).create_service("monitoring", SERVICE_BODY)
        assert error.value.status_code == 409

    @pytest.mark.asyncio
    async def test_404_on_list_is_request_error(self):
        with pytest.raises(OrchestrationRequestError):
            await _client(lambda request: httpx.Response(404)).list_endpoints("missing", "a=b")

    @pytest.mark.asyncio
    async def test_connection_failure_is_unavailable(self):
        def handler(request):
            raise httpx.ConnectError("no route to host", request=request)

        with pytest.raises(OrchestrationUnavailableError) as error:
            await _client(handler).get_service("monitoring", "x")
        assert error.value.status_code is None

    @pytest.mark.asyncio
    async def test_missing_api_url_is_unavailable(self):
        client = _client(lambda request: httpx.Response(200), api_url="")
        assert client.is_configured is False
        with pytest.raises(OrchestrationUnavailableError):
            await client.get_version()

    @pytest.mark.asyncio
    async def test_access_review_reads_allowed(self):
        def handler(request):
            return httpx.Response(201, json={"status": {"allowed": request.read().count(b'"delete"') == 0}})

        client = _client(handler)
        assert await client.check_access("monitoring", "services", "create") is True
        assert await client.check_access("monitoring", "services", "delete") is False


class TestParsing:
    def test_parse_endpoints_splits_ready_and_not_ready(self):
        info = KubernetesClient.parse_endpoints(
            {
                "metadata": {"name": "edge-device-rpi-01"},
                "subsets": [
                    {
                        "addresses": [{"ip": "10.0.0.5"}],
                        "notReadyAddresses": [{"ip": "10.0.0.6"}],
                        "ports": [{"name": "metrics", "port": 9100}],
                    }
                ],
            }
        )
        assert info.ready_addresses == ["10.0.0.5"]
        assert info.not_ready_addresses == ["10.0.0.6"]
        assert info.ports[0].port == 9100

    def test_named_target_port_is_dropped(self):
        info = KubernetesClient.parse_service(
            {"metadata": {"name": "s"}, "spec": {"ports": [{"name": "metrics", "port": 80, "targetPort": "http"}]}}
        )
        assert info.ports[0].target_port is None
