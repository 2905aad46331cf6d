"""
Unit tests for DeviceClient against an httpx.MockTransport.
"""
import httpx
import pytest

from edge_metrics.core.exceptions import DeviceRequestError, DeviceUnreachableError
from edge_metrics.domain.models.device_state import DeviceStatus
from edge_metrics.infrastructure.external.device_client import DeviceClient
from tests.fakes import make_device


def _client(handler) -> DeviceClient:
    return DeviceClient(
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
        probe_timeout=1.0,
        reload_timeout=1.0,
        config_timeout=1.0,
    )


@pytest.fixture
def device():
    return make_device("rpi-01", ip_address="10.0.0.5", port=9100, reload_port=9101, interval=15)


class TestProbe:
    @pytest.mark.asyncio
    async def test_healthy_on_ok_body(self, device):
        def handler(request):
            assert str(request.url) == "http://10.0.0.5:9100/health"
            return httpx.Response(200, json={"status": "ok"})

        state = await _client(handler).probe(device)
        assert state.status == DeviceStatus.HEALTHY
        assert state.last_seen is not None
        assert state.error is None

    @pytest.mark.asyncio
    async def test_plain_text_body_counts_as_healthy(self, device):
        state = await _client(lambda request: httpx.Response(200, text="OK")).probe(device)
        assert state.status == DeviceStatus.HEALTHY

    @pytest.mark.asyncio
    async def test_reported_bad_status_is_unhealthy(self, device):
        handler = lambda request: httpx.Response(200, json={"status": "degraded"})
        state = await _client(handler).probe(device)
        assert state.status == DeviceStatus.UNHEALTHY
        assert "degraded" in state.error

    @pytest.mark.asyncio
    async def test_server_error_is_unhealthy(self, device):
        state = await _client(lambda request: httpx.Response(503)).probe(device)
        assert state.status == DeviceStatus.UNHEALTHY
        assert state.error == "HTTP 503"
        assert state.last_seen is not None

    @pytest.mark.asyncio
    async def test_connection_error_is_unreachable(self, device):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        state = await _client(handler).probe(device)
        assert state.status == DeviceStatus.UNREACHABLE
        assert state.last_seen is None

    @pytest.mark.asyncio
    async def test_timeout_is_unreachable(self, device):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        state = await _client(handler).probe(device)
        assert state.status == DeviceStatus.UNREACHABLE
        assert "Timeout" in state.error


class TestControlCalls:
    @pytest.mark.asyncio
    async def test_reload_posts_to_reload_port(self, device):
        seen = []

        def handler(request):
            seen.append((request.method, str(request.url)))
            return httpx.Response(200)

        await _client(handler).trigger_reload(device)
        assert seen == [("POST", "http://10.0.0.5:9101/reload")]

    @pytest.mark.asyncio
    async def test_reload_non_2xx_raises_request_error(self, device):
        with pytest.raises(DeviceRequestError) as error:
            await _client(lambda request: httpx.Response(500, text="boom")).trigger_reload(device)
        assert error.value.status_code == 500

    @pytest.mark.asyncio
    async def test_reload_refused_raises_unreachable(self, device):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(DeviceUnreachableError):
            await _client(handler).trigger_reload(device)

    @pytest.mark.asyncio
    async def test_push_sends_local_config(self, device):
        bodies = []

        def handler(request):
            bodies.append(request.read())
            return httpx.Response(204)

        await _client(handler).push_local_config(device)
        assert b'"interval":15' in bodies[0].replace(b" ", b"")
        assert b"device_id" not in bodies[0]

    @pytest.mark.asyncio
    async def test_get_local_config_returns_object(self, device):
        handler = lambda request: httpx.Response(200, json={"interval": 30})
        assert await _client(handler).get_local_config(device) == {"interval": 30}

    @pytest.mark.asyncio
    async def test_get_local_config_rejects_non_object(self, device):
        handler = lambda request: httpx.Response(200, json=[1, 2])
        with pytest.raises(DeviceRequestError):
            await _client(handler).get_local_config(device)
