# Standard library imports
import logging
from typing import Any, Dict

# External package imports
import httpx

# Local application imports
from .base_device_client import BaseDeviceClient
from ...core.exceptions import DeviceRequestError, DeviceUnreachableError
from ...domain.models.device import Device
from ...domain.models.device_state import DeviceState, DeviceStatus
from ...utils.datetime_utils import utc_now

logger = logging.getLogger(__name__)


class DeviceClient(BaseDeviceClient):
    """
    HTTP client for the exporter running on each edge device.

    The exporter serves metrics and a health check on `port`, and accepts
    configuration writes and reload triggers on `reload_port`.
    """

    RELOAD_PATH = "/reload"
    CONFIG_PATH = "/config"

    def _metrics_base(self, device: Device) -> str:
        return f"http://{device.ip_address}:{device.port}"

    def _control_base(self, device: Device) -> str:
        return f"http://{device.ip_address}:{device.reload_port}"

    async def probe(self, device: Device) -> DeviceState:
        """
        Query the device's live health.

        Never raises: a timeout or refused connection becomes UNREACHABLE, a
        non-2xx answer or a body reporting a bad status becomes UNHEALTHY.

        Args:
            device: Registered device to probe

        Returns:
            Fresh DeviceState for this request
        """
        url = f"{self._metrics_base(device)}{self.health_path}"
        try:
            response = await self.http_client.get(url, timeout=self.probe_timeout)
        except httpx.TimeoutException:
            logger.debug(f"Health probe timed out for device {device.device_id} at {url}")
            return DeviceState.for_device(
                device, DeviceStatus.UNREACHABLE, error=f"Timeout after {self.probe_timeout}s"
            )
        except httpx.RequestError as e:
            logger.debug(f"Health probe failed for device {device.device_id}: {e}")
            return DeviceState.for_device(
                device, DeviceStatus.UNREACHABLE, error=f"Connection error: {e}"
            )

        seen_at = utc_now()
        if not response.is_success:
            return DeviceState.for_device(
                device,
                DeviceStatus.UNHEALTHY,
                last_seen=seen_at,
                error=f"HTTP {response.status_code}",
            )

        reported = self._reported_status(response)
        if reported and reported not in ("ok", "healthy", "up"):
            return DeviceState.for_device(
                device,
                DeviceStatus.UNHEALTHY,
                last_seen=seen_at,
                error=f"Device reported status '{reported}'",
            )
        return DeviceState.for_device(device, DeviceStatus.HEALTHY, last_seen=seen_at)

    @staticmethod
    def _reported_status(response: httpx.Response) -> str:
        """Status field from a JSON health body, lower-cased; '' for any other body."""
        try:
            body = response.json()
        except ValueError:
            return ""
        if isinstance(body, dict) and isinstance(body.get("status"), str):
            return body["status"].strip().lower()
        return ""

    async def trigger_reload(self, device: Device) -> None:
        """
        Ask the device's exporter to reload its configuration.

        Raises:
            DeviceUnreachableError: Timeout or connection failure
            DeviceRequestError: Device answered with a non-2xx status
        """
        url = f"{self._control_base(device)}{self.RELOAD_PATH}"
        response = await self._send("POST", url, device, timeout=self.reload_timeout)
        logger.info(f"Reload triggered on device {device.device_id} ({response.status_code})")

    async def get_local_config(self, device: Device) -> Dict[str, Any]:
        """
        Read the configuration document the device is currently serving.

        Raises:
            DeviceUnreachableError: Timeout or connection failure
            DeviceRequestError: Non-2xx status or a body that is not a JSON object
        """
        url = f"{self._control_base(device)}{self.CONFIG_PATH}"
        response = await self._send("GET", url, device, timeout=self.config_timeout)
        try:
            body = response.json()
        except ValueError:
            body = None
        if not isinstance(body, dict):
            raise DeviceRequestError(
                f"Device {device.device_id} returned a non-object config document",
                status_code=response.status_code,
            )
        return body

    async def push_local_config(self, device: Device) -> None:
        """
        Write the registry's view of the device config to the device.

        Raises:
            DeviceUnreachableError: Timeout or connection failure
            DeviceRequestError: Device answered with a non-2xx status
        """
        url = f"{self._control_base(device)}{self.CONFIG_PATH}"
        await self._send("PUT", url, device, timeout=self.config_timeout, json=device.local_config())
        logger.info(f"Pushed local config to device {device.device_id}")

    async def _send(
        self,
        method: str,
        url: str,
        device: Device,
        timeout: float,
        **kwargs: Any,
    ) -> httpx.Response:
        try:
            response = await self.http_client.request(method, url, timeout=timeout, **kwargs)
        except httpx.TimeoutException:
            raise DeviceUnreachableError(
                f"Timeout after {timeout}s calling {method} {url} on device {device.device_id}"
            )
        except httpx.RequestError as e:
            raise DeviceUnreachableError(
                f"Connection error calling {method} {url} on device {device.device_id}: {e}"
            )

        if not response.is_success:
            raise DeviceRequestError(
                f"Device {device.device_id} returned HTTP {response.status_code} for {method} {url}",
                status_code=response.status_code,
                details={"body": response.text[:500]},
            )
        return response
