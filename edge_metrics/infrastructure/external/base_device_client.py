# Standard library imports
import logging
from typing import Optional

# External package imports
import httpx

# Local application imports
from ...core.config import get_settings
from ..http_client_factory import get_shared_http_client

logger = logging.getLogger(__name__)


class BaseDeviceClient:
    """
    Base class for clients that talk to edge devices directly.

    Provides the shared HTTP client and the per-call timeouts.
    """

    def __init__(
        self,
        http_client: Optional[httpx.AsyncClient] = None,
        probe_timeout: Optional[float] = None,
        reload_timeout: Optional[float] = None,
        config_timeout: Optional[float] = None,
    ):
        """
        Initialize base device client.

        Args:
            http_client: AsyncClient to use. If None, the shared pooled client.
            probe_timeout: Health probe timeout in seconds. If None, reads from env.
            reload_timeout: Reload trigger timeout in seconds. If None, reads from env.
            config_timeout: Local config read/write timeout in seconds. If None, reads from env.
        """
        settings = get_settings()
        self._http_client = http_client
        self.probe_timeout = probe_timeout if probe_timeout is not None else settings.device_probe_timeout
        self.reload_timeout = reload_timeout if reload_timeout is not None else settings.device_reload_timeout
        self.config_timeout = config_timeout if config_timeout is not None else settings.device_config_timeout
        self.health_path = settings.device_health_path

    @property
    def http_client(self) -> httpx.AsyncClient:
        if self._http_client is None:
            self._http_client = get_shared_http_client()
        return self._http_client
