from .config import Settings, get_settings
from .exceptions import (
    EdgeMetricsError,
    DeviceNotFoundError,
    DeviceAlreadyExistsError,
    DeviceValidationError,
    RegistryUnavailableError,
    UpstreamUnavailableError,
    OrchestrationUnavailableError,
    DeviceUnreachableError,
    DeviceRequestError,
    OrchestrationRequestError,
)
from .logging_config import configure_logging

__all__ = [
    "Settings",
    "get_settings",
    "EdgeMetricsError",
    "DeviceNotFoundError",
    "DeviceAlreadyExistsError",
    "DeviceValidationError",
    "RegistryUnavailableError",
    "UpstreamUnavailableError",
    "OrchestrationUnavailableError",
    "DeviceUnreachableError",
    "DeviceRequestError",
    "OrchestrationRequestError",
    "configure_logging",
]
