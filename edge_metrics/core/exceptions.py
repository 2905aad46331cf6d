"""
Exception hierarchy for the edge metrics server.

Domain models, clients and use cases raise these; controllers translate them
into HTTP statuses. Inside bulk operations they are turned into per-device
result values instead of propagating.
"""

# -----------------------------------------------------------------------------
# Standard library
# -----------------------------------------------------------------------------
from typing import Any, Dict, Optional


# -----------------------------------------------------------------------------
# Base
# -----------------------------------------------------------------------------


class EdgeMetricsError(Exception):
    """Base exception for all edge metrics server errors."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}


# -----------------------------------------------------------------------------
# Registry
# -----------------------------------------------------------------------------


class DeviceNotFoundError(EdgeMetricsError):
    """Raised when a device_id is not present in the registry."""

    def __init__(self, device_id: str):
        super().__init__(f"Device {device_id} not found", details={"device_id": device_id})
        self.device_id = device_id


class DeviceAlreadyExistsError(EdgeMetricsError):
    """Raised when creating a device whose id is already registered."""

    def __init__(self, device_id: str):
        super().__init__(f"Device {device_id} already exists", details={"device_id": device_id})
        self.device_id = device_id


class DeviceValidationError(EdgeMetricsError, ValueError):
    """Raised when device attributes are malformed. Nothing is written."""
    pass


class RegistryUnavailableError(EdgeMetricsError):
    """Raised when the registry store cannot be reached."""
    pass


# -----------------------------------------------------------------------------
# Upstream (orchestration platform, devices)
# -----------------------------------------------------------------------------


class UpstreamUnavailableError(EdgeMetricsError):
    """Base exception for remote systems that could not serve a request."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, details=details)
        self.status_code = status_code


class OrchestrationUnavailableError(UpstreamUnavailableError):
    """Kubernetes API unreachable, timed out, denied access or failed server-side."""
    pass


class DeviceUnreachableError(UpstreamUnavailableError):
    """Device did not answer (connection refused, timeout, DNS failure)."""
    pass


class DeviceRequestError(EdgeMetricsError):
    """Device answered, but with a non-2xx status."""

    def __init__(self, message: str, status_code: int, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details=details)
        self.status_code = status_code


class OrchestrationRequestError(EdgeMetricsError):
    """Kubernetes rejected a request (conflict, invalid body) while otherwise available."""

    def __init__(self, message: str, status_code: int, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details=details)
        self.status_code = status_code
