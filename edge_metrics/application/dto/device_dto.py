from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, field_serializer

from ...domain.models.bulk import ReloadResult
from ...domain.models.device_state import DeviceState
from ...utils.datetime_utils import to_iso


class DeviceConfigRequest(BaseModel):
    """
    DTO for a full device config (create or replace).

    device_id comes from the path; type-specific blocks (metrics, jetson,
    ina260, shelly, ...) are accepted as extra fields and validated by the
    domain model.
    """
    model_config = ConfigDict(extra="allow")

    device_id: Optional[str] = None  # Must match the path when given
    device_type: str
    ip_address: str
    port: int
    reload_port: int

    def to_config(self, device_id: str) -> Dict[str, Any]:
        config = self.model_dump(exclude_none=True)
        config["device_id"] = device_id
        return config


class DeviceConfigPatchRequest(BaseModel):
    """DTO for a partial config update; null removes an extension key"""
    model_config = ConfigDict(extra="allow")

    device_type: Optional[str] = None
    ip_address: Optional[str] = None
    port: Optional[int] = None
    reload_port: Optional[int] = None


class DeviceIdentityUpdateRequest(BaseModel):
    """DTO for editing identity fields without touching the config block"""
    device_type: Optional[str] = None
    ip_address: Optional[str] = None
    port: Optional[int] = None
    reload_port: Optional[int] = None


class ConfigsResponse(BaseModel):
    configs: List[Dict[str, Any]]
    total: int


class ConfigMutationResponse(BaseModel):
    """DTO returned by create / replace / patch / delete on /config"""
    status: str
    device_id: str
    reload_triggered: Optional[bool] = None
    reload_error: Optional[str] = None
    kubernetes_cleanup: Optional[str] = None


class DeviceStateResponse(BaseModel):
    device_id: str
    device_type: str
    ip_address: str
    port: int
    reload_port: int
    status: str
    last_seen: Optional[datetime] = None
    error: Optional[str] = None

    @field_serializer("last_seen")
    def serialize_last_seen(self, value: Optional[datetime]) -> Optional[str]:
        return to_iso(value)

    @classmethod
    def from_state(cls, state: DeviceState) -> "DeviceStateResponse":
        return cls(
            device_id=state.device_id,
            device_type=state.device_type.value,
            ip_address=state.ip_address,
            port=state.port,
            reload_port=state.reload_port,
            status=state.status.value,
            last_seen=state.last_seen,
            error=state.error,
        )


class DevicesResponse(BaseModel):
    devices: List[DeviceStateResponse]
    total: int
    healthy: int
    unhealthy: int


class MetricsSummaryResponse(BaseModel):
    total: int
    healthy: int
    unhealthy: int
    by_device_type: Dict[str, int]


class ReloadResultResponse(BaseModel):
    device_id: str
    status: str
    error: Optional[str] = None

    @classmethod
    def from_result(cls, result: ReloadResult) -> "ReloadResultResponse":
        return cls(device_id=result.device_id, status=result.status.value, error=result.error)


class BulkReloadRequest(BaseModel):
    """DTO for bulk reload; omit device_ids to reload every registered device"""
    device_ids: Optional[List[str]] = None


class BulkReloadResponse(BaseModel):
    results: List[ReloadResultResponse]
    total: int
    success: int
    failed: int


class HealthResponse(BaseModel):
    status: str
    service: str
    version: str
