# Standard library imports
import re
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, ClassVar, Dict, List, Optional, Tuple, Type

# Local application imports
from ..constants import DeviceFields
from ...core.exceptions import DeviceValidationError


_IPV4_PATTERN = re.compile(r"(\d{1,3}\.){3}\d{1,3}", re.ASCII)


class DeviceType(str, Enum):
    """Closed set of supported edge device types."""
    JETSON_ORIN = "jetson_orin"
    JETSON_XAVIER = "jetson_xavier"
    JETSON_NANO = "jetson_nano"
    JETSON = "jetson"
    RASPBERRY_PI = "raspberry_pi"
    ORANGE_PI = "orange_pi"
    LATTEPANDA = "lattepanda"
    SHELLY = "shelly"

    @classmethod
    def parse(cls, value: Any) -> "DeviceType":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip())
        except ValueError:
            allowed = ", ".join(member.value for member in cls)
            raise DeviceValidationError(
                f"Invalid device_type '{value}'. Allowed: {allowed}",
                details={"field": DeviceFields.DEVICE_TYPE},
            )


def is_valid_ipv4(value: Any) -> bool:
    """Dotted-quad check with every octet in 0-255."""
    if not isinstance(value, str) or not _IPV4_PATTERN.fullmatch(value):
        return False
    return all(0 <= int(part) <= 255 for part in value.split("."))


def validate_port(name: str, value: Any) -> int:
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, int):
        raise DeviceValidationError(
            f"{name} must be an integer between 1 and 65535",
            details={"field": name},
        )
    if value < 1 or value > 65535:
        raise DeviceValidationError(
            f"{name} must be between 1 and 65535",
            details={"field": name},
        )
    return value


def _require_mapping(name: str, value: Any) -> None:
    if value is not None and not isinstance(value, dict):
        raise DeviceValidationError(f"{name} must be an object", details={"field": name})


# -----------------------------------------------------------------------------
# Extension envelope
# -----------------------------------------------------------------------------


@dataclass
class DeviceExtension:
    """
    Device-type-specific configuration block.

    Only the keys listed in KNOWN_FIELDS are typed; anything else the exporter
    understands is carried in `extra` and written back unchanged.
    """
    interval: Optional[int] = None
    metrics: Optional[Dict[str, bool]] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    KNOWN_FIELDS: ClassVar[Tuple[str, ...]] = (DeviceFields.INTERVAL, DeviceFields.METRICS)

    def __post_init__(self) -> None:
        if self.interval is not None:
            if isinstance(self.interval, bool) or not isinstance(self.interval, int) or self.interval < 1:
                raise DeviceValidationError(
                    "interval must be a positive integer",
                    details={"field": DeviceFields.INTERVAL},
                )
        _require_mapping(DeviceFields.METRICS, self.metrics)
        if self.metrics:
            for name, enabled in self.metrics.items():
                if not isinstance(enabled, bool):
                    raise DeviceValidationError(
                        f"metrics.{name} must be true or false",
                        details={"field": DeviceFields.METRICS},
                    )
        for name in self.KNOWN_FIELDS:
            if name not in (DeviceFields.INTERVAL, DeviceFields.METRICS):
                _require_mapping(name, getattr(self, name))

    @classmethod
    def from_fields(cls, values: Dict[str, Any]) -> "DeviceExtension":
        known = {
            name: values[name]
            for name in cls.KNOWN_FIELDS
            if values.get(name) is not None
        }
        extra = {key: value for key, value in values.items() if key not in cls.KNOWN_FIELDS}
        return cls(**known, extra=extra)

    def to_fields(self) -> Dict[str, Any]:
        values = dict(self.extra)
        for name in self.KNOWN_FIELDS:
            value = getattr(self, name)
            if value is not None:
                values[name] = value
        return values


@dataclass
class JetsonExtension(DeviceExtension):
    """NVIDIA Jetson boards: tegrastats options and an optional INA260 power sensor."""
    jetson: Optional[Dict[str, Any]] = None
    ina260: Optional[Dict[str, Any]] = None

    KNOWN_FIELDS: ClassVar[Tuple[str, ...]] = (
        DeviceFields.INTERVAL,
        DeviceFields.METRICS,
        DeviceFields.JETSON,
        DeviceFields.INA260,
    )


@dataclass
class BoardExtension(DeviceExtension):
    """Generic single-board computers with an optional INA260 power sensor."""
    ina260: Optional[Dict[str, Any]] = None

    KNOWN_FIELDS: ClassVar[Tuple[str, ...]] = (
        DeviceFields.INTERVAL,
        DeviceFields.METRICS,
        DeviceFields.INA260,
    )


@dataclass
class ShellyExtension(DeviceExtension):
    """Shelly smart plugs bridged by a sensor exporter."""
    shelly: Optional[Dict[str, Any]] = None

    KNOWN_FIELDS: ClassVar[Tuple[str, ...]] = (
        DeviceFields.INTERVAL,
        DeviceFields.METRICS,
        DeviceFields.SHELLY,
    )


EXTENSION_TYPES: Dict[DeviceType, Type[DeviceExtension]] = {
    DeviceType.JETSON_ORIN: JetsonExtension,
    DeviceType.JETSON_XAVIER: JetsonExtension,
    DeviceType.JETSON_NANO: JetsonExtension,
    DeviceType.JETSON: JetsonExtension,
    DeviceType.RASPBERRY_PI: BoardExtension,
    DeviceType.ORANGE_PI: BoardExtension,
    DeviceType.LATTEPANDA: BoardExtension,
    DeviceType.SHELLY: ShellyExtension,
}


def extension_class_for(device_type: DeviceType) -> Type[DeviceExtension]:
    return EXTENSION_TYPES[device_type]


# -----------------------------------------------------------------------------
# Device
# -----------------------------------------------------------------------------


@dataclass
class Device:
    """
    Pure domain model for a registered edge device.

    Holds the identity fields every device has, plus a typed extension block
    selected by device_type. Construction validates everything, so an invalid
    Device never reaches the repository.
    """
    device_id: str
    device_type: DeviceType
    ip_address: str
    port: int
    reload_port: int
    extension: Optional[DeviceExtension] = None

    def __post_init__(self) -> None:
        """Business validations"""
        if not isinstance(self.device_id, str) or not self.device_id.strip():
            raise DeviceValidationError(
                "Device ID is required",
                details={"field": DeviceFields.DEVICE_ID},
            )
        self.device_id = self.device_id.strip()
        self.device_type = DeviceType.parse(self.device_type)

        if not is_valid_ipv4(self.ip_address):
            raise DeviceValidationError(
                f"Invalid IP address format: {self.ip_address!r}",
                details={"field": DeviceFields.IP_ADDRESS},
            )
        validate_port(DeviceFields.PORT, self.port)
        validate_port(DeviceFields.RELOAD_PORT, self.reload_port)

        expected = extension_class_for(self.device_type)
        if self.extension is None:
            self.extension = expected()
        elif type(self.extension) is not expected:
            raise DeviceValidationError(
                f"{type(self.extension).__name__} does not match device_type {self.device_type.value}",
                details={"field": DeviceFields.DEVICE_TYPE},
            )

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "Device":
        """Build a Device from a flat config document (API body or stored record)."""
        missing: List[str] = [
            name for name in DeviceFields.REQUIRED_FIELDS
            if config.get(name) in (None, "")
        ]
        if missing:
            raise DeviceValidationError(
                f"Missing required field(s): {', '.join(missing)}",
                details={"fields": missing},
            )

        remaining = {
            key: value for key, value in config.items()
            if key not in DeviceFields.REQUIRED_FIELDS and key != DeviceFields.MONGO_ID
        }
        device_type = DeviceType.parse(config[DeviceFields.DEVICE_TYPE])
        return cls(
            device_id=config[DeviceFields.DEVICE_ID],
            device_type=device_type,
            ip_address=config[DeviceFields.IP_ADDRESS],
            port=config[DeviceFields.PORT],
            reload_port=config[DeviceFields.RELOAD_PORT],
            extension=extension_class_for(device_type).from_fields(remaining),
        )

    def to_config(self) -> Dict[str, Any]:
        """Flatten back to the config document shape the API and the registry use."""
        config: Dict[str, Any] = {
            DeviceFields.DEVICE_ID: self.device_id,
            DeviceFields.DEVICE_TYPE: self.device_type.value,
            DeviceFields.IP_ADDRESS: self.ip_address,
            DeviceFields.PORT: self.port,
            DeviceFields.RELOAD_PORT: self.reload_port,
        }
        config.update(self.extension.to_fields())
        return config

    def local_config(self) -> Dict[str, Any]:
        """Config document served by the device's exporter (no registry-only fields)."""
        config = self.to_config()
        config.pop(DeviceFields.DEVICE_ID)
        config.pop(DeviceFields.IP_ADDRESS)
        return config

    def with_identity(self, **changes: Any) -> "Device":
        """
        Return a copy with identity fields changed, keeping the extension block.

        Changing device_type re-reads the extension under the new type so that
        fields the new type knows about are typed and the rest pass through.
        """
        unknown = set(changes) - set(DeviceFields.IDENTITY_FIELDS)
        if unknown:
            raise DeviceValidationError(
                f"Not an identity field: {', '.join(sorted(unknown))}",
                details={"fields": sorted(unknown)},
            )
        changes = {key: value for key, value in changes.items() if value is not None}
        if DeviceFields.DEVICE_TYPE in changes:
            new_type = DeviceType.parse(changes[DeviceFields.DEVICE_TYPE])
            changes[DeviceFields.DEVICE_TYPE] = new_type
            if extension_class_for(new_type) is not type(self.extension):
                changes["extension"] = extension_class_for(new_type).from_fields(
                    self.extension.to_fields()
                )
        return replace(self, **changes)

