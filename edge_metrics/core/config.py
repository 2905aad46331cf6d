# Standard library imports
import os
from typing import Final, Optional


def _default_kubernetes_api_url() -> str:
    """Build the in-cluster API server URL from the service env vars, if present."""
    host = os.getenv("KUBERNETES_SERVICE_HOST", "")
    port = os.getenv("KUBERNETES_SERVICE_PORT", "443")
    if not host:
        return ""
    if ":" in host:
        host = f"[{host}]"
    return f"https://{host}:{port}"


class Settings:
    """
    Application settings loaded from environment variables.

    This class centralizes all configuration settings for the application.
    All settings are loaded from environment variables with sensible defaults.
    """

    def __init__(self) -> None:
        # Service identity
        self.service_name: Final[str] = os.getenv("SERVICE_NAME", "edge-metrics-server")
        self.service_version: Final[str] = os.getenv("SERVICE_VERSION", "1.0.0")
        self.log_level: Final[str] = os.getenv("LOG_LEVEL", "INFO")

        # Registry (MongoDB) Configuration
        self.mongo_uri: Final[str] = os.getenv("MONGO_URI", "mongodb://localhost:27017")
        self.mongo_database_name: Final[str] = os.getenv("MONGO_DB_NAME", "edge_metrics")
        self.mongo_device_collection: Final[str] = os.getenv(
            "MONGO_DEVICE_COLLECTION", "device_configs"
        )

        # Kubernetes Configuration
        self.k8s_api_url: Final[str] = os.getenv("K8S_API_URL", "") or _default_kubernetes_api_url()
        self.k8s_token_path: Final[str] = os.getenv(
            "K8S_TOKEN_PATH",
            "/var/run/secrets/kubernetes.io/serviceaccount/token"
        )
        self.k8s_ca_path: Final[str] = os.getenv(
            "K8S_CA_PATH",
            "/var/run/secrets/kubernetes.io/serviceaccount/ca.crt"
        )
        self.k8s_verify_ssl: Final[bool] = os.getenv("K8S_VERIFY_SSL", "true").lower() != "false"
        self.k8s_namespace: Final[str] = os.getenv("K8S_NAMESPACE", "monitoring")
        self.k8s_request_timeout: Final[float] = float(os.getenv("K8S_REQUEST_TIMEOUT", "10"))
        self.k8s_resource_prefix: Final[str] = os.getenv("K8S_RESOURCE_PREFIX", "edge-device-")

        # Device network Configuration
        self.device_probe_timeout: Final[float] = float(os.getenv("DEVICE_PROBE_TIMEOUT", "3"))
        self.device_reload_timeout: Final[float] = float(os.getenv("DEVICE_RELOAD_TIMEOUT", "5"))
        self.device_config_timeout: Final[float] = float(os.getenv("DEVICE_CONFIG_TIMEOUT", "5"))
        self.device_health_path: Final[str] = os.getenv("DEVICE_HEALTH_PATH", "/health")
        self.metrics_path: Final[str] = os.getenv("METRICS_PATH", "/metrics")

        # Bulk operations
        self.bulk_concurrency_limit: Final[int] = int(os.getenv("BULK_CONCURRENCY_LIMIT", "10"))


# Global settings instance (singleton pattern)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get application settings (singleton pattern)

    Returns:
        Settings instance with all configuration values
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
