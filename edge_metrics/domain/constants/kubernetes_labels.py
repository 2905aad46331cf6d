"""Label keys and values stamped on every mirrored Kubernetes resource"""


class KubernetesLabels:
    """Label constants for managed Service/Endpoints resources"""
    MANAGED_BY = "app.kubernetes.io/managed-by"
    MANAGED_BY_VALUE = "edge-metrics-server"
    COMPONENT = "app.kubernetes.io/component"
    COMPONENT_VALUE = "edge-device"
    DEVICE_ID = "edge-metrics.io/device-id"
    DEVICE_TYPE = "edge-metrics.io/device-type"

    # Selector matching only resources written by this service
    MANAGED_SELECTOR = f"{MANAGED_BY}={MANAGED_BY_VALUE}"

    # Annotation carrying the unsanitised device id (label values are restricted)
    DEVICE_ID_ANNOTATION = "edge-metrics.io/device-id"

    METRICS_PORT_NAME = "metrics"
    RELOAD_PORT_NAME = "reload"
