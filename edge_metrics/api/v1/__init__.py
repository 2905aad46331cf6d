from .health_controller import router as health_router
from .config_controller import router as config_router
from .device_controller import router as device_router
from .metrics_controller import router as metrics_router
from .kubernetes_controller import router as kubernetes_router


__all__ = ["health_router", "config_router", "device_router", "metrics_router", "kubernetes_router"]
