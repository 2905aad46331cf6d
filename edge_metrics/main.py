# Standard library imports
from pathlib import Path
from contextlib import asynccontextmanager
import logging

# External package imports
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Local application imports
from .api.v1 import config_router, device_router, health_router, kubernetes_router, metrics_router
from .core.config import get_settings
from .core.exceptions import RegistryUnavailableError
from .core.logging_config import configure_logging
from .di.container import get_container
from .domain.repositories.device_repository import DeviceRepository
from .infrastructure.db.mongo_connection import close_database
from .infrastructure.external.kubernetes_client import KubernetesClient
from .infrastructure.http_client_factory import close_shared_http_client

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup/shutdown events.

    Creates the registry index on startup and closes pooled HTTP clients and
    the MongoDB client on shutdown.
    """
    container = get_container()

    # Startup: unique device_id index on the registry
    try:
        await container.get(DeviceRepository).ensure_indexes()
        logger.info("Registry indexes ensured")
    except RegistryUnavailableError as e:
        # Don't fail app startup if MongoDB is not up yet; requests will report 503
        logger.error(f"Could not create registry indexes: {e.message}")

    settings = get_settings()
    logger.info(
        f"{settings.service_name} {settings.service_version} started "
        f"(namespace {settings.k8s_namespace}, Kubernetes API {settings.k8s_api_url or '<unset>'})"
    )

    yield

    # Shutdown: release connections
    try:
        await container.get(KubernetesClient).close()
        await close_shared_http_client()
        close_database()
    except Exception as e:
        logger.error(f"Error during shutdown: {e}", exc_info=True)

    logger.info("Application shutdown complete")


def create_application() -> FastAPI:
    """
    Create and configure FastAPI application.

    This function sets up the FastAPI application with:
    - Environment variable loading
    - Logging configuration
    - CORS middleware configuration
    - API route registration

    Returns:
        Configured FastAPI application instance
    """
    # Load environment variables from .env file
    env_path = Path(__file__).resolve().parent.parent / ".env"
    load_dotenv(env_path)

    settings = get_settings()
    configure_logging(settings.log_level)

    application = FastAPI(
        title="Edge Metrics Server API",
        version=settings.service_version,
        description="Device registry and Kubernetes reconciliation for edge metrics exporters",
        lifespan=lifespan
    )

    # The web console is served from a different origin during development
    application.add_middleware(
        CORSMiddleware,
        allow_origins=[
            "http://localhost:5173",
            "http://localhost:3000",
        ],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register API routers
    application.include_router(health_router, prefix="/health")
    application.include_router(config_router, prefix="/config")
    application.include_router(device_router, prefix="/devices")
    application.include_router(metrics_router, prefix="/metrics")
    application.include_router(kubernetes_router, prefix="/kubernetes")

    return application


# Create application instance
app = create_application()
