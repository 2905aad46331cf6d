import logging


# ============================================
# Health Check Log Filter
# ============================================
class HealthCheckFilter(logging.Filter):
    """Filter out noisy health check log messages from uvicorn access logs."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        # Liveness/readiness probes hit GET /health every few seconds
        if "GET /health" in message and "200" in message:
            return False
        return True


def configure_logging(level: str = "INFO") -> None:
    """Configure logging for the application."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    uvicorn_access_logger = logging.getLogger("uvicorn.access")
    uvicorn_access_logger.addFilter(HealthCheckFilter())

    # httpx logs every request at INFO; bulk probes would flood the log
    logging.getLogger("httpx").setLevel(logging.WARNING)
