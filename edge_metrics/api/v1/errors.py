# External package imports
from fastapi import HTTPException, status

# Local application imports
from ...core.exceptions import (
    DeviceAlreadyExistsError,
    DeviceNotFoundError,
    DeviceRequestError,
    DeviceValidationError,
    EdgeMetricsError,
    OrchestrationRequestError,
    RegistryUnavailableError,
    UpstreamUnavailableError,
)


_STATUS_BY_ERROR = (
    (DeviceNotFoundError, status.HTTP_404_NOT_FOUND),
    (DeviceAlreadyExistsError, status.HTTP_409_CONFLICT),
    (DeviceValidationError, status.HTTP_400_BAD_REQUEST),
    (RegistryUnavailableError, status.HTTP_503_SERVICE_UNAVAILABLE),
    (UpstreamUnavailableError, status.HTTP_503_SERVICE_UNAVAILABLE),
    (DeviceRequestError, status.HTTP_502_BAD_GATEWAY),
    (OrchestrationRequestError, status.HTTP_502_BAD_GATEWAY),
)


def to_http_exception(exception: EdgeMetricsError) -> HTTPException:
    """Translate a domain/infrastructure error into the HTTP status callers see"""
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exception, error_type):
            return HTTPException(status_code=status_code, detail=exception.message)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=exception.message,
    )
