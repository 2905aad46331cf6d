# Standard library imports
import re
from typing import Optional

# External package imports
from fastapi import HTTPException, Query, status

# Local application imports
from ...core.config import get_settings

# RFC 1123 label, the format Kubernetes requires for namespace names
_NAMESPACE_PATTERN = re.compile(r"^[a-z0-9]([-a-z0-9]{0,61}[a-z0-9])?$")


def validate_namespace(namespace: str) -> str:
    """
    Reject namespaces that are not DNS-1123 labels

    The namespace ends up in Kubernetes API paths, so anything else (slashes,
    dots, upper case) is refused before a request is built.

    Raises:
        HTTPException: 400 for an invalid namespace
    """
    if not _NAMESPACE_PATTERN.match(namespace):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid namespace {namespace!r}: must be a lowercase DNS-1123 label",
        )
    return namespace


def resolve_namespace(
    namespace: Optional[str] = Query(None, description="Kubernetes namespace"),
) -> str:
    """
    FastAPI dependency resolving the target namespace

    Returns:
        The requested namespace, or the configured default when omitted
    """
    return validate_namespace(namespace or get_settings().k8s_namespace)


def require_confirmation(
    confirm: bool = Query(False, description="Must be true for destructive operations"),
) -> None:
    """
    FastAPI dependency guarding destructive endpoints

    Raises:
        HTTPException: 428 unless confirm=true was passed
    """
    if not confirm:
        raise HTTPException(
            status_code=status.HTTP_428_PRECONDITION_REQUIRED,
            detail="This operation deletes Kubernetes resources; repeat the request with confirm=true",
        )
