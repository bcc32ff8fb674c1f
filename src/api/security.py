"""Bearer token extraction and domain-error to HTTP status mapping."""

from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from api.dependencies import get_access_policy
from domain.model.access import AccessRequest
from domain.model.errors import (
    DomainError,
    ForbiddenError,
    PersistenceError,
    UnauthorizedError,
    ValidationError,
)
from services.access_policy import AccessPolicy

security = HTTPBearer(auto_error=False)


def http_error(error: DomainError) -> HTTPException:
    """Map a domain error to the HTTP status the client sees."""
    if isinstance(error, ValidationError):
        return HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"message": str(error), "errors": error.errors},
        )
    if isinstance(error, UnauthorizedError):
        return HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(error),
            headers={"WWW-Authenticate": "Bearer"},
        )
    if isinstance(error, ForbiddenError):
        return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(error))
    if isinstance(error, PersistenceError):
        return HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(error))
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(error))


def get_access_request(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    policy: AccessPolicy = Depends(get_access_policy),
) -> AccessRequest:
    """What the caller presents. The role claim only counts when the token verifies."""
    token = credentials.credentials if credentials else None
    return AccessRequest(token=token, role=policy.role_claim(token))

