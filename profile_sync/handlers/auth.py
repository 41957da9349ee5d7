"""
Bearer token authentication for event delivery.

The event host pushes every trigger with a shared bearer token; requests
without the configured token are rejected before any handler runs.
"""

import secrets
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ..config import get_settings

# HTTP Bearer security scheme
security = HTTPBearer()


def verify_bearer_token(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(security)]
) -> str:
    """
    Verify the bearer token of a pushed event against ``EVENT_BEARER_TOKEN``.

    Used as a FastAPI dependency on the event endpoints. Comparison is
    constant-time.

    Returns:
        str: The verified token value

    Raises:
        HTTPException: 401 Unauthorized if the token is missing or doesn't match
    """
    expected_token = get_settings().event_bearer_token
    provided_token = credentials.credentials

    if not provided_token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Bearer token missing",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not secrets.compare_digest(expected_token, provided_token):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid bearer token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return provided_token
