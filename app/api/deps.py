# app/api/deps.py
"""
API dependencies for authentication.

The bearer token is turned into an Identity once per request (FastAPI
caches dependency results within a request) and handed explicitly to the
services as (username, is_admin).
"""
import logging
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from app.core.jwt_auth import Identity, IdentityExtractor

log = logging.getLogger("campaigns.auth")

# Security scheme (auto_error off so a missing header reaches our own 401)
security = HTTPBearer(auto_error=False)

_extractor = IdentityExtractor()


def get_identity_extractor() -> IdentityExtractor:
    """Overridable in tests to swap the token verifier"""
    return _extractor


def get_current_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    extractor: IdentityExtractor = Depends(get_identity_extractor)
) -> Optional[Identity]:
    """Identity from the bearer token, or None when absent or invalid"""
    if not credentials or not credentials.credentials:
        return None
    return extractor.extract(credentials.credentials)


def require_identity(
    identity: Optional[Identity] = Depends(get_current_identity)
) -> Identity:
    """
    Gate for every protected route.

    Raises:
        HTTPException 401: No valid token
        HTTPException 403: Token lacks ROLE_USER and ROLE_ADMIN
    """
    if identity is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"}
        )
    if not identity.has_api_access:
        log.warning(f"⛔ {identity.username} has no API role: {sorted(identity.roles)}")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Access denied: missing required role"
        )
    return identity
