# app/core/jwt_auth.py
"""
JWT authentication: turns a bearer token into an Identity.

Tokens are issued by the IAM service. The subject claim carries the
username; roles arrive either as a ``roles`` list, a ``roles``/``role``
comma-separated string, or not at all.
"""
import logging
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Dict, FrozenSet, Iterable, List, NamedTuple, Optional

import jwt
from pydantic import BaseModel, ConfigDict

from app.core import config
from app.core.authorization import is_admin, has_api_access
from app.core.logging_config import mask_token

log = logging.getLogger("campaigns.auth")


class JWTTokenVerifier:
    """Signature and expiry checks backed by PyJWT"""

    def __init__(self, secret_key: Optional[str] = None, algorithm: Optional[str] = None):
        self.secret_key = secret_key if secret_key is not None else config.JWT_SECRET_KEY
        self.algorithm = algorithm or config.JWT_ALGORITHM

    def decode(self, token: str) -> Dict[str, Any]:
        """
        Decode and validate a JWT token.

        Raises:
            jwt.InvalidTokenError: If the token is malformed, expired or badly signed
        """
        return jwt.decode(token, self.secret_key, algorithms=[self.algorithm])

    def claims(self, token: str) -> Optional[Dict[str, Any]]:
        """Decoded payload of a valid token, or None when it is rejected"""
        try:
            return self.decode(token)
        except jwt.ExpiredSignatureError:
            log.warning(f"⌛ Expired token: {mask_token(token)}")
        except jwt.InvalidTokenError as e:
            log.warning(f"❌ Invalid token {mask_token(token)}: {e}")
        return None

    def verify(self, token: str) -> bool:
        return self.claims(token) is not None

    def extract_claim(self, token: str, claim: str) -> Any:
        payload = self.claims(token)
        return payload.get(claim) if payload else None


# ────────────────────────────────────────────
# Role claim decoding
# ────────────────────────────────────────────

class ClaimShape(str, Enum):
    """Shapes a role claim may take inside a token"""
    LIST = "list"
    DELIMITED = "delimited"
    ABSENT = "absent"


class RoleClaim(NamedTuple):
    shape: ClaimShape
    value: Any


def decode_role_claim(raw: Any) -> RoleClaim:
    """Tag a raw role claim with its shape"""
    if raw is None:
        return RoleClaim(ClaimShape.ABSENT, None)
    if isinstance(raw, str):
        return RoleClaim(ClaimShape.DELIMITED, raw)
    if isinstance(raw, (list, tuple)):
        return RoleClaim(ClaimShape.LIST, raw)
    log.warning(f"⚠️ Unsupported role claim shape: {type(raw).__name__}")
    return RoleClaim(ClaimShape.ABSENT, None)


def roles_from_claim(claim: RoleClaim) -> FrozenSet[str]:
    """Normalize a tagged role claim into a set of role strings"""
    if claim.shape is ClaimShape.LIST:
        roles = [str(item).strip() for item in claim.value]
    elif claim.shape is ClaimShape.DELIMITED:
        roles = [piece.strip() for piece in claim.value.split(",")]
    elif claim.shape is ClaimShape.ABSENT:
        roles = []
    else:
        raise ValueError(f"Unhandled claim shape: {claim.shape}")
    return frozenset(role for role in roles if role)


# ────────────────────────────────────────────
# Identity
# ────────────────────────────────────────────

class Identity(BaseModel):
    """Authenticated caller for the duration of one request"""
    model_config = ConfigDict(frozen=True)

    username: str
    roles: FrozenSet[str] = frozenset()

    @property
    def is_admin(self) -> bool:
        return is_admin(self.roles)

    @property
    def has_api_access(self) -> bool:
        return has_api_access(self.roles)


class IdentityExtractor:
    """
    Derives an Identity from a raw bearer token.

    Any failure (bad signature, expiry, missing subject) yields ``None``
    so that unauthenticated requests are rejected by a single gate
    downstream instead of here.
    """

    def __init__(self, verifier: Optional[JWTTokenVerifier] = None):
        self.verifier = verifier or JWTTokenVerifier()

    def extract(self, token: Optional[str]) -> Optional[Identity]:
        if not token:
            log.debug("No bearer token on request")
            return None

        # Single decode: subject and roles come from the same payload
        try:
            payload = self.verifier.claims(token)
        except Exception as e:
            log.error(f"❌ Token verification failed for {mask_token(token)}: {e}")
            return None
        if payload is None:
            return None

        username = payload.get("sub")
        if not username:
            log.warning(f"⚠️ Token {mask_token(token)} has no subject")
            return None

        raw_roles = payload.get("roles")
        if raw_roles is None:
            raw_roles = payload.get("role")
        roles = roles_from_claim(decode_role_claim(raw_roles))

        identity = Identity(username=str(username), roles=roles)
        log.debug(f"👤 Identity resolved: {identity.username} roles={sorted(identity.roles)}")
        return identity


def create_access_token(
    username: str,
    roles: Iterable[str] = (),
    expires_minutes: Optional[int] = None,
    secret_key: Optional[str] = None,
    algorithm: Optional[str] = None
) -> str:
    """
    Mint a signed token for ``username`` carrying ``roles`` as a list claim.

    Args:
        username: Subject of the token
        roles: Role strings, e.g. ["ROLE_USER"]
        expires_minutes: Lifetime; defaults to JWT_ACCESS_TOKEN_LIFETIME_MINUTES
        secret_key: Signing key; defaults to JWT_SECRET_KEY
        algorithm: Signing algorithm; defaults to JWT_ALGORITHM
    """
    now = datetime.now(timezone.utc)
    lifetime = expires_minutes if expires_minutes is not None else config.JWT_ACCESS_TOKEN_LIFETIME_MINUTES
    payload: Dict[str, Any] = {
        "sub": username,
        "roles": list(roles),
        "iat": now,
        "exp": now + timedelta(minutes=lifetime),
    }
    return jwt.encode(
        payload,
        secret_key if secret_key is not None else config.JWT_SECRET_KEY,
        algorithm=algorithm or config.JWT_ALGORITHM
    )


def list_roles(identity: Optional[Identity]) -> List[str]:
    """Sorted role list for responses and logs"""
    return sorted(identity.roles) if identity else []
