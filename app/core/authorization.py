# app/core/authorization.py
"""
Owner/admin authorization policy shared by the stable and campaign services.
"""
import logging
from typing import Iterable

from app.core.config import ADMIN_ROLE, USER_ROLE
from app.core.exceptions import UnauthorizedError

log = logging.getLogger("campaigns.auth")

API_ROLES = frozenset({USER_ROLE, ADMIN_ROLE})


def is_admin(roles: Iterable[str]) -> bool:
    """True when the role set carries the administrator marker"""
    return ADMIN_ROLE in set(roles)


def has_api_access(roles: Iterable[str]) -> bool:
    """True when the caller holds at least one role allowed to use the API"""
    return bool(API_ROLES & set(roles))


def allowed(caller_username: str, caller_is_admin: bool, owner_username: str) -> bool:
    """Admins may act on anything; everyone else only on what they own."""
    return caller_is_admin or (caller_username is not None and caller_username == owner_username)


def ensure_allowed(
    caller_username: str,
    caller_is_admin: bool,
    owner_username: str,
    message: str
) -> None:
    """
    Raise UnauthorizedError when ``allowed`` denies access.

    Args:
        caller_username: Username of the authenticated caller
        caller_is_admin: Whether the caller holds the admin role
        owner_username: Owner recorded on the resource
        message: Error text surfaced to the caller
    """
    if not allowed(caller_username, caller_is_admin, owner_username):
        log.warning(f"⛔ {message} (caller={caller_username})")
        raise UnauthorizedError(message)
