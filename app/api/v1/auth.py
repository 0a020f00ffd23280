# app/api/v1/auth.py
from fastapi import APIRouter, Depends

from app.api.deps import require_identity
from app.core.jwt_auth import Identity, list_roles

router = APIRouter()


@router.get("/me")
def get_current_user_info(identity: Identity = Depends(require_identity)):
    """Identity extracted from the bearer token"""
    return {
        "username": identity.username,
        "roles": list_roles(identity),
        "is_admin": identity.is_admin
    }
