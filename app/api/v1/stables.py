# app/api/v1/stables.py
from fastapi import APIRouter, Depends, status
from typing import List

from app.api.deps import require_identity
from app.core.jwt_auth import Identity
from app.schemas.stable import StableCreate, StableResponse
from app.schemas.campaign import CampaignResponse
from app.services import get_stable_service, get_campaign_service
from app.services.stable_service import StableService
from app.services.campaign_service import CampaignService

router = APIRouter()


@router.post("/", response_model=StableResponse, status_code=status.HTTP_201_CREATED)
def create_stable(
    data: StableCreate,
    identity: Identity = Depends(require_identity),
    service: StableService = Depends(get_stable_service)
):
    """Create a stable owned by the caller"""
    return service.create(data, identity.username)


@router.get("/", response_model=List[StableResponse])
def list_stables(
    identity: Identity = Depends(require_identity),
    service: StableService = Depends(get_stable_service)
):
    """List stables visible to the caller (all of them for admins)"""
    return service.list_visible(identity.username, identity.is_admin)


@router.get("/{stable_id}", response_model=StableResponse)
def get_stable(
    stable_id: int,
    identity: Identity = Depends(require_identity),
    service: StableService = Depends(get_stable_service)
):
    """Get stable details"""
    return service.get_by_id(stable_id, identity.username, identity.is_admin)


@router.get("/{stable_id}/campaigns", response_model=List[CampaignResponse])
def list_stable_campaigns(
    stable_id: int,
    identity: Identity = Depends(require_identity),
    stables: StableService = Depends(get_stable_service),
    campaigns: CampaignService = Depends(get_campaign_service)
):
    """List campaigns attached to a stable the caller may read"""
    stables.get_by_id(stable_id, identity.username, identity.is_admin)
    return campaigns.list_by_stable(stable_id)
