# app/api/v1/campaigns.py
from fastapi import APIRouter, Depends, Response, status
from typing import List

from app.api.deps import require_identity
from app.core.jwt_auth import Identity
from app.schemas.campaign import (
    CampaignCreate, CampaignResponse, CampaignStatusUpdate,
    GoalCreate, GoalResponse, ChannelCreate, ChannelResponse
)
from app.services import get_campaign_service
from app.services.campaign_service import CampaignService

router = APIRouter()


@router.post("/", response_model=CampaignResponse, status_code=status.HTTP_201_CREATED)
def create_campaign(
    data: CampaignCreate,
    identity: Identity = Depends(require_identity),
    service: CampaignService = Depends(get_campaign_service)
):
    """
    Create a campaign

    **Rules:**
    - `status` must be PLANNED, ACTIVE or COMPLETED
    - `name` must be unique among the caller's campaigns
    - `stable_id` must exist; non-admins may only use their own stables

    Example:
    ```json
    {
      "name": "Spring vaccination drive",
      "start_date": "2025-03-01T00:00:00",
      "end_date": "2025-04-01T00:00:00",
      "status": "PLANNED",
      "stable_id": 1
    }
    ```
    """
    return service.create(data, identity.username, identity.is_admin)


@router.get("/", response_model=List[CampaignResponse])
def list_campaigns(
    identity: Identity = Depends(require_identity),
    service: CampaignService = Depends(get_campaign_service)
):
    """List campaigns visible to the caller (all of them for admins)"""
    return service.list_visible(identity.username, identity.is_admin)


@router.get("/{campaign_id}", response_model=CampaignResponse)
def get_campaign(
    campaign_id: int,
    identity: Identity = Depends(require_identity),
    service: CampaignService = Depends(get_campaign_service)
):
    """Get campaign details"""
    return service.get_by_id(campaign_id, identity.username, identity.is_admin)


@router.delete("/{campaign_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_campaign(
    campaign_id: int,
    identity: Identity = Depends(require_identity),
    service: CampaignService = Depends(get_campaign_service)
):
    """Delete a campaign with its goals and channels"""
    service.delete(campaign_id, identity.username, identity.is_admin)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch("/{campaign_id}/update-status", response_model=CampaignResponse)
def update_campaign_status(
    campaign_id: int,
    data: CampaignStatusUpdate,
    identity: Identity = Depends(require_identity),
    service: CampaignService = Depends(get_campaign_service)
):
    """Update campaign status (any allowed status, in any order)"""
    return service.update_status(campaign_id, data.status, identity.username, identity.is_admin)


@router.patch("/{campaign_id}/add-goal", response_model=CampaignResponse)
def add_goal(
    campaign_id: int,
    data: GoalCreate,
    identity: Identity = Depends(require_identity),
    service: CampaignService = Depends(get_campaign_service)
):
    """Add a goal (metric: CLICKS, VIEWS or CONVERSIONS)"""
    return service.add_goal(campaign_id, data, identity.username, identity.is_admin)


@router.patch("/{campaign_id}/add-channel", response_model=CampaignResponse)
def add_channel(
    campaign_id: int,
    data: ChannelCreate,
    identity: Identity = Depends(require_identity),
    service: CampaignService = Depends(get_campaign_service)
):
    """Add a channel"""
    return service.add_channel(campaign_id, data, identity.username, identity.is_admin)


@router.get("/{campaign_id}/goals", response_model=List[GoalResponse])
def list_goals(
    campaign_id: int,
    identity: Identity = Depends(require_identity),
    service: CampaignService = Depends(get_campaign_service)
):
    """List the goals of a campaign"""
    return service.list_goals(campaign_id, identity.username, identity.is_admin)


@router.get("/{campaign_id}/channels", response_model=List[ChannelResponse])
def list_channels(
    campaign_id: int,
    identity: Identity = Depends(require_identity),
    service: CampaignService = Depends(get_campaign_service)
):
    """List the channels of a campaign"""
    return service.list_channels(campaign_id, identity.username, identity.is_admin)
