"""
Service layer initialization.
Builds services on top of the request's database session.
"""
from fastapi import Depends
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.repositories import StableRepository, CampaignRepository
from app.services.stable_service import StableService
from app.services.campaign_service import CampaignService


def get_stable_service(db: Session = Depends(get_db)) -> StableService:
    """Get StableService bound to the request session"""
    return StableService(StableRepository(db))


def get_campaign_service(db: Session = Depends(get_db)) -> CampaignService:
    """Get CampaignService bound to the request session"""
    return CampaignService(CampaignRepository(db), StableService(StableRepository(db)))


__all__ = [
    'StableService',
    'CampaignService',
    'get_stable_service',
    'get_campaign_service'
]
