"""Repository layer over the SQLAlchemy session."""
from app.repositories.stable_repository import StableRepository
from app.repositories.campaign_repository import CampaignRepository

__all__ = ['StableRepository', 'CampaignRepository']
