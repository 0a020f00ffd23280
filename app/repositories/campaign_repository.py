# app/repositories/campaign_repository.py
"""
Campaign persistence. Goals and channels are written through their
campaign; the child lookups here are read-only.
"""
from typing import List, Optional

from app.models.campaign import Campaign, Goal, Channel
from app.repositories.base import SQLAlchemyRepository


class CampaignRepository(SQLAlchemyRepository[Campaign]):
    model = Campaign

    def find_by_owner(self, owner_username: str) -> List[Campaign]:
        return self.db.query(Campaign).filter(
            Campaign.owner_username == owner_username
        ).order_by(Campaign.id).all()

    def find_by_name_and_owner(self, name: str, owner_username: str) -> Optional[Campaign]:
        return self.db.query(Campaign).filter(
            Campaign.owner_username == owner_username,
            Campaign.name == name
        ).first()

    def find_by_stable_id(self, stable_id: int) -> List[Campaign]:
        return self.db.query(Campaign).filter(
            Campaign.stable_id == stable_id
        ).order_by(Campaign.id).all()

    # ────────────────────────────────────────────
    # Child lookups
    # ────────────────────────────────────────────

    def find_goals(self, campaign_id: int) -> List[Goal]:
        return self.db.query(Goal).filter(Goal.campaign_id == campaign_id).order_by(Goal.id).all()

    def find_channels(self, campaign_id: int) -> List[Channel]:
        return self.db.query(Channel).filter(Channel.campaign_id == campaign_id).order_by(Channel.id).all()

    def find_goal_by_id(self, goal_id: int) -> Optional[Goal]:
        return self.db.get(Goal, goal_id)

    def find_channel_by_id(self, channel_id: int) -> Optional[Channel]:
        return self.db.get(Channel, channel_id)
