# app/models/campaign.py
"""
Campaign aggregate: a campaign with the goals and channels it owns.
Goals and channels live and die with their campaign.
"""
import enum
from sqlalchemy import (
    Column, String, Text, Integer, Float, DateTime, ForeignKey,
    UniqueConstraint, Enum as SQLEnum
)
from sqlalchemy.orm import relationship
from app.models.base import Base, BaseModel


class CampaignStatus(str, enum.Enum):
    """Campaign lifecycle states"""
    PLANNED = "PLANNED"
    ACTIVE = "ACTIVE"
    COMPLETED = "COMPLETED"


class GoalMetric(str, enum.Enum):
    """What a goal measures"""
    CLICKS = "CLICKS"
    VIEWS = "VIEWS"
    CONVERSIONS = "CONVERSIONS"


class Campaign(BaseModel):
    __tablename__ = "campaigns"
    __table_args__ = (
        UniqueConstraint('owner_username', 'name', name='uk_campaign_owner_name'),
    )

    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    start_date = Column(DateTime, nullable=False)
    end_date = Column(DateTime, nullable=False)
    status = Column(SQLEnum(CampaignStatus), nullable=False)
    owner_username = Column(String(150), index=True, nullable=False)
    # Plain reference, no FK: stables are never cascaded from campaigns
    stable_id = Column(Integer, index=True, nullable=False)

    goals = relationship(
        "Goal",
        back_populates="campaign",
        cascade="all, delete-orphan",
        order_by="Goal.id"
    )
    channels = relationship(
        "Channel",
        back_populates="campaign",
        cascade="all, delete-orphan",
        order_by="Channel.id"
    )

    def add_goal(self, goal: "Goal"):
        self.goals.append(goal)

    def add_channel(self, channel: "Channel"):
        self.channels.append(channel)

    def update_status(self, status: CampaignStatus):
        self.status = status
        self.touch()

    def __repr__(self):
        return f"<Campaign {self.name} ({self.owner_username}) - {self.status}>"


class Goal(Base):
    __tablename__ = "goals"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    description = Column(String(500), nullable=False)
    metric = Column(SQLEnum(GoalMetric), nullable=False)
    target_value = Column(Float, nullable=False)
    current_value = Column(Float, nullable=False, default=0)
    campaign_id = Column(Integer, ForeignKey("campaigns.id", ondelete="CASCADE"), index=True, nullable=False)

    campaign = relationship("Campaign", back_populates="goals")

    def __repr__(self):
        return f"<Goal {self.description} ({self.metric})>"


class Channel(Base):
    __tablename__ = "channels"
    __table_args__ = (
        UniqueConstraint('campaign_id', 'type', name='uk_channel_campaign_type'),
    )

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    type = Column(String(100), nullable=False)
    details = Column(Text, nullable=True)
    campaign_id = Column(Integer, ForeignKey("campaigns.id", ondelete="CASCADE"), index=True, nullable=False)

    campaign = relationship("Campaign", back_populates="channels")

    def __repr__(self):
        return f"<Channel {self.type}>"
