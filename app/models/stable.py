# app/models/stable.py
"""
Stable model: a barn or corral owned by a single user and referenced by campaigns.
"""
import enum
from sqlalchemy import Column, String, Text, Integer, UniqueConstraint, Enum as SQLEnum
from app.models.base import BaseModel


class StableStatus(str, enum.Enum):
    """Operational state of a stable"""
    OPERATIVE = "OPERATIVE"
    MAINTENANCE = "MAINTENANCE"
    INACTIVE = "INACTIVE"


class Stable(BaseModel):
    __tablename__ = "stables"
    __table_args__ = (
        UniqueConstraint('owner_username', 'name', name='uk_stable_owner_name'),
    )

    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    owner_username = Column(String(150), index=True, nullable=False)
    location = Column(String(255), nullable=False, default="Peru")
    capacity = Column(Integer, nullable=False)
    status = Column(SQLEnum(StableStatus), nullable=False, default=StableStatus.OPERATIVE)

    def __repr__(self):
        return f"<Stable {self.name} ({self.owner_username})>"
