# app/schemas/campaign.py
from pydantic import BaseModel, Field, field_validator
from typing import List, Optional
from datetime import datetime

from app.models.campaign import CampaignStatus, GoalMetric


def _not_blank(value: str, label: str) -> str:
    if not value or not value.strip():
        raise ValueError(f'{label} is required')
    return value


# ────────────────────────────────────────────
# Requests
# ────────────────────────────────────────────

class CampaignCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    start_date: datetime
    end_date: datetime
    # Vocabulary is checked by the service so bad values surface as InvalidValue
    status: str = Field(..., description="PLANNED, ACTIVE or COMPLETED")
    stable_id: int = Field(..., gt=0)

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        return _not_blank(v, 'Campaign name')

    @field_validator('status')
    @classmethod
    def validate_status(cls, v):
        return _not_blank(v, 'Status')


class CampaignStatusUpdate(BaseModel):
    status: str = Field(..., description="PLANNED, ACTIVE or COMPLETED")

    @field_validator('status')
    @classmethod
    def validate_status(cls, v):
        return _not_blank(v, 'Status')


class GoalCreate(BaseModel):
    description: str = Field(..., min_length=1, max_length=500)
    metric: str = Field(..., description="CLICKS, VIEWS or CONVERSIONS")
    target_value: float = Field(..., gt=0)
    current_value: float = Field(0, ge=0)

    @field_validator('description')
    @classmethod
    def validate_description(cls, v):
        return _not_blank(v, 'Goal description')

    @field_validator('metric')
    @classmethod
    def validate_metric(cls, v):
        return _not_blank(v, 'Metric')


class ChannelCreate(BaseModel):
    type: str = Field(..., min_length=1, max_length=100, description="e.g. EMAIL, SMS, SOCIAL")
    details: Optional[str] = None

    @field_validator('type')
    @classmethod
    def validate_type(cls, v):
        return _not_blank(v, 'Channel type')


# ────────────────────────────────────────────
# Responses
# ────────────────────────────────────────────

class GoalResponse(BaseModel):
    id: int
    description: str
    metric: GoalMetric
    target_value: float
    current_value: float

    class Config:
        from_attributes = True


class ChannelResponse(BaseModel):
    id: int
    type: str
    details: Optional[str] = None

    class Config:
        from_attributes = True


class CampaignResponse(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    start_date: datetime
    end_date: datetime
    status: CampaignStatus
    owner_username: str
    stable_id: int
    goals: List[GoalResponse] = []
    channels: List[ChannelResponse] = []
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
