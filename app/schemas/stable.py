# app/schemas/stable.py
from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import datetime

from app.models.stable import StableStatus


class StableCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255, description="Stable name, unique per owner")
    description: Optional[str] = None
    location: Optional[str] = Field(None, max_length=255, description="Defaults to Peru when blank")
    capacity: int = Field(..., gt=0, description="Number of animals the stable holds")
    status: Optional[StableStatus] = Field(None, description="Defaults to OPERATIVE")

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        if not v or not v.strip():
            raise ValueError('Stable name is required')
        return v


class StableResponse(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    owner_username: str
    location: str
    capacity: int
    status: StableStatus
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
