# app/api/v1/router.py
"""Main API router combining all v1 endpoints"""
from fastapi import APIRouter

from app.api.v1 import auth, stables, campaigns

api_router = APIRouter()

# Include all routers
api_router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
api_router.include_router(stables.router, prefix="/stables", tags=["Stables"])
api_router.include_router(campaigns.router, prefix="/campaigns", tags=["Campaigns"])
