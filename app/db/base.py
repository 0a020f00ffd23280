# app/db/base.py
"""Import all models so Base.metadata knows every table"""
from app.models.base import Base

from app.models.stable import Stable
from app.models.campaign import Campaign, Goal, Channel

__all__ = ["Base"]
