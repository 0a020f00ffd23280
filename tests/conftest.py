"""
Shared fixtures for the campaign management tests.

The environment is pointed at an in-memory SQLite database before any
application module is imported; the schema is recreated for every test.
"""
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET_KEY"] = "test-secret-key-for-campaign-management-suite"
os.environ["JWT_ALGORITHM"] = "HS256"
os.environ["LOG_TO_FILE"] = "false"

import pytest

from app.db.base import Base
from app.db.session import SessionLocal, engine
from app.core.jwt_auth import create_access_token
from app.repositories import CampaignRepository, StableRepository
from app.services.campaign_service import CampaignService
from app.services.stable_service import StableService
from tests.factories import campaign_request, stable_request


# ====================
# Database
# ====================


@pytest.fixture
def schema():
    """Fresh tables for each test"""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db(schema):
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


# ====================
# Services
# ====================


@pytest.fixture
def stable_repository(db):
    return StableRepository(db)


@pytest.fixture
def campaign_repository(db):
    return CampaignRepository(db)


@pytest.fixture
def stable_service(stable_repository):
    return StableService(stable_repository)


@pytest.fixture
def campaign_service(campaign_repository, stable_service):
    return CampaignService(campaign_repository, stable_service)


# ====================
# Factories
# ====================


@pytest.fixture
def make_stable(stable_service):
    """Create a stable for ``owner``"""
    def _make(owner="alice", name="North barn", **overrides):
        return stable_service.create(stable_request(name, **overrides), owner)
    return _make


@pytest.fixture
def make_campaign(campaign_service, make_stable):
    """Create a campaign for ``owner`` on a fresh stable they own"""
    def _make(owner="alice", name="Spring drive", **overrides):
        stable = make_stable(owner=owner, name=f"{name} barn")
        return campaign_service.create(campaign_request(stable.id, name, **overrides), owner, False)
    return _make


# ====================
# HTTP
# ====================


@pytest.fixture
def client(schema):
    from fastapi.testclient import TestClient
    from app.main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_headers():
    """Bearer header for ``username`` holding ``roles``"""
    def _headers(username="alice", *roles):
        token = create_access_token(username, roles or ("ROLE_USER",))
        return {"Authorization": f"Bearer {token}"}
    return _headers
