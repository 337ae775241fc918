import os

# Keep the module-level engine off the filesystem
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import thali_club.db as db
from thali_club.catering.catalog import get_default_catalog
from thali_club.catering.persistence import get_snapshot_writer
from thali_club.catering.pricing import PricingPolicy
from thali_club.catering.wizard import WizardStateMachine
from thali_club.models import Base
from thali_club.main import app
from thali_club.routes.relay import limiter
from thali_club.services.wizard_session import WIZARD_CACHE

VALID_CONTACT = {
    "full_name": "Priya Sharma",
    "phone": "416-967-1111",
    "email": "priya.sharma@gmail.com",
    "event_type": "Birthday, Mississauga",
    "date": "2026-12-12",
    "message": "No onions please",
}


@pytest.fixture
def session_factory(monkeypatch):
    """In-memory SQLite snapshot store shared by every connection (StaticPool)."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)

    # db.session_factory looks SessionLocal up at call time
    monkeypatch.setattr(db, "engine", engine)
    monkeypatch.setattr(db, "SessionLocal", TestingSessionLocal)

    WIZARD_CACHE.clear()
    yield TestingSessionLocal

    # Drain background writes before the in-memory database goes away
    get_snapshot_writer().flush()
    WIZARD_CACHE.clear()


@pytest.fixture
def client(session_factory):
    """Shared FastAPI TestClient with rate limiting off."""
    limiter.enabled = False
    limiter.reset()

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def policy():
    return PricingPolicy()


@pytest.fixture
def catalog():
    return get_default_catalog()


@pytest.fixture
def machine(catalog, policy):
    return WizardStateMachine(catalog, policy)


@pytest.fixture
def contact():
    return dict(VALID_CONTACT)
