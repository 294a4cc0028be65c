import os

os.environ.setdefault("JWT_SECRET_KEY", "test-secret")
os.environ.setdefault("JWT_ALGORITHM", "HS256")
os.environ.setdefault("JWT_EXPIRES_MINUTES", "60")

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.auth import get_permissions
from app.core.db import get_db
from app.core.query_cache import QueryCache, get_query_cache
from app.core.realtime import ChangeChannel, get_change_channel
from app.main import app
from app.models.base import Base
from app.models import account_model, announcement, utility_model  # noqa: F401
from app.models.application_model import Application
from app.models.category_model import Category
from app.models.enums import ApplicationStatus
from app.models.panchayath_model import Panchayath
from app.schemas.permission_schema import Permissions


@pytest.fixture()
def db_session():
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def cache():
    return QueryCache()


@pytest.fixture()
def channel():
    return ChangeChannel()


@pytest.fixture()
def client(db_session, cache, channel):
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_query_cache] = lambda: cache
    app.dependency_overrides[get_change_channel] = lambda: channel
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def grant():
    """Install a capability record for the application routes."""

    def _grant(permissions: Permissions):
        app.dependency_overrides[get_permissions] = lambda: permissions

    return _grant


def make_application(db, category, panchayath=None, **overrides):
    values = {
        "customer_id": "ESEP0001",
        "name": "Anitha Kumari",
        "mobile_number": "9497589094",
        "address": "Thekkepurakkal House",
        "ward": "7",
        "agent_pro": None,
        "preference": None,
        "category_id": category.id,
        "panchayath_id": panchayath.id if panchayath else None,
        "status": ApplicationStatus.PENDING,
        "fee_paid": 500,
        "created_at": datetime(2024, 1, 1, tzinfo=timezone.utc),
        "updated_at": datetime(2024, 1, 1, tzinfo=timezone.utc),
    }
    values.update(overrides)
    application = Application(**values)
    db.add(application)
    db.commit()
    db.refresh(application)
    return application


@pytest.fixture()
def lookups(db_session):
    category = Category(id="cat-1", name="Farmelife")
    panchayath = Panchayath(id="pan-1", name="Kondotty", district="Malappuram")
    db_session.add_all([category, panchayath])
    db_session.commit()
    return category, panchayath


@pytest.fixture()
def applications(db_session, lookups):
    category, panchayath = lookups
    first = make_application(db_session, category, panchayath, id="1")
    second = make_application(
        db_session,
        category,
        None,
        id="2",
        customer_id="ESEP0002",
        name="Rahul Menon",
        mobile_number="8012345678",
        status=ApplicationStatus.APPROVED,
        approved_date=datetime(2024, 2, 1, tzinfo=timezone.utc),
        approved_by="admin",
        created_at=datetime(2024, 3, 1, tzinfo=timezone.utc),
    )
    third = make_application(
        db_session,
        category,
        panchayath,
        id="3",
        customer_id="esep0003",
        name="Fathima Beevi",
        mobile_number="9946001122",
        status=ApplicationStatus.REJECTED,
        created_at=datetime(2024, 2, 1, tzinfo=timezone.utc),
    )
    return first, second, third
