"""
Shared fixtures.

Every test gets its own in-memory SQLite database, a controllable clock and a
mocked mailer, so time windows and delivery outcomes can be driven directly.
"""

from datetime import datetime, timedelta
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import storefront.fastapi.models  # noqa: F401
from storefront.fastapi.core.config import DevSettings
from storefront.fastapi.crud.admin import AdminCRUD
from storefront.fastapi.crud.schema import refresh_schema_cache
from storefront.fastapi.dependencies.database import Base, get_sync_db
from storefront.fastapi.main import create_app
from storefront.fastapi.schemas.admin import AdminCreate
from storefront.security.dependencies import get_clock, get_mailer, get_settings

ADMIN_EMAIL = "owner@example.com"
ADMIN_PASSWORD = "correct-horse-battery"


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now += timedelta(**kwargs)
        return self.now


def make_engine():
    return create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )


@pytest.fixture
def engine():
    """In-memory database with every model table created."""
    engine = make_engine()
    Base.metadata.create_all(bind=engine)
    yield engine
    refresh_schema_cache()
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def clock():
    return FakeClock(datetime(2026, 3, 2, 9, 30, 0))


@pytest.fixture
def settings():
    return DevSettings(
        SESSION_SECRET_KEY="test-session-secret",
        OTP_MAIL_TIMEOUT_SECONDS=0.2,
        OTP_DELIVERY_FAILURE_BYPASS=False,
        OTP_EXPOSE_DEV_CODE=False,
        MAIL_FROM="noreply@example.com"
    )


@pytest.fixture
def mailer():
    """Mailer whose send_otp succeeds immediately; inspect call_args for the code."""
    mock = AsyncMock()
    mock.send_otp = AsyncMock(return_value=None)
    return mock


@pytest.fixture
def admin(db):
    return AdminCRUD(db).create_admin(
        AdminCreate(email=ADMIN_EMAIL, password=ADMIN_PASSWORD, is_active=True)
    )


@pytest.fixture
def app(session_factory, settings, clock, mailer):
    app = create_app(settings)

    def override_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_sync_db] = override_db
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_clock] = lambda: clock
    app.dependency_overrides[get_mailer] = lambda: mailer
    return app


@pytest.fixture
def client(app):
    # No context manager: the lifespan (init_db, bootstrap admin) is not run
    return TestClient(app)


def sent_code(mailer) -> str:
    """The code passed to the most recent send_otp call."""
    args, kwargs = mailer.send_otp.call_args
    return kwargs.get("code", args[1] if len(args) > 1 else None)


@pytest.fixture
def signed_in_client(client, admin, mailer):
    """Client whose session completed both login steps."""
    response = client.post("/api/v1/admin/auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    assert response.status_code == 200, response.text
    response = client.post("/api/v1/admin/auth/otp", json={"code": sent_code(mailer)})
    assert response.status_code == 200, response.text
    return client
