# tests/conftest.py

import os

# Settings are read at import time, so the test environment goes first.
os.environ["ENV"] = "local"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["DATABASE_URL_LOCAL"] = "sqlite://"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["SCHEDULER_ENABLED"] = "false"
os.environ["LOG_FILE"] = ""
os.environ["DEFAULT_EMAIL_PROVIDER"] = "sendgrid"
os.environ["DEFAULT_FROM_EMAIL"] = "noreply@eventhost.test"
os.environ["SENDGRID_API_KEY"] = ""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from starlette.testclient import TestClient

from eventhost.main import app
from eventhost.api import deps
from eventhost.db.session import get_db
from eventhost.db.base_class import Base
from eventhost.schemas.token import TokenPayload
from eventhost.services.email import dispatcher

from tests.utils.auth import HOST_EMAIL, HOST_ID
from tests.utils.fake_transport import FakeTransport


def override_get_current_user():
    return TokenPayload(sub=HOST_ID, email=HOST_EMAIL, exp=9999999999)


# --- Database Setup ---
# A fresh in-memory database per test; StaticPool keeps the single
# connection alive across the TestClient threads.
@pytest.fixture(scope="function")
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture(scope="function")
def db(engine):
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    yield session
    session.close()


# --- Email transport ---
@pytest.fixture(scope="function")
def fake_transport(monkeypatch):
    """
    Replaces the transport the dispatcher builds, so no provider is called.
    The config passed to the factory is recorded on the fake.
    """
    transport = FakeTransport()

    def build(config, client=None):
        transport.configs.append(config)
        return transport

    monkeypatch.setattr(dispatcher, "build_email_transport", build)
    return transport


# --- Test Client Fixtures ---
@pytest.fixture(scope="function")
def client(db):
    """
    TestClient backed by the per-test database, authenticated as HOST_ID.
    """

    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[deps.get_current_user] = override_get_current_user

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def anonymous_client(db):
    """TestClient with the real bearer-token check."""

    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
