"""Pytest fixtures — SQLite database, recording email client and an app TestClient."""
import os

# Settings are read once per process, so the environment must be in place
# before anything from vininfo is imported.
os.environ["DATABASE_URL"] = "sqlite:///./test.db"
os.environ["JWT_SECRET"] = "test-jwt-secret"
os.environ["RESEND_API_KEY"] = "re_test_key"
os.environ["CRON_SECRET"] = "cron-secret"
os.environ["ADMIN_SECRET"] = "admin-secret"
os.environ["ENVIRONMENT"] = "test"
os.environ["SCHEDULER_ENABLED"] = "false"
os.environ["BASE_URL"] = "https://vininfo.test"

import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from fastapi.testclient import TestClient

from vininfo.config import get_settings
from vininfo.infrastructure.database import Base, get_db
from vininfo.main import app
from vininfo.interfaces.deps import get_email_client

# Import all models so they register with Base.metadata
from vininfo.domain.models.user import User            # noqa: F401
from vininfo.domain.models.vehicle import Vehicle      # noqa: F401
from vininfo.domain.models.reminder import Reminder    # noqa: F401

from tests.helpers import RecordingEmailClient

SQLITE_URL = "sqlite:///./test.db"


@pytest.fixture(scope="function")
def settings():
    """Application settings without send pacing, so batch endpoints run fast."""
    return get_settings().model_copy(update={"EMAIL_SEND_INTERVAL_SECONDS": 0})


@pytest.fixture(scope="function")
def db_engine():
    """Create a fresh SQLite engine for each test."""
    engine = create_engine(SQLITE_URL, connect_args={"check_same_thread": False})

    # Cascading deletes rely on foreign keys being enforced
    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db(db_engine):
    """Yield a database session bound to the test engine."""
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def email_client(settings):
    return RecordingEmailClient(settings)


@pytest.fixture(scope="function")
def client(db_engine, settings, email_client):
    """FastAPI TestClient with database, settings and email provider overridden."""
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)

    def _override_get_db():
        session = TestingSession()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _override_get_db
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_email_client] = lambda: email_client
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
