"""Pytest fixtures and configuration for cadence tests."""

import pytest
import uuid
from datetime import date, datetime
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

from cadence.database.database import Base
from cadence.database import models  # noqa: F401
from cadence.database.status_override_repository import StatusOverrideRepository
from cadence.database.store import TrackerStore
from cadence.database.tracked_record_repository import TrackedRecordRepository
from cadence.engine.calendar import FixedClock
from cadence.models.instance import Instance, InstanceStatus
from cadence.models.record import TrackedRecord
from cadence.models.recurrence import RecurrenceFrequency, RecurrenceRule


# Use in-memory SQLite database for tests
TEST_DATABASE_URL = "sqlite:///:memory:"

# Wednesday morning
TEST_NOW = datetime(2024, 1, 10, 9, 0, 0)


@pytest.fixture(scope="function")
def db_session():
    """Create a database session for testing.

    Uses an in-memory SQLite database that is created fresh for each test.
    """
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False
    )

    @event.listens_for(engine, "connect")
    def set_sqlite_pragmas(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.create_all(bind=engine)

    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()

    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def record_repository(db_session: Session):
    return TrackedRecordRepository(db_session)


@pytest.fixture
def override_repository(db_session: Session):
    return StatusOverrideRepository(db_session)


@pytest.fixture
def clock():
    return FixedClock(TEST_NOW)


@pytest.fixture
def store(db_session: Session, clock):
    """TrackerStore over the test session with a fixed clock."""
    return TrackerStore(db_session, clock=clock)


@pytest.fixture
def daily_rule():
    """Daily schedule from 2024-01-01 at 08:00 and 20:00."""
    return RecurrenceRule(
        frequency=RecurrenceFrequency.DAILY,
        active_from=date(2024, 1, 1),
        times=["08:00", "20:00"],
    )


@pytest.fixture
def sample_record_base(daily_rule):
    """Base record data; override fields per test."""
    now = datetime(2024, 1, 1, 7, 0, 0)
    return {
        "id": str(uuid.uuid4()),
        "name": "Vitamin D",
        "dosage": "1000 IU",
        "notes": None,
        "rule": daily_rule,
        "created_at": now,
        "updated_at": now,
        "deleted_at": None,
    }


@pytest.fixture
def sample_record(sample_record_base):
    return TrackedRecord(**sample_record_base)


@pytest.fixture
def make_instance():
    """Factory for Instance objects with defaults."""
    def _make(status=InstanceStatus.UNMARKED, day=date(2024, 1, 1), time="08:00", parent_id="rec-1", duration_min=None):
        return Instance(parent_id=parent_id, date=day, time=time, status=status, duration_min=duration_min)
    return _make


@pytest.fixture
def test_client(db_session: Session, clock):
    """Create a FastAPI test client with overridden database and clock dependencies."""
    from cadence.api.app import app, get_clock
    from cadence.database.database import get_db

    def override_get_db():
        try:
            yield db_session
        finally:
            pass  # Don't close the session here, let the fixture handle it

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_clock] = lambda: clock

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()
