"""
Shared test fixtures for HiveWatch.

- Environment setup (in-memory database, no log file)
- SQLAlchemy session factory over one shared in-memory SQLite connection
- A settable clock so time windows are deterministic
- Seeding helpers for hives, readings and alerts
"""

from __future__ import annotations

import os
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# ---------------------------------------------------------------------------
# Environment setup -- must run before any application imports because
# Settings reads the environment when hivewatch.core.config is imported.
# ---------------------------------------------------------------------------

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_FILE", "")
os.environ.setdefault("ALERT_CHECK_ENABLED", "false")

from hivewatch.core.database import Base  # noqa: E402
from hivewatch.models import Alert, AlertThreshold, Apiary, Hive, MetricReading  # noqa: E402, F401
from hivewatch.services.alert_manager import AlertManager  # noqa: E402
from hivewatch.services.stores import SqlAlertingStore  # noqa: E402

NOW = datetime(2026, 6, 1, 12, 0, tzinfo=timezone.utc)
USER_ID = "user-1"


class FrozenClock:
    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture()
def session_factory():
    """Session factory over a fresh in-memory database.

    StaticPool keeps a single connection so every session sees the same data.
    """
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)

    yield sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)

    engine.dispose()


@pytest.fixture()
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture()
def clock():
    return FrozenClock(NOW)


@pytest.fixture()
def store(session_factory):
    return SqlAlertingStore(session_factory)


@pytest.fixture()
def manager(store, clock):
    return AlertManager(store, clock=clock)


# ---------------------------------------------------------------------------
# Seeding helpers
# ---------------------------------------------------------------------------

def add_hive(db, hive_id, user_id=USER_ID, alerts_enabled=True, apiary=None, name=None):
    hive = Hive(
        hive_id=hive_id,
        user_id=user_id,
        name=name or f"Hive {hive_id}",
        alerts_enabled=alerts_enabled,
        apiary_id=apiary.id if apiary else None,
    )
    db.add(hive)
    db.commit()
    return hive


def add_apiary(db, name="Home Yard", user_id=USER_ID):
    apiary = Apiary(name=name, user_id=user_id)
    db.add(apiary)
    db.commit()
    db.refresh(apiary)
    return apiary


def add_reading(db, hive_id, timestamp=NOW - timedelta(minutes=5), **values):
    reading = MetricReading(hive_id=hive_id, timestamp=timestamp, **values)
    db.add(reading)
    db.commit()
    return reading


def add_alert(
    db,
    hive_id,
    message,
    metric_type="temperature",
    severity="high",
    user_id=USER_ID,
    created_at=NOW - timedelta(hours=2),
    resolved_at=None,
    is_read=False,
):
    alert = Alert(
        user_id=user_id,
        hive_id=hive_id,
        metric_type=metric_type,
        message=message,
        severity=severity,
        created_at=created_at,
        resolved_at=resolved_at,
        is_read=is_read,
    )
    db.add(alert)
    db.commit()
    db.refresh(alert)
    return alert


def open_alerts(db, user_id=USER_ID):
    db.expire_all()
    return db.query(Alert).filter(Alert.user_id == user_id, Alert.resolved_at.is_(None)).order_by(Alert.id).all()
