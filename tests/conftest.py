import os
import uuid

import pytest

# Select the in-memory SQLite engine before eventdesk.db.database is imported.
os.environ.setdefault("PYTEST_RUNNING", "1")

from fastapi.testclient import TestClient

from eventdesk.api.main import app
from eventdesk.db import database, models, schemas
from eventdesk.db.repositories import events as event_repo
from eventdesk.db.repositories import users as user_repo
from eventdesk.services.email_service import reset_email_service_for_tests
from eventdesk.utils.feature_flags import refresh_feature_flag_cache


@pytest.fixture(autouse=True)
def _test_env(monkeypatch):
    """Predictable environment: no dev mode, no outgoing email, default flags."""
    monkeypatch.delenv("DEV_MODE", raising=False)
    monkeypatch.delenv("APP_BASE_URL", raising=False)
    monkeypatch.delenv("STATS_TIMEZONE", raising=False)
    monkeypatch.delenv("FEATURE_CSV_EXPORT_ENABLED", raising=False)
    monkeypatch.delenv("ALLOW_ORGANIZER_SIGNUP", raising=False)
    monkeypatch.setenv("EMAIL_NOTIFICATIONS_ENABLED", "false")
    refresh_feature_flag_cache()
    reset_email_service_for_tests()
    yield
    refresh_feature_flag_cache()
    reset_email_service_for_tests()


@pytest.fixture(autouse=True)
def db_session():
    """Fresh schema per test on the shared in-memory engine."""
    models.Base.metadata.create_all(bind=database.engine)
    session = database.SessionLocal()
    try:
        yield session
    finally:
        session.close()
        models.Base.metadata.drop_all(bind=database.engine)
        database.reset_schema_state()


# Backwards-compatible alias used by repository tests
@pytest.fixture
def db(db_session):
    return db_session


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def auth():
    """Build proxy identity headers for a user (or a bare email)."""

    def _headers(user_or_email):
        email = user_or_email if isinstance(user_or_email, str) else user_or_email.email
        return {"X-Auth-Request-Email": email}

    return _headers


@pytest.fixture
def make_user(db_session):
    def _make(role="participant", *, email=None, name=None, phone=None):
        email = email or f"{role}_{uuid.uuid4().hex[:8]}@example.com"
        return user_repo.create_user(
            db_session,
            schemas.UserCreate(name=name or role.title(), email=email, phone=phone, role=role),
        )

    return _make


@pytest.fixture
def organizer(make_user):
    return make_user("organizer", name="Olivia Organizer")


@pytest.fixture
def volunteer(make_user):
    return make_user("volunteer", name="Victor Volunteer")


@pytest.fixture
def participant(make_user):
    return make_user("participant", name="Paula Participant", phone="555-0100")


@pytest.fixture
def make_event(db_session, organizer):
    def _make(name="Spring Meetup", *, owner=None, active=True, **fields):
        event = event_repo.create_event(
            db_session,
            schemas.EventCreate(
                name=name,
                description=fields.get("description", "Quarterly community meetup"),
                date=fields.get("date", "2025-04-12"),
                location=fields.get("location", "Main Hall"),
            ),
            organizer_id=(owner or organizer).id,
        )
        if not active:
            event = event_repo.update_event(db_session, event.id, schemas.EventUpdate(is_active=False))
        return event

    return _make


@pytest.fixture
def event(make_event):
    return make_event()
