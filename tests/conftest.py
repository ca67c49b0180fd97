"""Root conftest for all tests.

Provides an in-memory SQLite database, session contexts for two users and
a FastAPI test client wired to both.
"""

import datetime as dt

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from program_builder.core.session_context import SessionContext
from program_builder.db.models import Base
from program_builder.workouts.types import (
    CompromisedRunWorkout,
    RunningSegment,
    RunningWorkout,
    StrengthExercise,
    StrengthWorkout,
    TrainingProgram,
)


@pytest.fixture
def engine():
    """Fresh in-memory database per test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def context():
    return SessionContext(user_id="user-1", token="token-1")


@pytest.fixture
def other_context():
    return SessionContext(user_id="user-2", token="token-2")


@pytest.fixture
def strength_workout():
    return StrengthWorkout(
        id="strength-1",
        name="Lower body",
        week=1,
        day=1,
        exercises=[StrengthExercise(name="Back squat", weight=100, reps=5, sets=5, rest_time=120)],
    )


@pytest.fixture
def running_workout():
    return RunningWorkout(
        id="running-1",
        name="Tempo",
        week=2,
        day=3,
        running_segments=[RunningSegment(distance=5, time=25, pace=5)],
    )


@pytest.fixture
def compromised_workout():
    return CompromisedRunWorkout(
        id="compromised-1",
        name="Hyrox sim",
        week=1,
        day=6,
        segments=[
            RunningSegment(distance=1, time=4.5, pace=4.5),
            StrengthExercise(name="Wall balls", weight=9, reps=100, sets=1, rest_time=0),
        ],
    )


@pytest.fixture
def program(strength_workout, running_workout):
    return TrainingProgram(
        name="Spring block",
        type="hybrid",
        description="Eight weeks to race day",
        start_date=dt.date(2024, 3, 1),
        event_date=dt.date(2024, 4, 26),
        workouts=[strength_workout, running_workout],
    )


@pytest.fixture
def client(session_factory, context):
    """Test client acting as user-1 against the in-memory database."""
    from fastapi.testclient import TestClient

    from program_builder.api.dependencies.auth import get_session_context
    from program_builder.db.session import get_db
    from program_builder.main import app

    def _override_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _override_db
    app.dependency_overrides[get_session_context] = lambda: context
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def issue_token(monkeypatch):
    """Sign tokens the way the identity provider does, with a test secret."""
    from jose import jwt

    from program_builder.config.settings import settings

    monkeypatch.setattr(settings, "auth_secret_key", "test-secret")
    monkeypatch.setattr(settings, "auth_audience", "")

    def _issue(user_id, **claims):
        now = dt.datetime.now(dt.timezone.utc)
        payload = {
            "sub": user_id,
            "iat": now,
            "exp": now + dt.timedelta(hours=1),
            "iss": settings.auth_issuer,
            **claims,
        }
        return jwt.encode(payload, "test-secret", algorithm=settings.auth_algorithm)

    return _issue
