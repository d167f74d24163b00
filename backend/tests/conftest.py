# backend/tests/conftest.py
"""
Pytest configuration.

Every test gets a fresh in-memory SQLite database. The application's
get_db dependency is overridden so route tests and direct service tests
share the same session.
"""

import os

# Set before any tapcard import so settings never point at a real database
os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["PUBLIC_BASE_URL"] = "https://cards.test"

from datetime import timedelta
from typing import Callable, Dict, Generator, Optional

from fastapi.testclient import TestClient
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from tapcard import models  # noqa: F401  registers tables on Base.metadata
from tapcard.auth import create_access_token
from tapcard.database import Base, get_db
from tapcard.events import CardEvents
from tapcard.main import app
from tapcard.models import Profile, User


@pytest.fixture
def engine():
    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=test_engine)
    yield test_engine
    Base.metadata.drop_all(bind=test_engine)
    test_engine.dispose()


@pytest.fixture
def db(engine) -> Generator[Session, None, None]:
    """Session bound to the per-test database."""
    TestingSessionLocal = sessionmaker(
        autocommit=False, autoflush=False, bind=engine, expire_on_commit=False
    )
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def client(db: Session) -> Generator[TestClient, None, None]:
    """Test client whose requests use the test session."""

    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def isolate_event_listeners():
    """Listeners registered by a test never leak into the next one."""
    before = list(CardEvents.listeners())
    yield
    CardEvents._listeners = before


def token_for(user_id: str, **claims: str) -> str:
    return create_access_token({"sub": user_id, **claims}, expires_delta=timedelta(minutes=15))


def auth_headers_for(user_id: str, **claims: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {token_for(user_id, **claims)}"}


@pytest.fixture
def auth_headers() -> Callable[..., Dict[str, str]]:
    """Build bearer headers for an arbitrary user id."""
    return auth_headers_for


@pytest.fixture
def make_user(db: Session) -> Callable[..., User]:
    def _make_user(
        user_id: str,
        email: Optional[str] = None,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
    ) -> User:
        user = User(id=user_id, email=email, first_name=first_name, last_name=last_name)
        db.add(user)
        db.commit()
        return user

    return _make_user


@pytest.fixture
def make_profile(db: Session, make_user) -> Callable[..., Profile]:
    """Create a profile, creating its owner first if needed."""

    def _make_profile(user_id: str, name: str = "Alice", **fields) -> Profile:
        if db.get(User, user_id) is None:
            make_user(user_id)
        profile = Profile(user_id=user_id, name=name, **fields)
        db.add(profile)
        db.commit()
        return profile

    return _make_profile
