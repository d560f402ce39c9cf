"""
Pytest fixtures for DevConnector tests.

Each test gets a fresh in-memory SQLite database built from the ORM models.
"""

import os

# Must be set before any settings are read
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ENV", "development")

import pytest  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from devconnector.config import get_settings  # noqa: E402
from devconnector.db import Base  # noqa: E402
from devconnector.models import Profile, User  # noqa: E402


@pytest.fixture(scope="function")
def test_db():
    """Create a fresh in-memory database for each test."""
    db_url = "sqlite://"
    engine = create_engine(
        db_url,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    Base.metadata.create_all(bind=engine)

    TestingSessionLocal = sessionmaker(
        bind=engine, autoflush=False, autocommit=False, expire_on_commit=False
    )

    yield db_url, TestingSessionLocal, engine

    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def test_session(test_db):
    """Get a test session from the test database."""
    _, TestingSessionLocal, _ = test_db
    session = TestingSessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


@pytest.fixture
def settings_env(monkeypatch):
    """
    Set environment variables and rebuild cached settings.

    Usage:
        def test_x(settings_env):
            settings_env(SPOTIFY_CLIENT_ID="id", SPOTIFY_CLIENT_SECRET="secret")
    """

    def _apply(**env: str):
        for key, value in env.items():
            monkeypatch.setenv(key, value)
        get_settings.cache_clear()
        return get_settings()

    yield _apply
    get_settings.cache_clear()


@pytest.fixture
def sample_user(test_session) -> User:
    """A registered user without a profile."""
    user = User(name="Ada Lovelace", email="ada@example.com", avatar="//gravatar.example/ada")
    test_session.add(user)
    test_session.commit()
    return user


@pytest.fixture
def sample_profile(test_session, sample_user) -> Profile:
    """A stored profile with one experience and one education entry."""
    profile = Profile(
        user_id=sample_user.id,
        status="Developer",
        company="Analytical Engines Ltd",
        skills=["python", "sql"],
        social={"twitter": "https://twitter.com/ada"},
        experience=[
            {
                "id": "a" * 24,
                "title": "Engineer",
                "company": "Analytical Engines Ltd",
                "from": "2020-01-01",
                "current": True,
            },
        ],
        education=[
            {
                "id": "b" * 24,
                "school": "University of London",
                "degree": "BSc",
                "fieldofstudy": "Mathematics",
                "from": "2015-09-01",
                "to": "2019-06-30",
                "current": False,
            },
        ],
    )
    test_session.add(profile)
    test_session.commit()
    return profile


@pytest.fixture
def experience_payload() -> dict:
    return {
        "title": "Senior Engineer",
        "company": "Difference Co",
        "location": "London",
        "from": "2022-03-01",
        "description": "Built things",
    }


@pytest.fixture
def education_payload() -> dict:
    return {
        "school": "Open University",
        "degree": "MSc",
        "fieldofstudy": "Computer Science",
        "from": "2019-09-01",
        "to": "2021-06-30",
    }
