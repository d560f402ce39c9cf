"""Tests for the DatabaseManager engine and session handling."""

import pytest

from devconnector.db import DatabaseManager, db
from devconnector.models import User


@pytest.fixture
def fresh_db():
    db.reset()
    yield db
    db.reset()


def test_manager_is_singleton():
    assert DatabaseManager() is db


def test_session_requires_initialize(fresh_db):
    with pytest.raises(RuntimeError, match="not initialized"):
        with fresh_db.session():
            pass

    assert fresh_db.health_check()["healthy"] is False


def test_session_commits_and_rolls_back(fresh_db):
    fresh_db.initialize("sqlite://")
    fresh_db.create_all_tables()

    with fresh_db.session() as session:
        session.add(User(name="Kept", email="kept@example.com"))

    with pytest.raises(RuntimeError):
        with fresh_db.session() as session:
            session.add(User(name="Dropped", email="dropped@example.com"))
            session.flush()
            raise RuntimeError("abort")

    with fresh_db.session() as session:
        assert [u.name for u in session.query(User).all()] == ["Kept"]


def test_health_check(fresh_db):
    fresh_db.initialize("sqlite://")

    check = fresh_db.health_check()

    assert check["healthy"] is True
    assert check["error"] is None


def test_initialize_is_idempotent(fresh_db):
    fresh_db.initialize("sqlite://")
    engine = fresh_db.engine

    fresh_db.initialize("sqlite:///other.db")

    assert fresh_db.engine is engine
